"""Seller product listings: commands, handler and catalog reads.

Only approved sellers list products, and only the owning seller edits one.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Decimal, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from bazaar.category.category import Category
from bazaar.domain import bazaar
from bazaar.product.product import Product
from bazaar.shared.exceptions import ForbiddenError, NotFoundError
from bazaar.user.accounts import is_approved_seller
from bazaar.user.user import User

logger = structlog.get_logger(__name__)


@bazaar.command(part_of="Product")
class ListProduct:
    seller_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True, max_length=200, sanitize=False)
    name_hindi: String(max_length=200, sanitize=False)
    description: Text(sanitize=False)
    description_hindi: Text(sanitize=False)
    price: Decimal(required=True, min_value=0)
    original_price: Decimal(min_value=0)
    image: String(max_length=500, sanitize=False)
    unit: String(max_length=20, sanitize=False)
    brand: String(max_length=100, sanitize=False)
    stock: Integer(default=0, min_value=0)
    min_order_qty: Integer(default=1, min_value=1)
    max_order_qty: Integer(default=100, min_value=1)


@bazaar.command(part_of="Product")
class UpdateProductPrice:
    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    price: Decimal(required=True, min_value=0)
    original_price: Decimal(min_value=0)


@bazaar.command(part_of="Product")
class RestockProduct:
    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@bazaar.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)


@bazaar.command_handler(part_of=Product)
class ProductListingHandler:
    @handle(ListProduct)
    def list_product(self, command):
        seller = current_domain.repository_for(User).get(command.seller_id)
        if not is_approved_seller(seller.account):
            raise ForbiddenError("Only approved sellers can list products")

        category = current_domain.repository_for(Category).get_or_none(command.category_id)
        if category is None or not category.is_active:
            raise ValidationError({"category_id": ["Unknown or inactive category"]})

        product = Product.create(
            seller_id=command.seller_id,
            category_id=command.category_id,
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            name_hindi=command.name_hindi,
            description=command.description,
            description_hindi=command.description_hindi,
            original_price=command.original_price,
            image=command.image,
            unit=command.unit,
            brand=command.brand,
            min_order_qty=command.min_order_qty or 1,
            max_order_qty=command.max_order_qty or 100,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_listed", product_id=str(product.id), seller_id=str(command.seller_id))
        return str(product.id)

    @handle(UpdateProductPrice)
    def update_price(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        product.change_price(command.price, command.original_price)
        repo.add(product)

    @handle(RestockProduct)
    def restock(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        product.restock(command.quantity)
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        product.deactivate()
        repo.add(product)


def _owned_product(repo, product_id, seller_id) -> Product:
    product = repo.get(product_id)
    if str(product.seller_id) != str(seller_id):
        raise ForbiddenError("Product belongs to another seller")
    return product


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def search_products(category_id=None, search=None) -> list[Product]:
    return current_domain.repository_for(Product).search(category_id=category_id, search=search)


def active_product(product_id) -> Product:
    """Return a product visible in the catalog or raise ``NotFoundError``."""
    product = current_domain.repository_for(Product).get_or_none(product_id)
    if product is None or not product.is_active:
        raise NotFoundError(f"Product {product_id} not found")
    return product
