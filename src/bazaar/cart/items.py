"""Cart line management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from bazaar.cart.cart import Cart
from bazaar.domain import bazaar
from bazaar.product.product import Product
from bazaar.shared.exceptions import NotFoundError


@bazaar.command(part_of="Cart")
class AddToCart:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    session_id: String(max_length=255)


@bazaar.command(part_of="Cart")
class UpdateCartItem:
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    quantity: Integer(required=True)


@bazaar.command(part_of="Cart")
class RemoveFromCart:
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)


@bazaar.command(part_of="Cart")
class ClearCart:
    user_id: Identifier(required=True)


@bazaar.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get_or_none(command.product_id)
        if product is None:
            raise ValidationError({"product_id": ["Product does not exist"]})
        product.ensure_available()

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_none(command.user_id) or Cart.for_user(command.user_id)
        line = cart.add_item(product, command.quantity, session_id=command.session_id)
        repo.add(cart)
        return str(line.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        line = cart.item(command.item_id)

        product = current_domain.repository_for(Product).get(line.product_id)
        cart.update_item(command.item_id, command.quantity, product)
        repo.add(cart)
        return str(line.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_none(command.user_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)


def _existing_cart(repo, user_id) -> Cart:
    # No cart means no item either
    cart = repo.get_or_none(user_id)
    if cart is None:
        raise NotFoundError("Cart item not found")
    return cart
