"""Catalog endpoints: categories, product browsing and seller listings."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from bazaar.api.dependencies import require_admin, require_approved_seller
from bazaar.api.schemas import (
    CategoryResponse,
    CreateCategoryRequest,
    ListProductRequest,
    ProductResponse,
    RestockRequest,
    UpdatePriceRequest,
)
from bazaar.category.category import Category
from bazaar.category.management import CreateCategory, active_categories
from bazaar.product.listing import (
    DeactivateProduct,
    ListProduct,
    RestockProduct,
    UpdateProductPrice,
    active_product,
    search_products,
)
from bazaar.product.product import Product
from bazaar.user.user import User

category_router = APIRouter(prefix="/categories", tags=["catalog"])
product_router = APIRouter(prefix="/products", tags=["catalog"])
seller_product_router = APIRouter(prefix="/seller/products", tags=["catalog"])


# --- Categories ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(c) for c in active_categories()]


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest, admin: User = Depends(require_admin)):
    command = CreateCategory(
        name=body.name,
        name_hindi=body.name_hindi,
        slug=body.slug,
        description=body.description,
        image=body.image,
        sort_order=body.sort_order,
    )
    category_id = current_domain.process(command, asynchronous=False)
    category = current_domain.repository_for(Category).get(category_id)
    return JSONResponse(status_code=201, content=CategoryResponse.from_category(category).model_dump(mode="json"))


# --- Browsing ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category_id: str | None = None, search: str | None = None) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in search_products(category_id=category_id, search=search)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(active_product(product_id))


# --- Seller listings ---


@seller_product_router.get("", response_model=list[ProductResponse])
async def my_products(seller: User = Depends(require_approved_seller)) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).by_seller(str(seller.id))
    return [ProductResponse.from_product(p) for p in products]


@seller_product_router.post("", status_code=201, response_model=ProductResponse)
async def list_product(body: ListProductRequest, seller: User = Depends(require_approved_seller)):
    command = ListProduct(
        seller_id=str(seller.id),
        category_id=body.category_id,
        name=body.name,
        name_hindi=body.name_hindi,
        description=body.description,
        description_hindi=body.description_hindi,
        price=body.price,
        original_price=body.original_price,
        image=body.image,
        unit=body.unit,
        brand=body.brand,
        stock=body.stock,
        min_order_qty=body.min_order_qty,
        max_order_qty=body.max_order_qty,
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return JSONResponse(status_code=201, content=ProductResponse.from_product(product).model_dump(mode="json"))


@seller_product_router.patch("/{product_id}/price", response_model=ProductResponse)
async def update_price(
    product_id: str, body: UpdatePriceRequest, seller: User = Depends(require_approved_seller)
) -> ProductResponse:
    command = UpdateProductPrice(
        product_id=product_id,
        seller_id=str(seller.id),
        price=body.price,
        original_price=body.original_price,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@seller_product_router.patch("/{product_id}/stock", response_model=ProductResponse)
async def restock(product_id: str, body: RestockRequest, seller: User = Depends(require_approved_seller)) -> ProductResponse:
    command = RestockProduct(product_id=product_id, seller_id=str(seller.id), quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@seller_product_router.post("/{product_id}/deactivate", response_model=ProductResponse)
async def deactivate(product_id: str, seller: User = Depends(require_approved_seller)) -> ProductResponse:
    command = DeactivateProduct(product_id=product_id, seller_id=str(seller.id))
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))
