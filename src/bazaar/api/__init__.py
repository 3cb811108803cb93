from bazaar.api.cart import router as cart_router
from bazaar.api.catalog import category_router, product_router, seller_product_router
from bazaar.api.delivery import router as delivery_router
from bazaar.api.orders import router as order_router
from bazaar.api.promotions import router as promotion_router
from bazaar.api.reviews import router as review_router
from bazaar.api.sellers import router as seller_router
from bazaar.api.users import router as user_router

routers = [
    user_router,
    category_router,
    product_router,
    seller_product_router,
    cart_router,
    order_router,
    seller_router,
    delivery_router,
    promotion_router,
    review_router,
]

__all__ = ["routers"]
