from .product_router import router as product_router
from .user_router import router as user_router
from .cart_router import router as cart_router
from .sale_router import router as sale_router
defined_routers = [
    product_router,
    user_router,
    cart_router,
    sale_router,
    ]
