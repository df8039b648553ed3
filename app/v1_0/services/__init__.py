from .product_service import ProductService
from .user_service import UserService
from .cart_service import CartService
from .sale_service import SaleService
__all__=[
    "ProductService",
    "UserService",
    "CartService",
    "SaleService",
    ]
