from .base import Base
from .product import Product
from .users import User, UserRole, UserStatus
from .cart import Cart, CartItem
from .sale_item import SaleItem
from .sale import Sale
__all__ = [
    "Base",
    "Product",
    "User",
    "UserRole",
    "UserStatus",
    "Cart",
    "CartItem",
    "SaleItem",
    "Sale",
]
