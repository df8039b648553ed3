from .base import CamelModel, ListQuery, Money
from .product_schema import ProductUpsert, ProductRating, ProductListQuery
from .user_schema import (
    UserCreate,
    UserUpdate,
    UserName,
    UserAddress,
    UserGeolocation,
    UserListQuery,
)
from .cart_schema import CartItemInput, CartUpsert, CartListQuery
from .sale_schema import SaleItemInput, SaleCreate, SaleUpdate, SaleListQuery

__all__ = [
    "CamelModel",
    "ListQuery",
    "Money",
    "ProductUpsert",
    "ProductRating",
    "ProductListQuery",
    "UserCreate",
    "UserUpdate",
    "UserName",
    "UserAddress",
    "UserGeolocation",
    "UserListQuery",
    "CartItemInput",
    "CartUpsert",
    "CartListQuery",
    "SaleItemInput",
    "SaleCreate",
    "SaleUpdate",
    "SaleListQuery",
]
