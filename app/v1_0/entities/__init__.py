from .page import PageDTO
from .product_DTO import ProductDTO, RatingDTO, ProductPageDTO
from .user_DTO import UserDTO, UserPageDTO
from .cart_DTO import CartDTO, CartItemDTO, CartPageDTO
from .sale_itemDTO import SaleItemDTO
from .sale_DTO import SaleDTO, SalePageDTO, BranchDailySummaryDTO


__all__ = [
    "PageDTO",
    "ProductDTO", "RatingDTO", "ProductPageDTO",
    "UserDTO", "UserPageDTO",
    "CartDTO", "CartItemDTO", "CartPageDTO",
    "SaleItemDTO",
    "SaleDTO", "SalePageDTO", "BranchDailySummaryDTO",
]
