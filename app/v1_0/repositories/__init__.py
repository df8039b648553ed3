from .base_repository import BaseRepository
from .product_repository import ProductRepository
from .user_repository import UserRepository
from .cart_repository import CartRepository
from .sale_repository import SaleRepository
from .sale_read_model_repository import (
    SaleReadModelRepository,
    build_summary_pipeline,
    sale_to_document,
)
from .paginated import list_paginated_filtered, normalize_page
__all__ = [
    "BaseRepository",
    "ProductRepository",
    "UserRepository",
    "CartRepository",
    "SaleRepository",
    "SaleReadModelRepository",
    "build_summary_pipeline",
    "sale_to_document",
    "list_paginated_filtered",
    "normalize_page",
]
