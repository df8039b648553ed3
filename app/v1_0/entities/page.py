import math
from typing import Generic, List, TypeVar

from app.v1_0.schemas.base import CamelModel

T = TypeVar("T")

class PageDTO(CamelModel, Generic[T]):
    """Generic pagination envelope: {data, totalItems, currentPage, totalPages}."""
    data: List[T]
    total_items: int
    current_page: int
    total_pages: int

    @classmethod
    def build(cls, data: List[T], *, total_items: int, page: int, size: int) -> "PageDTO[T]":
        return cls(
            data=data,
            total_items=total_items,
            current_page=page,
            total_pages=math.ceil(total_items / size) if size else 0,
        )
