from typing import Any, Mapping, Optional, Sequence, Tuple, Type, TypeVar
from sqlalchemy import select, func
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.helper import apply_order_to_query

ModelT = TypeVar("ModelT")

WhereExpr = ColumnElement[bool]

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def normalize_page(
    page: Optional[int],
    size: Optional[int],
    *,
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = MAX_PAGE_SIZE,
) -> Tuple[int, int]:
    """_page < 1 -> 1; _size < 1 -> default; _size > max -> max."""
    page = page if page and page >= 1 else 1
    if not size or size < 1:
        size = default_size
    return page, min(size, max_size)


async def list_paginated_filtered(
    *,
    session: AsyncSession,
    model: Type[ModelT],
    id_col,
    page: int,
    size: int,
    base_filters: Sequence[WhereExpr] = (),
    order: Optional[str] = None,
    order_columns: Mapping[str, Any] = {},
    eager: Sequence = (),
) -> Tuple[list[ModelT], int]:
    """
    One page of `model` rows matching every filter, plus the filtered total.

    `page`/`size` must already be normalized. The requested order is applied
    first and `id ASC` is always appended so page boundaries are stable.
    """
    total_rows = await session.scalar(
        select(func.count()).select_from(model).where(*base_filters)
    ) or 0

    stmt = select(model).options(*eager).where(*base_filters)
    stmt = apply_order_to_query(stmt, order, order_columns)
    stmt = stmt.order_by(id_col.asc()).offset((page - 1) * size).limit(size)

    rows = (await session.execute(stmt)).scalars().all()
    return list(rows), int(total_rows)
