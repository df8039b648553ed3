from typing import Optional, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import Sale, SaleItem
from app.v1_0.schemas import SaleListQuery
from app.v1_0.helper import wildcard_clause, range_clauses
from .base_repository import BaseRepository

class SaleRepository(BaseRepository[Sale]):
    order_columns = {
        "id": Sale.id,
        "number": Sale.number,
        "date": Sale.date,
        "customer_id": Sale.customer_id,
        "customer_name": Sale.customer_name,
        "branch_id": Sale.branch_id,
        "branch_name": Sale.branch_name,
        "total": Sale.total,
        "cancelled": Sale.cancelled,
    }

    def __init__(self) -> None:
        super().__init__(Sale)

    async def create_sale(self, sale: Sale, session: AsyncSession) -> Sale:
        """
        Adds the aggregate (with its items) and flushes to assign primary
        keys without committing.
        """
        await self.add(sale, session)
        return sale

    async def get_sale_by_id(
        self,
        sale_id: int,
        session: AsyncSession,
        *,
        for_update: bool = False,
    ) -> Optional[Sale]:
        return await super().get_by_id(sale_id, session, for_update=for_update)

    async def number_exists(
        self,
        number: str,
        session: AsyncSession,
        *,
        exclude_id: Optional[int] = None,
    ) -> bool:
        stmt = select(Sale.id).where(Sale.number == number)
        if exclude_id is not None:
            stmt = stmt.where(Sale.id != exclude_id)
        return (await session.scalar(stmt.limit(1))) is not None

    async def replace_items(self, sale: Sale, items: List[SaleItem], session: AsyncSession) -> Sale:
        # delete-orphan elimina los items anteriores en el flush
        sale.items = items
        await session.flush()
        return sale

    async def list_sales(
        self,
        query: SaleListQuery,
        *,
        page: int,
        size: int,
        session: AsyncSession,
    ) -> Tuple[List[Sale], int]:
        filters = [
            c for c in (
                wildcard_clause(Sale.customer_name, query.customer),
                wildcard_clause(Sale.branch_name, query.branch),
            ) if c is not None
        ]
        filters += range_clauses(Sale.date, query.date_from, query.date_to)
        filters += range_clauses(Sale.total, query.min_total, query.max_total)
        if query.cancelled is not None:
            filters.append(Sale.cancelled == query.cancelled)

        return await self.list_filtered(
            session, page=page, size=size, filters=filters, order=query.order
        )
