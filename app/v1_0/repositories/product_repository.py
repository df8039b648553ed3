from typing import Optional, List, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import Product
from app.v1_0.schemas import ProductUpsert, ProductListQuery
from app.v1_0.helper import wildcard_clause, range_clauses
from .base_repository import BaseRepository

class ProductRepository(BaseRepository[Product]):
    order_columns = {
        "id": Product.id,
        "title": Product.title,
        "price": Product.price,
        "description": Product.description,
        "category": Product.category,
        "image": Product.image,
        "rate": Product.rate,
        "count": Product.count,
    }

    def __init__(self) -> None:
        super().__init__(Product)

    @staticmethod
    def _columns(payload: ProductUpsert) -> dict:
        return {
            "title": payload.title,
            "price": payload.price,
            "description": payload.description,
            "category": payload.category,
            "image": payload.image,
            "rate": payload.rating.rate,
            "count": payload.rating.count,
        }

    async def create_product(
        self,
        payload: ProductUpsert,
        session: AsyncSession
    ) -> Product:
        entity = Product(**self._columns(payload))
        await self.add(entity, session)
        return entity

    async def get_product_by_id(
        self,
        product_id: int,
        session: AsyncSession
    ) -> Optional[Product]:
        return await super().get_by_id(product_id, session)

    async def update_product(
        self,
        product_id: int,
        payload: ProductUpsert,
        session: AsyncSession
    ) -> Optional[Product]:
        entity = await self.get_product_by_id(product_id, session)
        if not entity:
            return None
        await self.update_fields(entity, self._columns(payload), session)
        return entity

    async def delete_product(
        self,
        product_id: int,
        session: AsyncSession
    ) -> bool:
        return bool(await self.delete_by_id(product_id, session))

    async def existing_ids(self, ids: List[int], session: AsyncSession) -> set[int]:
        if not ids:
            return set()
        res = await session.execute(select(Product.id).where(Product.id.in_(set(ids))))
        return set(res.scalars().all())

    async def list_products(
        self,
        query: ProductListQuery,
        *,
        page: int,
        size: int,
        session: AsyncSession,
        category_exact: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        filters = [
            c for c in (
                wildcard_clause(Product.title, query.title),
                wildcard_clause(Product.category, query.category),
            ) if c is not None
        ]
        filters += range_clauses(Product.price, query.min_price, query.max_price)
        filters += range_clauses(Product.rate, query.min_rate, query.max_rate)
        if category_exact is not None:
            filters.append(func.lower(Product.category) == category_exact.lower())

        return await self.list_filtered(
            session, page=page, size=size, filters=filters, order=query.order
        )

    async def list_categories(self, session: AsyncSession) -> List[str]:
        stmt = select(Product.category).distinct().order_by(Product.category.asc())
        res = await session.execute(stmt)
        return list(res.scalars().all())
