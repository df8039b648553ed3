from typing import Any, Optional, Sequence, Tuple, Type, TypeVar, Generic, Protocol, runtime_checkable
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from .paginated import list_paginated_filtered, WhereExpr

# --- los modelos deben exponer .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # columna PK

ModelT = TypeVar("ModelT", bound=HasId)


class BaseRepository(Generic[ModelT]):
    # clave de orden aceptada (_order) -> columna
    order_columns: dict[str, Any] = {}

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        # IntegrityError sube tal cual; el rollback lo hace quien abrio la transaccion
        session.add(entity)
        await session.flush([entity])
        return entity

    async def get_by_id(
        self,
        id_: Any,
        session: AsyncSession,
        *,
        options: Sequence[Any] | None = None,
        for_update: bool = False,
    ) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        if for_update:
            stmt = stmt.with_for_update()
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list_filtered(
        self,
        session: AsyncSession,
        *,
        page: int,
        size: int,
        filters: Sequence[WhereExpr] = (),
        order: Optional[str] = None,
        options: Sequence[Any] = (),
    ) -> Tuple[list[ModelT], int]:
        return await list_paginated_filtered(
            session=session,
            model=self.model,
            id_col=self.model.id,
            page=page,
            size=size,
            base_filters=filters,
            order=order,
            order_columns=self.order_columns,
            eager=options,
        )

    async def update_fields(
        self,
        entity: ModelT,
        data: dict[str, Any],
        session: AsyncSession,
        *,
        allow: set[str] | None = None,
        deny: set[str] | None = None,
    ) -> ModelT:
        for k, v in data.items():
            if allow and k not in allow:
                continue
            if deny and k in deny:
                continue
            setattr(entity, k, v)
        await session.flush([entity])
        return entity

    async def delete(self, entity: ModelT, session: AsyncSession) -> None:
        await session.delete(entity)
        await session.flush()

    async def delete_by_id(self, id_: Any, session: AsyncSession) -> int:
        obj = await self.get_by_id(id_, session)
        if not obj:
            return 0
        await session.delete(obj)
        await session.flush()
        return 1
