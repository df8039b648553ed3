from typing import Optional, List, Tuple

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import User
from app.v1_0.schemas import UserListQuery
from app.v1_0.helper import wildcard_clause
from .base_repository import BaseRepository

class UserRepository(BaseRepository[User]):
    order_columns = {
        "id": User.id,
        "email": User.email,
        "username": User.username,
        "firstname": User.firstname,
        "lastname": User.lastname,
        "city": User.city,
        "phone": User.phone,
        "status": User.status,
        "role": User.role,
    }

    def __init__(self) -> None:
        super().__init__(User)

    async def get_user_by_id(self, user_id: int, session: AsyncSession) -> Optional[User]:
        return await super().get_by_id(user_id, session)

    async def find_taken(
        self,
        session: AsyncSession,
        *,
        username: str,
        email: str,
        exclude_id: Optional[int] = None,
    ) -> Optional[User]:
        """Otro usuario con el mismo username o email, si existe."""
        stmt = select(User).where(or_(User.username == username, User.email == email))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        res = await session.execute(stmt.limit(1))
        return res.scalars().first()

    async def create_user(self, data: dict, session: AsyncSession) -> User:
        entity = User(**data)
        await self.add(entity, session)
        return entity

    async def update_user(self, user_id: int, data: dict, session: AsyncSession) -> Optional[User]:
        entity = await self.get_user_by_id(user_id, session)
        if not entity:
            return None
        await self.update_fields(entity, data, session, deny={"id"})
        return entity

    async def delete_user(self, user_id: int, session: AsyncSession) -> bool:
        return bool(await self.delete_by_id(user_id, session))

    async def list_users(
        self,
        query: UserListQuery,
        *,
        page: int,
        size: int,
        session: AsyncSession,
    ) -> Tuple[List[User], int]:
        filters = [
            c for c in (
                wildcard_clause(User.username, query.username),
                wildcard_clause(User.email, query.email),
                wildcard_clause(User.firstname, query.firstname),
                wildcard_clause(User.lastname, query.lastname),
                wildcard_clause(User.city, query.city),
            ) if c is not None
        ]
        if query.status is not None:
            filters.append(User.status == query.status)
        if query.role is not None:
            filters.append(User.role == query.role)

        return await self.list_filtered(
            session, page=page, size=size, filters=filters, order=query.order
        )
