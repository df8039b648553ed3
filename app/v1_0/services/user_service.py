from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import generate_password_hash

from app.core.errors import AppError, ConflictError, NotFoundError
from app.core.logger import logger
from app.utils.tx import commit_scope
from app.v1_0.entities import UserDTO, UserPageDTO
from app.v1_0.models import User
from app.v1_0.repositories import UserRepository, normalize_page
from app.v1_0.schemas import (
    UserCreate,
    UserUpdate,
    UserListQuery,
    UserName,
    UserAddress,
    UserGeolocation,
)

class UserService:
    def __init__(
        self,
        user_repository: UserRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self.user_repo = user_repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @staticmethod
    def _to_dto(u: User) -> UserDTO:
        return UserDTO(
            id=u.id,
            email=u.email,
            username=u.username,
            name=UserName(firstname=u.firstname, lastname=u.lastname),
            address=UserAddress(
                city=u.city,
                street=u.street,
                number=u.number,
                zipcode=u.zipcode,
                geolocation=UserGeolocation(lat=u.lat, long=u.long),
            ),
            phone=u.phone,
            status=u.status,
            role=u.role,
        )

    @staticmethod
    def _columns(payload: UserCreate | UserUpdate) -> dict:
        data = {
            "email": str(payload.email),
            "username": payload.username,
            "firstname": payload.name.firstname,
            "lastname": payload.name.lastname,
            "city": payload.address.city,
            "street": payload.address.street,
            "number": payload.address.number,
            "zipcode": payload.address.zipcode,
            "lat": payload.address.geolocation.lat,
            "long": payload.address.geolocation.long,
            "phone": payload.phone,
            "status": payload.status,
            "role": payload.role,
        }
        # sin password en el update se conserva el hash actual
        if payload.password:
            data["password_hash"] = generate_password_hash(payload.password, method="scrypt")
        return data

    async def _ensure_free(
        self,
        payload: UserCreate | UserUpdate,
        db: AsyncSession,
        exclude_id: Optional[int] = None,
    ) -> None:
        taken = await self.user_repo.find_taken(
            db, username=payload.username, email=str(payload.email), exclude_id=exclude_id
        )
        if taken:
            field = "username" if taken.username == payload.username else "email"
            raise ConflictError(f"User with this {field} already exists", detail=field)

    async def create(self, payload: UserCreate, db: AsyncSession) -> UserDTO:
        logger.info("[UserService] Creating user username=%s", payload.username)
        try:
            async with commit_scope(db):
                await self._ensure_free(payload, db)
                u = await self.user_repo.create_user(self._columns(payload), db)
        except HTTPException:
            raise
        except IntegrityError:
            raise ConflictError("User with this username or email already exists")
        except Exception as e:
            logger.error("[UserService] Create failed: %s", e, exc_info=True)
            raise AppError("Failed to create user")
        logger.info("[UserService] User created ID=%s", u.id)
        return self._to_dto(u)

    async def get(self, user_id: int, db: AsyncSession) -> UserDTO:
        logger.debug(f"[UserService] Get user ID={user_id}")
        u = await self.user_repo.get_user_by_id(user_id, db)
        if not u:
            raise NotFoundError("User not found", detail=user_id)
        return self._to_dto(u)

    async def update(self, user_id: int, payload: UserUpdate, db: AsyncSession) -> UserDTO:
        logger.info("[UserService] Updating user ID=%s", user_id)
        try:
            async with commit_scope(db):
                if not await self.user_repo.get_user_by_id(user_id, db):
                    raise NotFoundError("User not found", detail=user_id)
                await self._ensure_free(payload, db, exclude_id=user_id)
                u = await self.user_repo.update_user(user_id, self._columns(payload), db)
        except HTTPException:
            raise
        except IntegrityError:
            raise ConflictError("User with this username or email already exists")
        except Exception as e:
            logger.error(f"[UserService] Update failed ID={user_id}: {e}", exc_info=True)
            raise AppError("Failed to update user")
        return self._to_dto(u)

    async def delete(self, user_id: int, db: AsyncSession) -> None:
        logger.info("[UserService] Deleting user ID=%s", user_id)
        try:
            async with commit_scope(db):
                if not await self.user_repo.delete_user(user_id, db):
                    raise NotFoundError("User not found", detail=user_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"[UserService] Delete failed ID={user_id}: {e}", exc_info=True)
            raise AppError("Failed to delete user")

    async def list(self, query: UserListQuery, db: AsyncSession) -> UserPageDTO:
        page, size = normalize_page(
            query.page,
            query.size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        rows, total = await self.user_repo.list_users(query, page=page, size=size, session=db)
        return UserPageDTO.build(
            [self._to_dto(u) for u in rows],
            total_items=total,
            page=page,
            size=size,
        )
