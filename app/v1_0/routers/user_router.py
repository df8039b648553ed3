from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.security.deps import AuthContext, require_roles
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.entities import UserDTO, UserPageDTO
from app.v1_0.models import UserRole, UserStatus
from app.v1_0.schemas import UserCreate, UserUpdate, UserListQuery
from app.v1_0.services import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserPageDTO, summary="List users")
@inject
async def list_users(
    page: int = Query(1, alias="_page"),
    size: int = Query(10, alias="_size"),
    order: Optional[str] = Query(None, alias="_order"),
    username: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    firstname: Optional[str] = Query(None),
    lastname: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    user_status: Optional[UserStatus] = Query(None, alias="status"),
    role: Optional[UserRole] = Query(None),
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(Provide[ApplicationContainer.api_container.user_service]),
):
    logger.debug(f"[UserRouter] list_users page={page} size={size} order={order}")
    query = UserListQuery(
        page=page,
        size=size,
        order=order,
        username=username,
        email=email,
        firstname=firstname,
        lastname=lastname,
        city=city,
        status=user_status,
        role=role,
    )
    return await service.list(query, db)


@router.get("/{user_id}", response_model=UserDTO, summary="Get a user by ID")
@inject
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(Provide[ApplicationContainer.api_container.user_service]),
):
    return await service.get(user_id, db)


@router.post(
    "",
    response_model=UserDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
@inject
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
    service: UserService = Depends(Provide[ApplicationContainer.api_container.user_service]),
):
    logger.info(f"[UserRouter] create_user username={payload.username} by user={auth_ctx.user_id}")
    return await service.create(payload, db)


@router.put("/{user_id}", response_model=UserDTO, summary="Replace a user")
@inject
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
    service: UserService = Depends(Provide[ApplicationContainer.api_container.user_service]),
):
    logger.info(f"[UserRouter] update_user id={user_id} by user={auth_ctx.user_id}")
    return await service.update(user_id, payload, db)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user")
@inject
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_roles(UserRole.ADMIN)),
    service: UserService = Depends(Provide[ApplicationContainer.api_container.user_service]),
):
    logger.info(f"[UserRouter] delete_user id={user_id} by user={auth_ctx.user_id}")
    await service.delete(user_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
