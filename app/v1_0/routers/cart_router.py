from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.security.deps import AuthContext, get_auth_context, require_roles
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.entities import CartDTO, CartPageDTO
from app.v1_0.models import UserRole
from app.v1_0.schemas import CartUpsert, CartListQuery
from app.v1_0.services import CartService

router = APIRouter(prefix="/carts", tags=["Carts"])


@router.get("", response_model=CartPageDTO, summary="List carts")
@inject
async def list_carts(
    page: int = Query(1, alias="_page"),
    size: int = Query(10, alias="_size"),
    order: Optional[str] = Query(None, alias="_order"),
    db: AsyncSession = Depends(get_db),
    service: CartService = Depends(Provide[ApplicationContainer.api_container.cart_service]),
):
    return await service.list(CartListQuery(page=page, size=size, order=order), db)


@router.get("/{cart_id}", response_model=CartDTO, summary="Get a cart by ID")
@inject
async def get_cart(
    cart_id: int,
    db: AsyncSession = Depends(get_db),
    service: CartService = Depends(Provide[ApplicationContainer.api_container.cart_service]),
):
    return await service.get(cart_id, db)


@router.post(
    "",
    response_model=CartDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a cart",
)
@inject
async def create_cart(
    payload: CartUpsert,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: CartService = Depends(Provide[ApplicationContainer.api_container.cart_service]),
):
    logger.info(f"[CartRouter] create_cart user_id={payload.user_id} by user={auth_ctx.user_id}")
    return await service.create(payload, db)


@router.put("/{cart_id}", response_model=CartDTO, summary="Replace a cart")
@inject
async def update_cart(
    cart_id: int,
    payload: CartUpsert,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: CartService = Depends(Provide[ApplicationContainer.api_container.cart_service]),
):
    logger.info(f"[CartRouter] update_cart id={cart_id} by user={auth_ctx.user_id}")
    return await service.update(cart_id, payload, db)


@router.delete("/{cart_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a cart")
@inject
async def delete_cart(
    cart_id: int,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
    service: CartService = Depends(Provide[ApplicationContainer.api_container.cart_service]),
):
    logger.info(f"[CartRouter] delete_cart id={cart_id} by user={auth_ctx.user_id}")
    await service.delete(cart_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
