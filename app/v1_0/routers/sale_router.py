import datetime as dt
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.errors import AppError, NotFoundError
from app.core.security.deps import AuthContext, get_auth_context
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.entities import SaleDTO, SalePageDTO, BranchDailySummaryDTO
from app.v1_0.schemas import SaleCreate, SaleUpdate, SaleListQuery
from app.v1_0.services import SaleService
router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post(
    "",
    response_model=SaleDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a sale",
)
@inject
async def create_sale(
    payload: SaleCreate,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: SaleService = Depends(
        Provide[ApplicationContainer.api_container.sale_service]
    ),
):
    logger.info(
        "[SaleRouter] create_sale number=%s items=%s",
        payload.number,
        len(payload.items),
    )
    try:
        return await service.create(payload, auth_ctx, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[SaleRouter] create_sale error: {e}", exc_info=True)
        raise AppError("Failed to create sale")


@router.get(
    "/summary",
    response_model=List[BranchDailySummaryDTO],
    summary="Sales totals per branch and day (read model)",
)
@inject
async def sales_summary(
    date_from: Optional[dt.date] = Query(None, alias="from"),
    date_to: Optional[dt.date] = Query(None, alias="to"),
    service: SaleService = Depends(Provide[ApplicationContainer.api_container.sale_service]),
):
    logger.debug(f"[SaleRouter] sales_summary from={date_from} to={date_to}")
    return await service.summary(date_from, date_to)


@router.get(
    "/{sale_id}",
    response_model=SaleDTO,
    summary="Get a sale by ID",
)
@inject
async def get_sale(
    sale_id: int,
    db: AsyncSession = Depends(get_db),
    service: SaleService = Depends(Provide[ApplicationContainer.api_container.sale_service]),
):
    logger.debug(f"[SaleRouter] get_sale id={sale_id}")
    try:
        sale = await service.get(sale_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[SaleRouter] get_sale error: {e}", exc_info=True)
        raise AppError("Failed to fetch sale")
    if sale is None:
        raise NotFoundError("Sale not found", detail=sale_id)
    return sale


@router.get(
    "",
    response_model=SalePageDTO,
    summary="List sales (paginated, filtered, ordered)",
)
@inject
async def list_sales(
    page: int = Query(1, alias="_page"),
    size: int = Query(10, alias="_size"),
    order: Optional[str] = Query(None, alias="_order"),
    date_from: Optional[dt.date] = Query(None, alias="from"),
    date_to: Optional[dt.date] = Query(None, alias="to"),
    customer: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
    min_total: Optional[Decimal] = Query(None, alias="_minTotal"),
    max_total: Optional[Decimal] = Query(None, alias="_maxTotal"),
    cancelled: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    service: SaleService = Depends(Provide[ApplicationContainer.api_container.sale_service]),
):
    logger.debug(f"[SaleRouter] list_sales page={page} size={size} order={order}")
    query = SaleListQuery(
        page=page,
        size=size,
        order=order,
        date_from=date_from,
        date_to=date_to,
        customer=customer,
        branch=branch,
        min_total=min_total,
        max_total=max_total,
        cancelled=cancelled,
    )
    try:
        return await service.list(query, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[SaleRouter] list_sales error: {e}", exc_info=True)
        raise AppError("Failed to list sales")


@router.put(
    "/{sale_id}",
    response_model=SaleDTO,
    summary="Replace a sale and its items",
)
@inject
async def update_sale(
    sale_id: int,
    payload: SaleUpdate,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: SaleService = Depends(Provide[ApplicationContainer.api_container.sale_service]),
):
    logger.info(f"[SaleRouter] update_sale id={sale_id}")
    return await service.update(sale_id, payload, auth_ctx, db)


@router.post(
    "/{sale_id}/cancel",
    response_model=SaleDTO,
    summary="Cancel a sale",
)
@inject
async def cancel_sale(
    sale_id: int,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: SaleService = Depends(Provide[ApplicationContainer.api_container.sale_service]),
):
    logger.info(f"[SaleRouter] cancel_sale id={sale_id}")
    return await service.cancel(sale_id, auth_ctx, db)


@router.post(
    "/{sale_id}/items/{item_id}/cancel",
    response_model=SaleDTO,
    summary="Cancel one item of a sale",
)
@inject
async def cancel_sale_item(
    sale_id: int,
    item_id: int,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    service: SaleService = Depends(Provide[ApplicationContainer.api_container.sale_service]),
):
    logger.info(f"[SaleRouter] cancel_sale_item sale_id={sale_id} item_id={item_id}")
    return await service.cancel_item(sale_id, item_id, auth_ctx, db)
