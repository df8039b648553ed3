from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.core.security.deps import AuthContext, require_roles
from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.entities import ProductDTO, ProductPageDTO
from app.v1_0.models import UserRole
from app.v1_0.schemas import ProductUpsert, ProductListQuery
from app.v1_0.services import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

_writers = require_roles(UserRole.ADMIN, UserRole.MANAGER)


def product_list_query(
    page: int = Query(1, alias="_page"),
    size: int = Query(10, alias="_size"),
    order: Optional[str] = Query(None, alias="_order"),
    title: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, alias="_minPrice"),
    max_price: Optional[float] = Query(None, alias="_maxPrice"),
    min_rate: Optional[float] = Query(None, alias="_minRate"),
    max_rate: Optional[float] = Query(None, alias="_maxRate"),
) -> ProductListQuery:
    return ProductListQuery(
        page=page,
        size=size,
        order=order,
        title=title,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_rate=min_rate,
        max_rate=max_rate,
    )


@router.get("", response_model=ProductPageDTO, summary="List products")
@inject
async def list_products(
    query: ProductListQuery = Depends(product_list_query),
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    logger.debug(f"[ProductRouter] list_products page={query.page} order={query.order}")
    return await service.list(query, db)


@router.get("/categories", response_model=List[str], summary="Distinct product categories")
@inject
async def list_categories(
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    return await service.categories(db)


@router.get("/category/{category_name}", response_model=ProductPageDTO, summary="List products of a category")
@inject
async def list_products_by_category(
    category_name: str,
    query: ProductListQuery = Depends(product_list_query),
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    return await service.list_by_category(category_name, query, db)


@router.get("/{product_id}", response_model=ProductDTO, summary="Get a product by ID")
@inject
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    return await service.get(product_id, db)


@router.post(
    "",
    response_model=ProductDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
@inject
async def create_product(
    payload: ProductUpsert,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(_writers),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    logger.info(f"[ProductRouter] create_product by user={auth_ctx.user_id}")
    return await service.create(payload, db)


@router.put("/{product_id}", response_model=ProductDTO, summary="Replace a product")
@inject
async def update_product(
    product_id: int,
    payload: ProductUpsert,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(_writers),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    logger.info(f"[ProductRouter] update_product id={product_id} by user={auth_ctx.user_id}")
    return await service.update(product_id, payload, db)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a product")
@inject
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(_writers),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    logger.info(f"[ProductRouter] delete_product id={product_id} by user={auth_ctx.user_id}")
    await service.delete(product_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
