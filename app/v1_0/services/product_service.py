from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AppError, ConflictError, NotFoundError
from app.core.logger import logger
from app.utils.tx import commit_scope
from app.v1_0.entities import ProductDTO, ProductPageDTO, RatingDTO
from app.v1_0.models import Product
from app.v1_0.repositories import ProductRepository, normalize_page
from app.v1_0.schemas import ProductUpsert, ProductListQuery

class ProductService:
    def __init__(
        self,
        product_repository: ProductRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self.product_repository = product_repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @staticmethod
    def _to_dto(p: Product) -> ProductDTO:
        return ProductDTO(
            id=p.id,
            title=p.title,
            price=p.price,
            description=p.description,
            category=p.category,
            image=p.image,
            rating=RatingDTO(rate=p.rate, count=p.count),
        )

    async def _require(self, product_id: int, db: AsyncSession) -> Product:
        """
        Ensure that a product exists or raise NotFound.

        Args:
            product_id: Identifier of the product to fetch.
            db: Active async database session.

        Returns:
            The ORM product entity if found.
        """
        p = await self.product_repository.get_product_by_id(product_id, db)
        if not p:
            raise NotFoundError("Product not found", detail=product_id)
        return p

    async def create(self, payload: ProductUpsert, db: AsyncSession) -> ProductDTO:
        logger.info("[ProductService] Creating product: %s", payload.title)
        try:
            async with commit_scope(db):
                p = await self.product_repository.create_product(payload, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[ProductService] Create failed: %s", e, exc_info=True)
            raise AppError("Failed to create product")

        logger.info("[ProductService] Product created ID=%s", p.id)
        return self._to_dto(p)

    async def get(self, product_id: int, db: AsyncSession) -> ProductDTO:
        logger.debug(f"[ProductService] Get product ID={product_id}")
        return self._to_dto(await self._require(product_id, db))

    async def update(self, product_id: int, payload: ProductUpsert, db: AsyncSession) -> ProductDTO:
        """
        Full replace of a product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        logger.info("[ProductService] Updating product ID=%s", product_id)
        try:
            async with commit_scope(db):
                p = await self.product_repository.update_product(product_id, payload, db)
                if not p:
                    raise NotFoundError("Product not found", detail=product_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"[ProductService] Update failed ID={product_id}: {e}", exc_info=True)
            raise AppError("Failed to update product")
        return self._to_dto(p)

    async def delete(self, product_id: int, db: AsyncSession) -> None:
        logger.info("[ProductService] Deleting product ID=%s", product_id)
        try:
            async with commit_scope(db):
                if not await self.product_repository.delete_product(product_id, db):
                    raise NotFoundError("Product not found", detail=product_id)
        except HTTPException:
            raise
        except IntegrityError:
            raise ConflictError("Product is referenced by a cart", detail=product_id)
        except Exception as e:
            logger.error(f"[ProductService] Delete failed ID={product_id}: {e}", exc_info=True)
            raise AppError("Failed to delete product")

    async def list(self, query: ProductListQuery, db: AsyncSession) -> ProductPageDTO:
        """
        Filtered, ordered page of products.

        Args:
            query: _page/_size/_order plus title, category (wildcards) and
                price/rate ranges.
            db: Active async database session.

        Returns:
            ProductPageDTO envelope.
        """
        return await self._page(query, db)

    async def list_by_category(
        self, category: str, query: ProductListQuery, db: AsyncSession
    ) -> ProductPageDTO:
        logger.debug("[ProductService] List products of category=%s", category)
        return await self._page(query, db, category_exact=category)

    async def _page(self, query: ProductListQuery, db: AsyncSession, **extra) -> ProductPageDTO:
        page, size = normalize_page(
            query.page,
            query.size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        rows, total = await self.product_repository.list_products(
            query, page=page, size=size, session=db, **extra
        )
        return ProductPageDTO.build(
            [self._to_dto(p) for p in rows],
            total_items=total,
            page=page,
            size=size,
        )

    async def categories(self, db: AsyncSession) -> List[str]:
        logger.debug("[ProductService] List categories")
        return await self.product_repository.list_categories(db)
