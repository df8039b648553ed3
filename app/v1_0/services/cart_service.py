from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AppError, NotFoundError, ValidationError
from app.core.logger import logger
from app.utils.tx import commit_scope
from app.v1_0.entities import CartDTO, CartItemDTO, CartPageDTO
from app.v1_0.models import Cart
from app.v1_0.repositories import CartRepository, ProductRepository, UserRepository, normalize_page
from app.v1_0.schemas import CartUpsert, CartListQuery

class CartService:
    def __init__(
        self,
        cart_repository: CartRepository,
        user_repository: UserRepository,
        product_repository: ProductRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self.cart_repository = cart_repository
        self.user_repository = user_repository
        self.product_repository = product_repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @staticmethod
    def _to_dto(c: Cart) -> CartDTO:
        return CartDTO(
            id=c.id,
            user_id=c.user_id,
            date=c.date,
            products=[CartItemDTO(product_id=i.product_id, quantity=i.quantity) for i in c.items],
        )

    async def _validate_refs(self, payload: CartUpsert, db: AsyncSession) -> None:
        """
        Check that the cart owner and every referenced product exist.

        Raises:
            ValidationError: With the first missing user or product id.
        """
        if not await self.user_repository.get_by_id(payload.user_id, db):
            raise ValidationError("User not found", detail=payload.user_id)

        wanted = [i.product_id for i in payload.products]
        found = await self.product_repository.existing_ids(wanted, db)
        missing = [pid for pid in wanted if pid not in found]
        if missing:
            raise ValidationError("Product not found", detail=missing[0])

    async def create(self, payload: CartUpsert, db: AsyncSession) -> CartDTO:
        logger.info("[CartService] Creating cart for user=%s", payload.user_id)
        try:
            async with commit_scope(db):
                await self._validate_refs(payload, db)
                c = await self.cart_repository.create_cart(payload, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[CartService] Create failed: %s", e, exc_info=True)
            raise AppError("Failed to create cart")
        logger.info("[CartService] Cart created ID=%s", c.id)
        return self._to_dto(c)

    async def get(self, cart_id: int, db: AsyncSession) -> CartDTO:
        logger.debug(f"[CartService] Get cart ID={cart_id}")
        c = await self.cart_repository.get_cart_by_id(cart_id, db)
        if not c:
            raise NotFoundError("Cart not found", detail=cart_id)
        return self._to_dto(c)

    async def update(self, cart_id: int, payload: CartUpsert, db: AsyncSession) -> CartDTO:
        """Replaces owner, date and the whole item list."""
        logger.info("[CartService] Updating cart ID=%s", cart_id)
        try:
            async with commit_scope(db):
                c = await self.cart_repository.get_cart_by_id(cart_id, db, for_update=True)
                if not c:
                    raise NotFoundError("Cart not found", detail=cart_id)
                await self._validate_refs(payload, db)
                await self.cart_repository.replace_cart(c, payload, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"[CartService] Update failed ID={cart_id}: {e}", exc_info=True)
            raise AppError("Failed to update cart")
        return self._to_dto(c)

    async def delete(self, cart_id: int, db: AsyncSession) -> None:
        logger.info("[CartService] Deleting cart ID=%s", cart_id)
        try:
            async with commit_scope(db):
                if not await self.cart_repository.delete_cart(cart_id, db):
                    raise NotFoundError("Cart not found", detail=cart_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"[CartService] Delete failed ID={cart_id}: {e}", exc_info=True)
            raise AppError("Failed to delete cart")

    async def list(self, query: CartListQuery, db: AsyncSession) -> CartPageDTO:
        page, size = normalize_page(
            query.page,
            query.size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        rows, total = await self.cart_repository.list_carts(query, page=page, size=size, session=db)
        return CartPageDTO.build(
            [self._to_dto(c) for c in rows],
            total_items=total,
            page=page,
            size=size,
        )
