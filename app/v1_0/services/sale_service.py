import datetime as dt
from decimal import Decimal
from typing import Awaitable, Callable, List, Optional, Sequence

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AppError, ConflictError, NotFoundError, ValidationError
from app.core.logger import logger
from app.core.security.deps import AuthContext
from app.utils.tx import commit_scope
from app.v1_0.entities import SaleDTO, SalePageDTO, BranchDailySummaryDTO
from app.v1_0.helper import discount_for, line_total, round_money
from app.v1_0.models import Sale, SaleItem
from app.v1_0.repositories import (
    SaleRepository,
    SaleReadModelRepository,
    normalize_page,
    sale_to_document,
)
from app.v1_0.schemas import SaleCreate, SaleUpdate, SaleItemInput, SaleListQuery


class SaleService:
    def __init__(
        self,
        sale_repository: SaleRepository,
        sale_read_model_repository: SaleReadModelRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self.sale_repository = sale_repository
        self.sale_read_model_repository = sale_read_model_repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    # ------------------------------------------------------------------ helpers

    def _build_items(self, rows: Sequence[SaleItemInput]) -> List[SaleItem]:
        """
        Build the line items of a sale applying the quantity discount tiers.

        Args:
            rows: Validated item payloads.

        Returns:
            New (unsaved) SaleItem rows with discount and line total computed.

        Raises:
            ValidationError: If any line is above the identical-items limit.
                Nothing is persisted in that case.
        """
        items: List[SaleItem] = []
        for row in rows:
            rate, error = discount_for(row.quantity)
            if error:
                raise ValidationError(error, detail=row.product_id)
            items.append(
                SaleItem(
                    product_id=row.product_id,
                    product_name=row.product_name,
                    quantity=row.quantity,
                    unit_price=round_money(row.unit_price),
                    discount_percent=rate,
                    total=line_total(row.quantity, row.unit_price, rate),
                    cancelled=False,
                )
            )
        return items

    @staticmethod
    def _recompute_total(items: Sequence[SaleItem]) -> Decimal:
        return round_money(sum((i.total for i in items if not i.cancelled), Decimal("0.00")))

    @staticmethod
    def _apply_header(sale: Sale, payload: SaleCreate) -> None:
        sale.number = payload.number
        sale.date = payload.date
        sale.customer_id = payload.customer_id
        sale.customer_name = payload.customer_name
        sale.branch_id = payload.branch_id
        sale.branch_name = payload.branch_name

    async def _require(self, sale_id: int, db: AsyncSession) -> Sale:
        sale = await self.sale_repository.get_sale_by_id(sale_id, db, for_update=True)
        if not sale:
            raise NotFoundError("Sale not found", detail=sale_id)
        return sale

    async def _in_tx(
        self,
        action: str,
        run: Callable[[], Awaitable[Sale]],
        db: AsyncSession,
    ) -> Sale:
        try:
            async with commit_scope(db):
                return await run()
        except HTTPException:
            raise
        except IntegrityError as e:
            logger.warning("[SaleService] %s hit a unique constraint: %s", action, e.orig)
            raise ConflictError("Sale number already exists")
        except Exception as e:
            logger.error("[SaleService] %s failed: %s", action, e, exc_info=True)
            raise AppError(f"Failed to {action} sale")

    async def _project(self, sale: Sale) -> None:
        """Best effort: a read-model failure never undoes the committed write."""
        try:
            await self.sale_read_model_repository.upsert(sale_to_document(sale))
            logger.debug("[SaleService] Read model upserted sale_id=%s", sale.id)
        except Exception as e:
            logger.error(
                "[SaleService] read model upsert failed sale_id=%s: %s",
                sale.id,
                e,
                exc_info=True,
            )

    @staticmethod
    def _to_dto(sale: Sale) -> SaleDTO:
        return SaleDTO.model_validate(sale)

    # --------------------------------------------------------------- mutations

    async def create(self, payload: SaleCreate, auth: AuthContext, db: AsyncSession) -> SaleDTO:
        """
        Create a sale with its items.

        Operations:
        - Reject a number that is already in use.
        - Apply the discount tier to every line (any invalid line aborts).
        - Persist the sale and its items and commit.
        - Project the committed sale into the read model.

        Args:
            payload: Sale header and items.
            auth: Caller identity (logged only).
            db: Active async database session.

        Returns:
            SaleDTO of the created sale.

        Raises:
            ConflictError: If the number already exists.
            ValidationError: If a line quantity is above the limit.
        """
        logger.info(
            "[SaleService] Creating sale number=%s items=%s by user=%s",
            payload.number,
            len(payload.items),
            auth.user_id,
        )

        async def _run() -> Sale:
            if await self.sale_repository.number_exists(payload.number, db):
                raise ConflictError("Sale number already exists", detail=payload.number)

            items = self._build_items(payload.items)
            sale = Sale(items=items, cancelled=False)
            self._apply_header(sale, payload)
            sale.total = self._recompute_total(items)
            return await self.sale_repository.create_sale(sale, db)

        sale = await self._in_tx("create", _run, db)
        logger.info("[SaleService] Sale created ID=%s total=%s", sale.id, sale.total)

        await self._project(sale)
        return self._to_dto(sale)

    async def update(
        self,
        sale_id: int,
        payload: SaleUpdate,
        auth: AuthContext,
        db: AsyncSession,
    ) -> SaleDTO:
        """
        Replace a sale: header, cancelled flag and the full item list.

        Previous items are deleted; the new ones go through the same
        discount rules as on create and the total is recomputed.

        Raises:
            NotFoundError: If the sale does not exist.
            ConflictError: If the new number belongs to another sale.
            ValidationError: If a line quantity is above the limit.
        """
        logger.info("[SaleService] Updating sale ID=%s by user=%s", sale_id, auth.user_id)

        async def _run() -> Sale:
            sale = await self._require(sale_id, db)
            if payload.number != sale.number and await self.sale_repository.number_exists(
                payload.number, db, exclude_id=sale_id
            ):
                raise ConflictError("Sale number already exists", detail=payload.number)

            items = self._build_items(payload.items)
            self._apply_header(sale, payload)
            sale.cancelled = payload.cancelled
            await self.sale_repository.replace_items(sale, items, db)
            sale.total = self._recompute_total(sale.items)
            await db.flush()
            return sale

        sale = await self._in_tx("update", _run, db)
        logger.info("[SaleService] Sale updated ID=%s total=%s", sale.id, sale.total)

        await self._project(sale)
        return self._to_dto(sale)

    async def cancel(self, sale_id: int, auth: AuthContext, db: AsyncSession) -> SaleDTO:
        """
        Mark the whole sale as cancelled.

        Item flags and the total are left untouched.
        """
        logger.info("[SaleService] Cancelling sale ID=%s by user=%s", sale_id, auth.user_id)

        async def _run() -> Sale:
            sale = await self._require(sale_id, db)
            sale.cancelled = True
            await db.flush()
            return sale

        sale = await self._in_tx("cancel", _run, db)
        await self._project(sale)
        return self._to_dto(sale)

    async def cancel_item(
        self,
        sale_id: int,
        item_id: int,
        auth: AuthContext,
        db: AsyncSession,
    ) -> SaleDTO:
        """
        Cancel one line of a sale and recompute the total over the rest.

        Raises:
            NotFoundError: Sale unknown, or item not part of the sale
                (checked in that order).
        """
        logger.info(
            "[SaleService] Cancelling item ID=%s of sale ID=%s by user=%s",
            item_id,
            sale_id,
            auth.user_id,
        )

        async def _run() -> Sale:
            sale = await self._require(sale_id, db)
            item = next((i for i in sale.items if i.id == item_id), None)
            if item is None:
                raise NotFoundError("Sale item not found", detail=item_id)
            item.cancelled = True
            sale.total = self._recompute_total(sale.items)
            await db.flush()
            return sale

        sale = await self._in_tx("cancel item of", _run, db)
        logger.info("[SaleService] Sale ID=%s total now %s", sale.id, sale.total)

        await self._project(sale)
        return self._to_dto(sale)

    # ------------------------------------------------------------------- reads

    async def get(self, sale_id: int, db: AsyncSession) -> Optional[SaleDTO]:
        logger.debug(f"[SaleService] Get sale ID={sale_id}")
        sale = await self.sale_repository.get_sale_by_id(sale_id, db)
        return self._to_dto(sale) if sale else None

    async def list(self, query: SaleListQuery, db: AsyncSession) -> SalePageDTO:
        """
        Filtered, ordered page of sales from the primary store.

        Args:
            query: Paging (_page/_size/_order) plus date, customer, branch,
                total and cancelled filters.
            db: Active async database session.

        Returns:
            SalePageDTO with data, totalItems, currentPage and totalPages.
        """
        page, size = normalize_page(
            query.page,
            query.size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        logger.debug("[SaleService] List sales page=%s size=%s order=%s", page, size, query.order)

        rows, total = await self.sale_repository.list_sales(query, page=page, size=size, session=db)
        return SalePageDTO.build(
            [self._to_dto(s) for s in rows],
            total_items=total,
            page=page,
            size=size,
        )

    async def summary(
        self,
        date_from: Optional[dt.date],
        date_to: Optional[dt.date],
    ) -> List[BranchDailySummaryDTO]:
        """Totals per branch and day, read only from the read model."""
        logger.debug("[SaleService] Summary from=%s to=%s", date_from, date_to)
        try:
            rows = await self.sale_read_model_repository.summary_by_branch_and_day(date_from, date_to)
        except Exception as e:
            logger.error("[SaleService] Summary failed: %s", e, exc_info=True)
            raise AppError("Failed to load sales summary")
        return [BranchDailySummaryDTO(**r) for r in rows]
