from typing import Optional, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import Cart, CartItem
from app.v1_0.schemas import CartUpsert, CartListQuery
from .base_repository import BaseRepository

class CartRepository(BaseRepository[Cart]):
    order_columns = {
        "id": Cart.id,
        "user_id": Cart.user_id,
        "date": Cart.date,
    }

    def __init__(self) -> None:
        super().__init__(Cart)

    @staticmethod
    def _items(payload: CartUpsert) -> List[CartItem]:
        return [CartItem(product_id=i.product_id, quantity=i.quantity) for i in payload.products]

    async def create_cart(self, payload: CartUpsert, session: AsyncSession) -> Cart:
        cart = Cart(user_id=payload.user_id, date=payload.date, items=self._items(payload))
        await self.add(cart, session)
        return cart

    async def get_cart_by_id(
        self, cart_id: int, session: AsyncSession, *, for_update: bool = False
    ) -> Optional[Cart]:
        return await super().get_by_id(cart_id, session, for_update=for_update)

    async def replace_cart(self, cart: Cart, payload: CartUpsert, session: AsyncSession) -> Cart:
        cart.user_id = payload.user_id
        cart.date = payload.date
        # delete-orphan borra las filas anteriores
        cart.items = self._items(payload)
        await session.flush()
        return cart

    async def delete_cart(self, cart_id: int, session: AsyncSession) -> bool:
        return bool(await self.delete_by_id(cart_id, session))

    async def list_carts(
        self,
        query: CartListQuery,
        *,
        page: int,
        size: int,
        session: AsyncSession,
    ) -> Tuple[List[Cart], int]:
        return await self.list_filtered(session, page=page, size=size, order=query.order)
