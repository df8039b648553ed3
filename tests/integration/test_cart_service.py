import datetime as dt

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.v1_0.schemas import (
    CartItemInput,
    CartListQuery,
    CartUpsert,
    ProductUpsert,
    UserCreate,
)


@pytest.fixture
async def owner_and_products(user_service, product_service, session):
    user = await user_service.create(
        UserCreate(email="cart@example.com", username="carter", password="s3cret-pass"),
        session,
    )
    products = [
        await product_service.create(ProductUpsert(title=t, price=10.0, category="misc"), session)
        for t in ("pen", "ink")
    ]
    return user, products


def _cart(user_id: int, *items) -> CartUpsert:
    return CartUpsert(
        user_id=user_id,
        date=dt.date(2025, 3, 1),
        products=[CartItemInput(product_id=pid, quantity=qty) for pid, qty in items],
    )


async def test_create_and_get(cart_service, session, owner_and_products):
    user, (pen, ink) = owner_and_products

    created = await cart_service.create(_cart(user.id, (pen.id, 2), (ink.id, 1)), session)
    fetched = await cart_service.get(created.id, session)

    assert fetched.user_id == user.id
    assert [(i.product_id, i.quantity) for i in fetched.products] == [(pen.id, 2), (ink.id, 1)]


async def test_create_with_unknown_user(cart_service, session, owner_and_products):
    _, (pen, _) = owner_and_products
    with pytest.raises(ValidationError) as exc:
        await cart_service.create(_cart(999, (pen.id, 1)), session)
    assert exc.value.message == "User not found"


async def test_create_with_unknown_product(cart_service, session, owner_and_products):
    user, (pen, _) = owner_and_products
    with pytest.raises(ValidationError) as exc:
        await cart_service.create(_cart(user.id, (pen.id, 1), (404, 1)), session)
    assert exc.value.extra == 404


async def test_update_replaces_items(cart_service, session, owner_and_products):
    user, (pen, ink) = owner_and_products
    created = await cart_service.create(_cart(user.id, (pen.id, 2)), session)

    updated = await cart_service.update(created.id, _cart(user.id, (ink.id, 5)), session)

    assert [(i.product_id, i.quantity) for i in updated.products] == [(ink.id, 5)]


async def test_delete_and_list(cart_service, session, owner_and_products):
    user, (pen, _) = owner_and_products
    first = await cart_service.create(_cart(user.id, (pen.id, 1)), session)
    await cart_service.create(_cart(user.id, (pen.id, 3)), session)

    page = await cart_service.list(CartListQuery(order="id desc"), session)
    assert page.total_items == 2
    assert page.data[-1].id == first.id

    await cart_service.delete(first.id, session)
    with pytest.raises(NotFoundError):
        await cart_service.get(first.id, session)
