import pytest

from app.core.errors import NotFoundError
from app.v1_0.schemas import ProductListQuery, ProductRating, ProductUpsert


def _product(title: str, price: float, category: str = "electronics", rate: float = 4.0) -> ProductUpsert:
    return ProductUpsert(
        title=title,
        price=price,
        category=category,
        rating=ProductRating(rate=rate, count=10),
    )


@pytest.fixture
async def catalog(product_service, session):
    for p in (
        _product("phone case", 15.0, "accessories", 3.5),
        _product("smartphone", 700.0, "electronics", 4.8),
        _product("headphones", 120.0, "electronics", 4.1),
        _product("desk", 250.0, "furniture", 3.9),
    ):
        await product_service.create(p, session)


async def test_create_and_get(product_service, session):
    created = await product_service.create(_product("lamp", 30.0, "furniture"), session)
    fetched = await product_service.get(created.id, session)

    assert fetched == created
    assert fetched.rating.count == 10


async def test_title_contains_vs_starts_with(product_service, session, catalog):
    contains = await product_service.list(ProductListQuery(title="*phone*"), session)
    assert {p.title for p in contains.data} == {"phone case", "smartphone", "headphones"}

    starts = await product_service.list(ProductListQuery(title="phone*"), session)
    assert [p.title for p in starts.data] == ["phone case"]

    ends = await product_service.list(ProductListQuery(title="*phones"), session)
    assert [p.title for p in ends.data] == ["headphones"]

    exact = await product_service.list(ProductListQuery(title="desk"), session)
    assert exact.total_items == 1


async def test_price_and_rate_ranges(product_service, session, catalog):
    page = await product_service.list(
        ProductListQuery(min_price=100, max_price=700, order="price desc"), session
    )
    assert [p.title for p in page.data] == ["smartphone", "desk", "headphones"]

    page = await product_service.list(ProductListQuery(min_rate=4.0), session)
    assert {p.title for p in page.data} == {"smartphone", "headphones"}


async def test_order_price_desc_title_asc(product_service, session, catalog):
    await product_service.create(_product("cable", 15.0, "accessories"), session)

    page = await product_service.list(ProductListQuery(order="price desc, title asc"), session)
    assert [p.title for p in page.data][-2:] == ["cable", "phone case"]


async def test_size_is_clamped(product_service, session, catalog):
    page = await product_service.list(ProductListQuery(size=0), session)
    assert page.total_pages == 1
    assert len(page.data) == 4

    page = await product_service.list(ProductListQuery(page=1, size=3), session)
    assert len(page.data) == 3
    assert page.total_pages == 2


async def test_categories_and_category_listing(product_service, session, catalog):
    assert await product_service.categories(session) == ["accessories", "electronics", "furniture"]

    page = await product_service.list_by_category("ELECTRONICS", ProductListQuery(order="price"), session)
    assert [p.title for p in page.data] == ["headphones", "smartphone"]


async def test_update_and_delete(product_service, session):
    created = await product_service.create(_product("chair", 80.0, "furniture"), session)

    updated = await product_service.update(created.id, _product("chair v2", 90.0, "furniture"), session)
    assert updated.title == "chair v2"
    assert updated.price == 90.0

    await product_service.delete(created.id, session)
    with pytest.raises(NotFoundError):
        await product_service.get(created.id, session)


async def test_update_missing_product(product_service, session):
    with pytest.raises(NotFoundError):
        await product_service.update(99, _product("x", 1.0), session)
