import datetime as dt
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson.decimal128 import Decimal128

from app.v1_0.models import Sale
from app.v1_0.repositories.sale_read_model_repository import (
    SaleReadModelRepository,
    build_summary_pipeline,
    sale_to_document,
)


def _sale() -> Sale:
    return Sale(
        id=12,
        number="S-12",
        date=dt.date(2025, 3, 1),
        customer_id=7,
        customer_name="acme",
        branch_id=2,
        branch_name="norte",
        total=Decimal("760.00"),
        cancelled=False,
    )


@pytest.fixture
def collection():
    coll = MagicMock()
    coll.replace_one = AsyncMock()
    coll.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    coll.aggregate = AsyncMock()
    return coll


@pytest.fixture
def repo(collection):
    database = MagicMock()
    database.__getitem__.return_value = collection
    return SaleReadModelRepository(database, "sales")


def test_document_is_flat_projection():
    doc = sale_to_document(_sale())
    assert doc["_id"] == 12
    assert doc["date"] == dt.datetime(2025, 3, 1, 0, 0)
    assert doc["total"] == Decimal128("760.00")
    assert doc["branch_name"] == "norte"
    assert doc["cancelled"] is False


def test_pipeline_without_bounds_has_no_match():
    pipeline = build_summary_pipeline(None, None)
    assert [next(iter(stage)) for stage in pipeline] == ["$group", "$project", "$sort"]


def test_pipeline_bounds_cover_whole_days():
    pipeline = build_summary_pipeline(dt.date(2025, 3, 1), dt.date(2025, 3, 31))
    match = pipeline[0]["$match"]["date"]
    assert match["$gte"] == dt.datetime(2025, 3, 1, 0, 0)
    assert match["$lte"] == dt.datetime(2025, 3, 31, 23, 59, 59, 999999)

    group = pipeline[1]["$group"]
    assert group["_id"]["day"] == {"$dateToString": {"format": "%Y-%m-%d", "date": "$date"}}
    assert group["total_amount"] == {"$sum": "$total"}
    assert pipeline[-1] == {"$sort": {"branch_id": 1, "day": 1}}


async def test_upsert_replaces_by_id(repo, collection):
    doc = sale_to_document(_sale())
    await repo.upsert(doc)
    collection.replace_one.assert_awaited_once_with({"_id": 12}, doc, upsert=True)


async def test_delete(repo, collection):
    assert await repo.delete(12) is True
    collection.delete_one.assert_awaited_once_with({"_id": 12})


async def test_summary_converts_decimal128(repo, collection):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(
        return_value=[
            {"branch_id": 1, "branch_name": "centro", "day": "2025-03-01", "total_amount": Decimal128("360.00")},
            {"branch_id": 2, "branch_name": "norte", "day": "2025-03-01", "total_amount": Decimal128("10.50")},
        ]
    )
    collection.aggregate.return_value = cursor

    rows = await repo.summary_by_branch_and_day(dt.date(2025, 3, 1), dt.date(2025, 3, 1))

    assert rows[0] == {
        "branch_id": 1,
        "branch_name": "centro",
        "day": "2025-03-01",
        "total_amount": Decimal("360.00"),
    }
    assert rows[1]["total_amount"] == Decimal("10.50")
    pipeline = collection.aggregate.await_args.args[0]
    assert "$match" in pipeline[0]
