import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional

from bson.decimal128 import Decimal128
from pymongo.asynchronous.database import AsyncDatabase

from app.v1_0.models import Sale

Document = Dict[str, Any]


def sale_to_document(sale: Sale) -> Document:
    """Proyeccion plana de una venta ya confirmada; _id = id de la venta."""
    return {
        "_id": sale.id,
        "number": sale.number,
        # BSON no tiene tipo fecha sin hora
        "date": dt.datetime.combine(sale.date, dt.time.min),
        "customer_id": sale.customer_id,
        "customer_name": sale.customer_name,
        "branch_id": sale.branch_id,
        "branch_name": sale.branch_name,
        "total": Decimal128(str(sale.total)),
        "cancelled": bool(sale.cancelled),
    }


def build_summary_pipeline(
    date_from: Optional[dt.date],
    date_to: Optional[dt.date],
) -> List[Document]:
    """
    Aggregation grouping sale totals by branch and calendar day.

    Both bounds are inclusive; ``date_to`` covers the whole day. Cancelled
    sales are summed too.
    """
    pipeline: List[Document] = []

    bounds: Document = {}
    if date_from is not None:
        bounds["$gte"] = dt.datetime.combine(date_from, dt.time.min)
    if date_to is not None:
        bounds["$lte"] = dt.datetime.combine(date_to, dt.time.max)
    if bounds:
        pipeline.append({"$match": {"date": bounds}})

    pipeline += [
        {
            "$group": {
                "_id": {
                    "branch_id": "$branch_id",
                    "branch_name": "$branch_name",
                    "day": {"$dateToString": {"format": "%Y-%m-%d", "date": "$date"}},
                },
                "total_amount": {"$sum": "$total"},
            }
        },
        {
            "$project": {
                "_id": 0,
                "branch_id": "$_id.branch_id",
                "branch_name": "$_id.branch_name",
                "day": "$_id.day",
                "total_amount": 1,
            }
        },
        {"$sort": {"branch_id": 1, "day": 1}},
    ]
    return pipeline


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return Decimal(str(value or 0))


class SaleReadModelRepository:
    """Denormalized sales in the document store; fed only after commits."""

    def __init__(self, database: AsyncDatabase, collection_name: str = "sales") -> None:
        self.database = database
        self.collection_name = collection_name

    @property
    def collection(self):
        return self.database[self.collection_name]

    async def upsert(self, document: Document) -> None:
        await self.collection.replace_one({"_id": document["_id"]}, document, upsert=True)

    async def delete(self, sale_id: int) -> bool:
        res = await self.collection.delete_one({"_id": sale_id})
        return res.deleted_count > 0

    async def summary_by_branch_and_day(
        self,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> List[Document]:
        cursor = await self.collection.aggregate(build_summary_pipeline(date_from, date_to))
        rows = await cursor.to_list(length=None)
        return [
            {
                "branch_id": r["branch_id"],
                "branch_name": r["branch_name"],
                "day": r["day"],
                "total_amount": _to_decimal(r.get("total_amount")),
            }
            for r in rows
        ]
