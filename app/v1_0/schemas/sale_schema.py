import datetime as dt
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from .base import CamelModel, ListQuery

class SaleItemInput(CamelModel):
    product_id: int = Field(..., ge=1)
    product_name: str = Field(..., min_length=1, max_length=200)
    # el tope de 20 unidades lo aplica la politica de descuentos, no el schema
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)

class SaleCreate(CamelModel):
    number: str = Field(..., min_length=1, max_length=50)
    date: dt.date
    customer_id: int = Field(..., ge=1)
    customer_name: str = Field(..., min_length=1, max_length=200)
    branch_id: int = Field(..., ge=1)
    branch_name: str = Field(..., min_length=1, max_length=200)
    items: List[SaleItemInput] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "number": "S-0001",
                "date": "2025-03-01",
                "customerId": 7,
                "customerName": "ACME",
                "branchId": 1,
                "branchName": "Centro",
                "items": [
                    {"productId": 3, "productName": "Mouse", "quantity": 4, "unitPrice": 100},
                ],
            }
        }
    }

class SaleUpdate(SaleCreate):
    cancelled: bool = False

class SaleListQuery(ListQuery):
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None
    customer: Optional[str] = None
    branch: Optional[str] = None
    min_total: Optional[Decimal] = None
    max_total: Optional[Decimal] = None
    cancelled: Optional[bool] = None
