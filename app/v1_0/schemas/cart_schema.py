import datetime as dt
from typing import List
from pydantic import Field
from .base import CamelModel, ListQuery

class CartItemInput(CamelModel):
    product_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)

class CartUpsert(CamelModel):
    user_id: int = Field(..., ge=1)
    date: dt.date
    products: List[CartItemInput] = Field(..., min_length=1)

class CartListQuery(ListQuery):
    pass
