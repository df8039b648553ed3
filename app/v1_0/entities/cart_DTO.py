import datetime as dt
from typing import List
from app.v1_0.schemas.base import CamelModel
from .page import PageDTO

class CartItemDTO(CamelModel):
    product_id: int
    quantity: int

class CartDTO(CamelModel):
    id: int
    user_id: int
    date: dt.date
    products: List[CartItemDTO]

CartPageDTO = PageDTO[CartDTO]
