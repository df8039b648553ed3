import datetime as dt
from typing import List
from app.v1_0.schemas.base import CamelModel, Money
from .page import PageDTO
from .sale_itemDTO import SaleItemDTO

class SaleDTO(CamelModel):
    id: int
    number: str
    date: dt.date
    customer_id: int
    customer_name: str
    branch_id: int
    branch_name: str
    total: Money
    cancelled: bool
    items: List[SaleItemDTO]

class BranchDailySummaryDTO(CamelModel):
    """Fila del resumen por sucursal y dia (read model)."""
    branch_id: int
    branch_name: str
    day: str
    total_amount: Money

SalePageDTO = PageDTO[SaleDTO]
