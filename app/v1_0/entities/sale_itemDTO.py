from app.v1_0.schemas.base import CamelModel, Money

class SaleItemDTO(CamelModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: Money
    discount_percent: Money
    total: Money
    cancelled: bool
