from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, Boolean, ForeignKey, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

class SaleItem(Base):
    __tablename__ = "sale_item"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sale_id: Mapped[int] = mapped_column(ForeignKey("sale.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    product_name: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("0.00"))
    # quantity * unit_price * (1 - discount_percent), redondeado a 2 decimales
    total: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    cancelled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    sale = relationship("Sale", back_populates="items")
