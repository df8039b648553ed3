import datetime as dt
from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, Date, Boolean, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

class Sale(Base):
    __tablename__ = "sale"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)

    customer_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    branch_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    branch_name: Mapped[str] = mapped_column(String(200), nullable=False)

    total: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0.00"))
    cancelled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SaleItem.id",
    )
