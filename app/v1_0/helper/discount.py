from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional, Tuple

MAX_IDENTICAL_ITEMS = 20
QUANTITY_ABOVE_LIMIT = "Quantity above 20 identical items is not allowed."

_CENTS = Decimal("0.01")

# (cantidad minima, tasa); se evalua de mayor a menor
_TIERS: Tuple[Tuple[int, Decimal], ...] = (
    (10, Decimal("0.20")),
    (4, Decimal("0.10")),
)


def discount_for(quantity: int) -> Tuple[Decimal, Optional[str]]:
    """
    Rate applied to a line of `quantity` identical items.

    Returns (rate, None) for valid quantities and (0, message) when the
    quantity is above the allowed maximum.
    """
    if quantity > MAX_IDENTICAL_ITEMS:
        return Decimal("0.00"), QUANTITY_ABOVE_LIMIT
    for threshold, rate in _TIERS:
        if quantity >= threshold:
            return rate, None
    return Decimal("0.00"), None


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_EVEN)


def line_total(quantity: int, unit_price: Decimal, rate: Decimal) -> Decimal:
    return round_money(Decimal(quantity) * Decimal(unit_price) * (Decimal("1") - rate))
