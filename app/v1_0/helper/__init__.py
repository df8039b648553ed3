from .discount import discount_for, line_total, round_money
from .filters import parse_wildcard, range_clauses, wildcard_clause
from .ordering import OrderClause, apply_order, apply_order_to_query, parse_order

__all__ = [
    "discount_for",
    "line_total",
    "round_money",
    "parse_wildcard",
    "range_clauses",
    "wildcard_clause",
    "OrderClause",
    "apply_order",
    "apply_order_to_query",
    "parse_order",
]
