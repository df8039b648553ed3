from typing import Any, Optional, Tuple

from sqlalchemy import ColumnElement

CONTAINS = "contains"
STARTS_WITH = "startswith"
ENDS_WITH = "endswith"
EXACT = "exact"


def parse_wildcard(value: str) -> Tuple[str, str]:
    """
    ``*term*`` -> contains, ``*term`` -> endswith, ``term*`` -> startswith,
    anything else -> exact.
    """
    v = value.strip()
    leading = v.startswith("*")
    trailing = v.endswith("*") and len(v) > 1
    term = v[1 if leading else 0: -1 if trailing else None]

    if leading and trailing:
        return CONTAINS, term
    if leading:
        return ENDS_WITH, term
    if trailing:
        return STARTS_WITH, term
    return EXACT, term


def wildcard_clause(column: Any, value: Optional[str]) -> Optional[ColumnElement[bool]]:
    """Condicion SQL para un filtro de texto; None si el valor viene vacio."""
    if value is None or not value.strip():
        return None

    mode, term = parse_wildcard(value)
    if mode == CONTAINS:
        return column.contains(term, autoescape=True)
    if mode == ENDS_WITH:
        return column.endswith(term, autoescape=True)
    if mode == STARTS_WITH:
        return column.startswith(term, autoescape=True)
    return column == term


def range_clauses(column: Any, minimum: Optional[Any], maximum: Optional[Any]) -> list:
    out = []
    if minimum is not None:
        out.append(column >= minimum)
    if maximum is not None:
        out.append(column <= maximum)
    return out
