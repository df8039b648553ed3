from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import Select

T = TypeVar("T")


@dataclass(frozen=True)
class OrderClause:
    field: str
    descending: bool = False


def normalize_key(name: str) -> str:
    """'customerName', 'customer_name' y 'CUSTOMERNAME' son la misma clave."""
    return name.strip().lower().replace("_", "")


def parse_order(spec: Optional[str]) -> List[OrderClause]:
    """
    Parse ``"price desc, title asc"`` into ordered clauses.

    Field names come back normalized; unknown fields are not filtered here,
    callers match them against the keys their entity accepts.
    """
    if not spec or not spec.strip():
        return []

    clauses: List[OrderClause] = []
    for raw in spec.split(","):
        tokens = raw.split()
        if not tokens:
            continue
        field = normalize_key(tokens[0])
        if not field:
            continue
        descending = len(tokens) > 1 and tokens[1].lower() == "desc"
        clauses.append(OrderClause(field=field, descending=descending))
    return clauses


def _known(clauses: List[OrderClause], accepted: Mapping[str, Any]) -> List[OrderClause]:
    keys = {normalize_key(k) for k in accepted}
    return [c for c in clauses if c.field in keys]


def _by_normalized(accepted: Mapping[str, Any]) -> dict:
    return {normalize_key(k): v for k, v in accepted.items()}


class _Reversed:
    """Invierte la comparacion para ordenar desc sin perder estabilidad."""
    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __lt__(self, other: "_Reversed") -> bool:
        return other.value < self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Reversed) and self.value == other.value


def apply_order(
    items: Sequence[T],
    spec: Optional[str],
    accessors: Mapping[str, Callable[[T], Any]],
) -> Sequence[T]:
    """
    Stable multi-key sort of an in-memory collection.

    Returns `items` itself (same object) when the order string is empty or none of
    its clauses names an accepted key. None values sort last on ascending clauses.
    """
    clauses = _known(parse_order(spec), accessors)
    if not clauses:
        return items

    by_key = _by_normalized(accessors)

    def sort_key(item: T) -> tuple:
        parts = []
        for c in clauses:
            value = by_key[c.field](item)
            # nulos al final en asc y al principio en desc, como Postgres
            value = (value is None, value)
            parts.append(_Reversed(value) if c.descending else value)
        return tuple(parts)

    return sorted(items, key=sort_key)


def apply_order_to_query(
    stmt: Select,
    spec: Optional[str],
    columns: Mapping[str, Any],
) -> Select:
    """SQL version of `apply_order`: same statement back when nothing applies."""
    clauses = _known(parse_order(spec), columns)
    if not clauses:
        return stmt

    by_key = _by_normalized(columns)
    return stmt.order_by(
        *[by_key[c.field].desc() if c.descending else by_key[c.field].asc() for c in clauses]
    )
