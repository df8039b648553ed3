from dataclasses import dataclass

from sqlalchemy import select

from app.v1_0.helper.ordering import (
    OrderClause,
    apply_order,
    apply_order_to_query,
    parse_order,
)
from app.v1_0.models import Product


@dataclass
class Row:
    title: str
    price: float
    customer_name: str = ""


ACCESSORS = {
    "title": lambda r: r.title,
    "price": lambda r: r.price,
    "customer_name": lambda r: r.customer_name,
}

ROWS = [
    Row("b", 10.0),
    Row("a", 20.0),
    Row("c", 10.0),
    Row("a", 10.0),
]


def test_parse_order_clauses():
    assert parse_order(" price DESC , title ") == [
        OrderClause("price", True),
        OrderClause("title", False),
    ]
    assert parse_order("customer_Name asc") == [OrderClause("customername", False)]


def test_parse_order_empty():
    assert parse_order(None) == []
    assert parse_order("") == []
    assert parse_order("  ,  ") == []


def test_apply_order_returns_same_object_when_nothing_applies():
    for spec in (None, "", "   ", "unknown desc", "nope, other"):
        assert apply_order(ROWS, spec, ACCESSORS) is ROWS


def test_price_desc_then_title_asc():
    out = apply_order(ROWS, "price desc,title asc", ACCESSORS)
    assert [(r.price, r.title) for r in out] == [
        (20.0, "a"),
        (10.0, "a"),
        (10.0, "b"),
        (10.0, "c"),
    ]


def test_field_and_direction_are_case_insensitive():
    a = apply_order(ROWS, "PRICE DESC, Title ASC", ACCESSORS)
    b = apply_order(ROWS, "price desc, title asc", ACCESSORS)
    assert a == b


def test_underscores_ignored_in_keys():
    rows = [Row("x", 1, "zeta"), Row("y", 1, "alpha")]
    for spec in ("customerName", "customer_name", "CUSTOMERNAME"):
        assert [r.customer_name for r in apply_order(rows, spec, ACCESSORS)] == ["alpha", "zeta"]


def test_unknown_first_clause_promotes_next():
    out = apply_order(ROWS, "bogus desc, title desc", ACCESSORS)
    assert [r.title for r in out] == ["c", "b", "a", "a"]


def test_sort_is_stable():
    out = apply_order(ROWS, "price", ACCESSORS)
    assert [r.title for r in out] == ["b", "c", "a", "a"]
    assert out[2] is ROWS[3]


def test_query_untouched_without_valid_clause():
    stmt = select(Product)
    columns = {"price": Product.price}
    assert apply_order_to_query(stmt, None, columns) is stmt
    assert apply_order_to_query(stmt, "unknown", columns) is stmt


def test_query_order_by_rendered():
    stmt = apply_order_to_query(
        select(Product),
        "price desc, title",
        {"price": Product.price, "title": Product.title},
    )
    sql = str(stmt.compile()).replace("\n", " ")
    assert "ORDER BY product.price DESC, product.title ASC" in sql


def test_none_values_sort_last_ascending_first_descending():
    rows = [
        Row(title="b", price=1.0, customer_name=None),
        Row(title="a", price=2.0, customer_name="x"),
        Row(title="c", price=3.0, customer_name="a"),
    ]

    out = apply_order(rows, "customerName", ACCESSORS)
    assert [r.title for r in out] == ["c", "a", "b"]

    out = apply_order(rows, "customerName desc", ACCESSORS)
    assert [r.title for r in out] == ["b", "a", "c"]
