from sqlalchemy import select

from app.v1_0.helper.filters import (
    CONTAINS,
    ENDS_WITH,
    EXACT,
    STARTS_WITH,
    parse_wildcard,
    range_clauses,
    wildcard_clause,
)
from app.v1_0.models import Product


def test_parse_wildcard_modes():
    assert parse_wildcard("*phone*") == (CONTAINS, "phone")
    assert parse_wildcard("*phone") == (ENDS_WITH, "phone")
    assert parse_wildcard("phone*") == (STARTS_WITH, "phone")
    assert parse_wildcard("phone") == (EXACT, "phone")
    assert parse_wildcard("  phone* ") == (STARTS_WITH, "phone")


def test_blank_values_are_ignored():
    assert wildcard_clause(Product.title, None) is None
    assert wildcard_clause(Product.title, "") is None
    assert wildcard_clause(Product.title, "   ") is None


def _sql(clause) -> str:
    return str(select(Product.id).where(clause).compile(compile_kwargs={"literal_binds": True}))


def test_wildcard_clause_renders_like():
    assert "LIKE '%' || 'phone' || '%'" in _sql(wildcard_clause(Product.title, "*phone*"))
    assert "LIKE 'phone' || '%'" in _sql(wildcard_clause(Product.title, "phone*"))
    assert "LIKE '%' || 'phone'" in _sql(wildcard_clause(Product.title, "*phone"))
    assert "product.title = 'phone'" in _sql(wildcard_clause(Product.title, "phone"))


def test_like_metacharacters_are_escaped():
    sql = _sql(wildcard_clause(Product.title, "*50%*"))
    assert "50/%" in sql
    assert "ESCAPE '/'" in sql


def test_range_clauses():
    assert range_clauses(Product.price, None, None) == []
    assert len(range_clauses(Product.price, 1, None)) == 1
    assert len(range_clauses(Product.price, 1, 5)) == 2
