import pytest

from app.v1_0.entities import PageDTO, ProductPageDTO
from app.v1_0.repositories.paginated import normalize_page


@pytest.mark.parametrize(
    "page,size,expected",
    [
        (None, None, (1, 10)),
        (0, 5, (1, 5)),
        (-3, 0, (1, 10)),
        (2, -1, (2, 10)),
        (1, 100, (1, 100)),
        (1, 101, (1, 100)),
        (4, 25, (4, 25)),
    ],
)
def test_normalize_page(page, size, expected):
    assert normalize_page(page, size) == expected


def test_normalize_page_uses_configured_limits():
    assert normalize_page(1, None, default_size=20, max_size=50) == (1, 20)
    assert normalize_page(1, 80, default_size=20, max_size=50) == (1, 50)


def test_page_envelope():
    page = PageDTO[int].build([1, 2, 3], total_items=23, page=2, size=10)
    assert page.total_pages == 3
    assert page.current_page == 2

    body = page.model_dump(by_alias=True)
    assert body == {"data": [1, 2, 3], "totalItems": 23, "currentPage": 2, "totalPages": 3}


def test_empty_page():
    page = ProductPageDTO.build([], total_items=0, page=1, size=10)
    assert page.total_pages == 0
    assert page.data == []
