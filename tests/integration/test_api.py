import httpx
import pytest
from dependency_injector import providers

from app.main import app
from app.storage.database.db_connector import get_db
from app.v1_0.repositories import SaleRepository
from app.v1_0.services import SaleService


@pytest.fixture
async def client(session_factory, read_model):
    async def _get_db():
        async with session_factory() as s:
            yield s

    container = app.state.container
    app.dependency_overrides[get_db] = _get_db
    container.api_container.sale_service.override(
        providers.Object(SaleService(SaleRepository(), read_model))
    )

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    container.api_container.sale_service.reset_override()
    app.dependency_overrides.clear()


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


SALE = {
    "number": "S-100",
    "date": "2025-03-01",
    "customerId": 7,
    "customerName": "acme",
    "branchId": 1,
    "branchName": "centro",
    "items": [
        {"productId": 1, "productName": "Mouse", "quantity": 4, "unitPrice": 100},
        {"productId": 2, "productName": "Monitor", "quantity": 10, "unitPrice": 50},
    ],
}


async def test_health(client):
    res = await client.get("/api/ready")
    assert res.status_code == 200
    assert res.json()["message"] == "ready"


async def test_create_sale_requires_token(client):
    res = await client.post("/api/sales", json=SALE)
    assert res.status_code == 401
    assert res.json()["type"] == "Unauthorized"


async def test_create_sale_with_bad_token(client, make_token):
    token = make_token(aud="someone-else")
    res = await client.post("/api/sales", json=SALE, headers=_bearer(token))
    assert res.status_code == 401


async def test_create_and_fetch_sale(client, make_token, read_model):
    res = await client.post("/api/sales", json=SALE, headers=_bearer(make_token("Customer")))
    assert res.status_code == 201
    body = res.json()
    assert body["total"] == 760.0
    assert body["items"][0]["discountPercent"] == 0.1
    assert body["customerName"] == "acme"
    assert len(read_model.upserts) == 1

    res = await client.get(f"/api/sales/{body['id']}")
    assert res.status_code == 200
    assert res.json()["number"] == "S-100"


async def test_duplicate_number_is_conflict(client, make_token):
    headers = _bearer(make_token())
    assert (await client.post("/api/sales", json=SALE, headers=headers)).status_code == 201

    res = await client.post("/api/sales", json=SALE, headers=headers)
    assert res.status_code == 409
    assert res.json() == {"type": "Conflict", "error": "Sale number already exists", "detail": "S-100"}


async def test_quantity_above_limit_is_validation_error(client, make_token):
    payload = dict(SALE, items=[{"productId": 3, "productName": "Cable", "quantity": 21, "unitPrice": 2}])
    res = await client.post("/api/sales", json=payload, headers=_bearer(make_token()))
    assert res.status_code == 422
    assert res.json() == {
        "type": "ValidationError",
        "error": "Quantity above 20 identical items is not allowed.",
        "detail": 3,
    }


async def test_malformed_payload_is_validation_error(client, make_token):
    payload = dict(SALE, items=[])
    res = await client.post("/api/sales", json=payload, headers=_bearer(make_token()))
    assert res.status_code == 422
    assert res.json()["type"] == "ValidationError"


async def test_unknown_sale_is_not_found(client):
    res = await client.get("/api/sales/999")
    assert res.status_code == 404
    assert res.json() == {"type": "NotFound", "error": "Sale not found", "detail": 999}


async def test_cancel_item_over_http(client, make_token):
    headers = _bearer(make_token())
    sale = (await client.post("/api/sales", json=SALE, headers=headers)).json()
    item_id = sale["items"][1]["id"]

    res = await client.post(f"/api/sales/{sale['id']}/items/{item_id}/cancel", headers=headers)
    assert res.status_code == 200
    assert res.json()["total"] == 360.0
    assert res.json()["cancelled"] is False

    res = await client.post(f"/api/sales/{sale['id']}/cancel", headers=headers)
    assert res.json()["cancelled"] is True


async def test_list_sales_envelope(client, make_token):
    headers = _bearer(make_token())
    for n in ("S-1", "S-2", "S-3"):
        await client.post("/api/sales", json=dict(SALE, number=n), headers=headers)

    res = await client.get("/api/sales", params={"_page": 1, "_size": 2, "_order": "number desc"})
    body = res.json()
    assert res.status_code == 200
    assert body["totalItems"] == 3
    assert body["totalPages"] == 2
    assert body["currentPage"] == 1
    assert [s["number"] for s in body["data"]] == ["S-3", "S-2"]


async def test_summary_endpoint(client, read_model):
    read_model.summary_rows = [
        {"branch_id": 1, "branch_name": "centro", "day": "2025-03-01", "total_amount": 760},
    ]
    res = await client.get("/api/sales/summary", params={"from": "2025-03-01", "to": "2025-03-31"})
    assert res.status_code == 200
    assert res.json() == [
        {"branchId": 1, "branchName": "centro", "day": "2025-03-01", "totalAmount": 760.0}
    ]


async def test_product_write_requires_manager_or_admin(client, make_token):
    product = {"title": "lamp", "price": 30, "category": "furniture"}

    res = await client.post("/api/products", json=product, headers=_bearer(make_token("Customer")))
    assert res.status_code == 403
    assert res.json()["type"] == "Forbidden"

    res = await client.post("/api/products", json=product, headers=_bearer(make_token("Manager")))
    assert res.status_code == 201
    assert res.json()["rating"] == {"rate": 0.0, "count": 0}

    res = await client.get("/api/products", params={"title": "lam*"})
    assert res.json()["totalItems"] == 1


async def test_unknown_role_is_unauthorized(client, make_token):
    res = await client.post(
        "/api/products",
        json={"title": "lamp", "price": 30, "category": "furniture"},
        headers=_bearer(make_token("Guest")),
    )
    assert res.status_code == 401


async def test_list_products_of_category(client, make_token):
    headers = _bearer(make_token("Admin"))
    for title, category in (("lamp", "furniture"), ("desk", "Furniture"), ("ring", "jewelery")):
        res = await client.post(
            "/api/products",
            json={"title": title, "price": 10, "category": category},
            headers=headers,
        )
        assert res.status_code == 201

    res = await client.get("/api/products/category/furniture", params={"_order": "title"})
    assert res.status_code == 200
    body = res.json()
    assert body["totalItems"] == 2
    assert [p["title"] for p in body["data"]] == ["desk", "lamp"]
