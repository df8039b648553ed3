"""
Shared fixtures: in-memory SQLite primary store, fake sales read model,
services wired by hand and signed bearer tokens.
"""
import os

# antes de importar app.*: Settings() valida al importarse
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "test"

import datetime as dt
from collections.abc import AsyncGenerator
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest
from jose import jwt as jose_jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security.deps import AuthContext
from app.core.settings import settings
from app.v1_0.models import Base, UserRole
from app.v1_0.repositories import (
    CartRepository,
    ProductRepository,
    SaleRepository,
    UserRepository,
)
from app.v1_0.schemas import SaleCreate, SaleItemInput
from app.v1_0.services import CartService, ProductService, SaleService, UserService


class FakeSaleReadModel:
    """In-memory stand-in for SaleReadModelRepository."""

    def __init__(self) -> None:
        self.documents: Dict[int, Dict[str, Any]] = {}
        self.upserts: List[Dict[str, Any]] = []
        self.fail = False
        self.summary_rows: List[Dict[str, Any]] = []
        self.summary_calls: List[tuple] = []

    async def upsert(self, document: Dict[str, Any]) -> None:
        if self.fail:
            raise ConnectionError("read model unavailable")
        self.upserts.append(document)
        self.documents[document["_id"]] = document

    async def delete(self, sale_id: int) -> bool:
        return self.documents.pop(sale_id, None) is not None

    async def summary_by_branch_and_day(
        self, date_from: Optional[dt.date] = None, date_to: Optional[dt.date] = None
    ) -> List[Dict[str, Any]]:
        self.summary_calls.append((date_from, date_to))
        return self.summary_rows


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest.fixture
def read_model() -> FakeSaleReadModel:
    return FakeSaleReadModel()


@pytest.fixture
def sale_service(read_model) -> SaleService:
    return SaleService(SaleRepository(), read_model)


@pytest.fixture
def product_service() -> ProductService:
    return ProductService(ProductRepository())


@pytest.fixture
def user_service() -> UserService:
    return UserService(UserRepository())


@pytest.fixture
def cart_service() -> CartService:
    return CartService(CartRepository(), UserRepository(), ProductRepository())


@pytest.fixture
def auth() -> AuthContext:
    return AuthContext(user_id="1", username="tester", role=UserRole.ADMIN)


def sale_payload(number: str = "S-0001", items=None, **overrides) -> SaleCreate:
    if items is None:
        items = [(1, "Mouse", 4, "100")]
    data = dict(
        number=number,
        date=dt.date(2025, 3, 1),
        customer_id=7,
        customer_name="acme",
        branch_id=1,
        branch_name="centro",
        items=[
            SaleItemInput(
                product_id=pid,
                product_name=name,
                quantity=qty,
                unit_price=Decimal(price),
            )
            for pid, name, qty, price in items
        ],
    )
    data.update(overrides)
    return SaleCreate(**data)


@pytest.fixture
def make_token():
    def _make(role: str = "Admin", sub: str = "1", name: str = "tester", **claims) -> str:
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": sub,
            "name": name,
            "role": role,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int((now + dt.timedelta(hours=1)).timestamp()),
        }
        payload.update(claims)
        return jose_jwt.encode(payload, settings.JWT_SECRET.get_secret_value(), algorithm="HS256")

    return _make


@pytest.fixture
def build_sale():
    return sale_payload
