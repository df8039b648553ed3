from collections.abc import AsyncGenerator
from typing import Any
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from app.core.settings import settings

_ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "postgres": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def build_url(raw: str) -> URL:
    """
    Normaliza el DATABASE_URL al driver async.
    Para postgres descarta la query (sslmode/channel_binding no llegan a asyncpg).
    """
    u = make_url(raw)
    driver = _ASYNC_DRIVERS.get(u.drivername, u.drivername)
    if not driver.startswith("postgresql"):
        return u.set(drivername=driver)
    return URL.create(
        drivername=driver,
        username=u.username,
        password=u.password,
        host=u.host,
        port=u.port,
        database=u.database,
    )


def build_engine(url: URL) -> AsyncEngine:
    kwargs: dict[str, Any] = {}
    if url.drivername.startswith("postgresql"):
        kwargs = {
            "poolclass": NullPool,
            "pool_pre_ping": True,
            "execution_options": {"isolation_level": "READ COMMITTED"},
            "connect_args": {
                "ssl": url.host not in ("localhost", "127.0.0.1", "db"),
                "statement_cache_size": 0,
            },
        }
    return create_async_engine(url.render_as_string(hide_password=False), **kwargs)


engine = build_engine(build_url(settings.DATABASE_URL.get_secret_value()))

async_session = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()

async def dispose_engine() -> None:
    await engine.dispose()
