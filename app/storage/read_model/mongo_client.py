from collections.abc import AsyncIterator
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from app.core.logger import logger


async def init_read_model_database(url: str, database: str) -> AsyncIterator[AsyncDatabase]:
    """Container resource: one lazily-connected client per process, closed on shutdown."""
    client: AsyncMongoClient = AsyncMongoClient(url, connect=False, tz_aware=False)
    logger.info("[ReadModel] mongo client ready db=%s", database)
    try:
        yield client[database]
    finally:
        await client.close()
        logger.info("[ReadModel] mongo client closed")
