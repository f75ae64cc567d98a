"""MongoDB storage for loads, negotiation outcomes and call records.

Uses a module-level singleton client. Call connect_db() at app startup
(via the FastAPI lifespan) before using get_database() or any of the
collection helpers below.

The decision logic never talks to MongoDB directly: routers fetch a load
snapshot with list_loads(), hand it to the pure services, and pass the
resulting record back to append_record().
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pydantic import ValidationError

from app.config import settings
from app.loads.models import Load

logger = logging.getLogger(__name__)

client: Optional[AsyncIOMotorClient] = None


def get_database() -> AsyncIOMotorDatabase:
    if client is None:
        raise RuntimeError("Database client is not initialized. Call connect_db() first.")
    return client[settings.DATABASE_NAME]


async def connect_db() -> None:
    global client
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    logger.info("Connected MongoDB client for database '%s'", settings.DATABASE_NAME)


async def disconnect_db() -> None:
    global client
    if client:
        client.close()
        client = None


def _to_load(doc: dict) -> Optional[Load]:
    try:
        return Load(**doc)
    except ValidationError as exc:
        logger.warning(
            "Skipping unreadable load %r: %d validation error(s)",
            doc.get("load_id"),
            exc.error_count(),
        )
        return None


async def list_loads() -> list[Load]:
    """Return every valid load in collection order.

    Order matters: search ranking is a stable sort, so ties on rate keep
    the order loads were stored in. Documents that can't be read as a Load
    (no load_id, non-text origin, ...) are logged and skipped.
    """
    db = get_database()
    docs = await db.loads.find({}, {"_id": 0}).to_list(length=None)
    loads = []
    for doc in docs:
        load = _to_load(doc)
        if load is not None:
            loads.append(load)
    return loads


async def find_load(load_id: str) -> Optional[Load]:
    db = get_database()
    doc = await db.loads.find_one({"load_id": load_id}, {"_id": 0})
    if not doc:
        return None
    return _to_load(doc)


async def append_record(collection: str, record: dict) -> None:
    """Insert an opaque record into ``collection``.

    insert_one is atomic per document, so concurrent appends never
    overwrite each other. A copy is inserted because the driver adds
    an ``_id`` key to the dict it is given.
    """
    db = get_database()
    await db[collection].insert_one(dict(record))


async def count_records(collection: str) -> int:
    db = get_database()
    return await db[collection].count_documents({})


async def list_records(collection: str) -> list[dict]:
    """Return all records of ``collection`` in insertion order, without _id."""
    db = get_database()
    return await db[collection].find({}, {"_id": 0}).to_list(length=None)
