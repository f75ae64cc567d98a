"""Seed the loads collection with sample data from data/loads.sample.json.

Replaces all existing loads. Negotiation and call records are left alone
unless --reset-history is given.

Usage: python -m scripts.seed_db [--reset-history]
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.loads.models import Load
from app.logging_config import configure_logging

SEED_FILE = Path(__file__).resolve().parent.parent / "data" / "loads.sample.json"

logger = logging.getLogger("scripts.seed_db")


async def seed(reset_history: bool = False):
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    db = client[settings.DATABASE_NAME]

    with open(SEED_FILE) as f:
        loads = json.load(f)

    # Fail before touching the database if the sample file has drifted
    for doc in loads:
        Load(**doc)

    await db.loads.delete_many({})  # destructive: wipes all existing loads
    result = await db.loads.insert_many(loads)
    logger.info("Seeded %d loads into '%s'", len(result.inserted_ids), settings.DATABASE_NAME)

    if reset_history:
        await db.negotiations.delete_many({})
        await db.call_records.delete_many({})
        logger.info("Cleared negotiation and call history")

    client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--reset-history", action="store_true", help="also clear negotiations and call_records")
    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed(reset_history=args.reset_history))
