import logging
import uuid
from collections import Counter
from datetime import UTC, datetime
from typing import Any

from app import database
from app.calls.models import (
    CallbackReceipt,
    CallTotals,
    LocalMetrics,
    NotifyRepRequest,
    NotifyRepResponse,
)

logger = logging.getLogger(__name__)

CALL_RECORDS_COLLECTION = "call_records"
RECORD_SOURCE = "voice_agent"
RECENT_RECORDS = 10


def _outcome_of(record: dict[str, Any]) -> str:
    """Outcome label of a call: outcome, then classification.tag, then classification."""
    if record.get("outcome"):
        return str(record["outcome"])
    classification = record.get("classification")
    if isinstance(classification, dict):
        return str(classification.get("tag") or "Unknown")
    return str(classification or "Unknown")


def _sentiment_of(record: dict[str, Any]) -> str:
    return str(record.get("sentiment") or record.get("sentiment_class") or "Unknown")


def summarize_calls(records: list[dict[str, Any]]) -> LocalMetrics:
    """Tally outcomes and sentiments over ``records`` (in insertion order)."""
    return LocalMetrics(
        totals=CallTotals(calls=len(records)),
        by_outcome=dict(Counter(_outcome_of(r) for r in records)),
        by_sentiment=dict(Counter(_sentiment_of(r) for r in records)),
        last10=records[-RECENT_RECORDS:],
    )


async def store_callback(payload: dict[str, Any]) -> CallbackReceipt:
    """Store the end-of-call payload posted by the voice workflow.

    The record is stamped with an id, a UTC timestamp and its source; keys
    already present in the payload take precedence.
    """
    record = {
        "id": str(uuid.uuid4()),
        "at": datetime.now(UTC).isoformat(),
        "source": RECORD_SOURCE,
        **payload,
    }
    await database.append_record(CALL_RECORDS_COLLECTION, record)
    count = await database.count_records(CALL_RECORDS_COLLECTION)
    return CallbackReceipt(stored=True, count=count, id=str(record["id"]))


async def local_metrics() -> LocalMetrics:
    records = await database.list_records(CALL_RECORDS_COLLECTION)
    return summarize_calls(records)


def notify_rep(request: NotifyRepRequest) -> NotifyRepResponse:
    """Hand a booked call to a sales rep.

    There is no chat integration yet; the hand-off is only logged.
    """
    logger.info(
        "Notify rep: room=%s agreed_price=%s summary=%s",
        request.room_name,
        request.agreed_price,
        request.summary,
    )
    return NotifyRepResponse(sent=False, message="Logged locally.")
