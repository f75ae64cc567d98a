import logging
import uuid
from datetime import UTC, datetime
from typing import Optional, Sequence

from app.exceptions import InvalidInput, NotFound
from app.loads.models import Load
from app.negotiations.models import (
    NegotiationDecision,
    NegotiationNotes,
    NegotiationRequest,
)
from app.negotiations.offers import normalize_offer
from app.numeric import round_half_up, to_number

logger = logging.getLogger(__name__)

MIN_ACCEPT_RATIO = 0.95  # accept anything at or above 95% of board
WALK_AWAY_RATIO = 0.88  # reject anything below 88% of board


def decide(
    board_rate: float,
    offer: float,
    raw_offer: Optional[float] = None,
) -> NegotiationDecision:
    """Decide how to answer a carrier's offer on a load posted at ``board_rate``.

    Rules, first match wins:
    1. offer >= min_accept → accept at the carrier's offer
    2. offer < walk_away   → reject, quoting walk_away as our floor
    3. otherwise           → counter at the midpoint of board and offer,
                             never below min_accept

    Example with board 2200 (min_accept 2090, walk_away 1936):
    - 2090 → accept 2090
    - 2000 → counter 2100
    - 1900 → reject 1936

    Single-shot: nothing carries over between calls. ``raw_offer`` is only
    reported in the notes; it defaults to ``offer``.
    """
    min_accept = round_half_up(board_rate * MIN_ACCEPT_RATIO)
    walk_away = round_half_up(board_rate * WALK_AWAY_RATIO)
    notes = NegotiationNotes(
        board_rate=board_rate,
        min_accept=min_accept,
        walk_away=walk_away,
        raw_offer=offer if raw_offer is None else raw_offer,
        offer=offer,
    )

    if offer >= min_accept:
        return NegotiationDecision(decision="accept", price=offer, notes=notes)
    if offer < walk_away:
        return NegotiationDecision(decision="reject", price=walk_away, notes=notes)

    counter = max(min_accept, round_half_up((board_rate + offer) / 2))
    return NegotiationDecision(decision="counter", price=counter, notes=notes)


def negotiate_offer(load: Load, raw_offer) -> NegotiationDecision:
    """Evaluate a raw, possibly garbled offer against a load's board rate.

    Non-numeric board rates and offers read as 0. The offer is corrected
    for transcription errors before the decision is made.
    """
    board_rate = to_number(load.loadboard_rate)
    received = to_number(raw_offer)
    offer = normalize_offer(received, board_rate)
    if offer != received:
        logger.info(
            "Corrected transcribed offer for load %s: %s -> %s",
            load.load_id,
            received,
            offer,
        )
    return decide(board_rate, offer, raw_offer=received)


def find_load(loads: Sequence[Load], load_id: str) -> Load:
    for load in loads:
        if load.load_id == load_id:
            return load
    raise NotFound(f"Load {load_id!r} not found")


def evaluate_negotiation(
    loads: Sequence[Load],
    request: NegotiationRequest,
) -> NegotiationDecision:
    """Resolve the requested load in ``loads`` and decide on the offer.

    Raises:
        InvalidInput: the request has no load_id.
        NotFound: no load in the snapshot has that load_id.
    """
    load_id = (request.load_id or "").strip()
    if not load_id:
        raise InvalidInput("load_id required")

    load = find_load(loads, load_id)
    decision = negotiate_offer(load, request.carrier_offer_usd)
    logger.info(
        "Negotiation on load %s: offer=%s board=%s -> %s at %s",
        load_id,
        decision.notes.offer,
        decision.notes.board_rate,
        decision.decision,
        decision.price,
    )
    return decision


def negotiation_record(request: NegotiationRequest, decision: NegotiationDecision) -> dict:
    """Build the opaque history record handed to storage after a decision."""
    return {
        "id": str(uuid.uuid4()),
        "at": datetime.now(UTC).isoformat(),
        "load_id": request.load_id,
        **decision.model_dump(),
    }
