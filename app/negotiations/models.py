from typing import Literal, Optional, Union

from pydantic import BaseModel


class NegotiationRequest(BaseModel):
    """Request body for evaluating a carrier's price offer.

    Sent by the voice AI when a carrier proposes a rate for a load.
    The loadboard_rate is NOT included here: it's looked up from storage
    so the voice agent can never bypass our pricing limits.

    Both fields are loosely typed on purpose. A missing load_id is reported
    as a 400 by the router rather than a schema error, and a garbled offer
    ("twenty one hundred", "") is treated as 0 instead of failing the call.
    """

    load_id: Optional[str] = None  # The load being negotiated, e.g. "L-1001"
    carrier_offer_usd: Union[float, str, None] = None  # What the carrier asked for


class NegotiationNotes(BaseModel):
    """Thresholds behind a decision, reported on every branch for traceability."""

    board_rate: float  # Posted rate the thresholds derive from
    min_accept: int  # 95% of board: accept at or above
    walk_away: int  # 88% of board: reject below
    raw_offer: float  # Offer as received, before transcription correction
    offer: float  # Offer actually evaluated


class NegotiationDecision(BaseModel):
    """What the voice agent should say next.

    - accept: book at ``price`` (the carrier's offer)
    - counter: propose ``price``
    - reject: the offer is too low; ``price`` is our walk-away floor
    """

    decision: Literal["accept", "counter", "reject"]
    price: float
    notes: NegotiationNotes
