from typing import Any, Optional, Union

from pydantic import BaseModel


class CallbackReceipt(BaseModel):
    stored: bool
    count: int  # Total call records after this one
    id: str  # Id stamped onto the stored record


class CallTotals(BaseModel):
    calls: int


class LocalMetrics(BaseModel):
    """Quick tallies over every stored call record."""

    totals: CallTotals
    by_outcome: dict[str, int]  # e.g. {"Booked": 12, "Unknown": 3}
    by_sentiment: dict[str, int]  # e.g. {"positive": 9}
    last10: list[dict[str, Any]]  # Most recent records, oldest first


class NotifyRepRequest(BaseModel):
    room_name: Optional[str] = None  # Call room the rep should join
    summary: Optional[str] = None
    agreed_price: Union[float, str, None] = None  # As spoken, e.g. 2100 or "2100 dollars"


class NotifyRepResponse(BaseModel):
    sent: bool
    message: str
