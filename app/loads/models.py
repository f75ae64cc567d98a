from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _empty_to_none(v):
    """Coerce empty strings to None so "" means "no constraint"."""
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


NullableStr = Annotated[Optional[str], BeforeValidator(_empty_to_none)]


class Load(BaseModel):
    """A freight load as stored and as returned to the voice agent.

    Loads are read-only snapshots: the model is frozen. Only the fields the
    matching logic reads are typed; timestamps, rate and the descriptive
    fields are kept exactly as stored (no datetime parsing, no int -> float),
    and extra fields (miles, dimensions, ...) are carried through untouched.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    load_id: str  # Unique identifier, e.g. "L-1001"
    origin: Optional[str] = None  # Pickup place, e.g. "Dallas, TX"
    destination: Optional[str] = None  # Delivery place, e.g. "Atlanta, GA"
    equipment_type: Optional[str] = None  # "Dry Van", "Reefer", "Flatbed", ...
    pickup_datetime: Any = None  # e.g. "2025-08-22T09:00:00-05:00"
    delivery_datetime: Any = None
    # Posted price in USD. Non-numeric values read as 0 wherever a number is needed.
    loadboard_rate: Any = None
    notes: Any = None
    weight: Any = None  # e.g. 38000 or "38000 lb"
    commodity_type: Any = None


class SearchQuery(BaseModel):
    """Carrier preferences extracted by the voice agent.

    Every field is optional; a missing or empty field matches everything.
    pickup_datetime is accepted but not used as a filter yet.
    """

    origin: NullableStr = None  # e.g. "Dallas" or "Dallas, Texas"
    destination: NullableStr = None
    equipment_type: NullableStr = None  # e.g. "Van", "Reefer"
    pickup_datetime: NullableStr = None


class LoadSearchResponse(BaseModel):
    """Top matching loads, best paying first."""

    results: list[Load]  # At most MAX_RESULTS loads
    total: int  # len(results)
