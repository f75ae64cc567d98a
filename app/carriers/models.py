from typing import Optional

from pydantic import BaseModel


class EligibilityResult(BaseModel):
    """Whether a carrier may be offered loads, per the FMCSA registry.

    When the registry can't be reached (or no web key is configured) the
    result is a permissive fallback: eligible=True, authority="unknown",
    fallback=True. The voice agent can then proceed with the call.
    """

    eligible: bool
    mc_number: str  # Docket number, digits only
    usdot: Optional[str] = None
    carrier_name: Optional[str] = None  # Legal name, else DBA name
    authority: Optional[str] = None  # "active", "inactive", "unknown" or a raw status code
    oos: bool = False  # Out of service
    fallback: bool = False  # True when this is not a real registry answer
    error: Optional[str] = None  # Why the registry lookup failed, if it did
    raw: Optional[dict] = None  # Registry carrier record, only when DEBUG is on
