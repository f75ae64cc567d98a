"""Carrier eligibility lookup against the FMCSA QCMobile API.

A carrier is eligible when it is allowed to operate, its authority is
active and it is not out of service. Registry outages must never block a
call, so any lookup failure degrades to a permissive fallback result.
"""

import logging
import re
from typing import Any, Optional

import httpx

from app.carriers.models import EligibilityResult
from app.config import settings
from app.exceptions import InvalidInput, Unavailable

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")
_OUT_OF_SERVICE = re.compile(r"out\s*of\s*service", re.IGNORECASE)

# FMCSA statusCode → authority label
_AUTHORITY_BY_STATUS = {"A": "active", "I": "inactive"}


def only_digits(value: Optional[str]) -> str:
    return _NON_DIGITS.sub("", value or "")


def fallback_result(mc: str, error: Optional[str] = None) -> EligibilityResult:
    return EligibilityResult(
        eligible=True,
        mc_number=mc,
        authority="unknown",
        fallback=True,
        error=error,
    )


def _extract_carrier(payload: Any) -> dict:
    """Dig the carrier record out of a QCMobile response.

    Observed shapes: {"content": [{"carrier": {...}}]}, {"content": {...}},
    or the carrier object itself.
    """
    if not isinstance(payload, dict):
        return {}
    content = payload.get("content")
    if isinstance(content, list):
        content = content[0] if content else None
    if content is None:
        content = payload
    if not isinstance(content, dict):
        return {}
    carrier = content.get("carrier") or content
    return carrier if isinstance(carrier, dict) else {}


def parse_carrier(mc: str, carrier: dict) -> EligibilityResult:
    """Map a QCMobile carrier record onto an EligibilityResult."""
    legal_name = carrier.get("legalName") or carrier.get("dbaName") or None
    dot_number = carrier.get("dotNumber") or carrier.get("usdot") or None

    status_code = str(carrier.get("statusCode") or "").upper()
    authority = _AUTHORITY_BY_STATUS.get(status_code, status_code or None)

    allowed = str(carrier.get("allowedToOperate") or "").upper() == "Y"
    oos = (
        bool(carrier.get("oosDate"))
        or str(carrier.get("oosStatus") or "").upper() == "Y"
        or bool(_OUT_OF_SERVICE.search(str(carrier.get("safetyRating") or "")))
    )

    return EligibilityResult(
        eligible=allowed and authority == "active" and not oos,
        mc_number=mc,
        usdot=str(dot_number) if dot_number else None,
        carrier_name=legal_name,
        authority=authority,
        oos=oos,
        raw=carrier if settings.DEBUG else None,
    )


async def lookup_carrier(mc: str, client: httpx.AsyncClient) -> EligibilityResult:
    """Query the registry for ``mc``.

    Raises:
        Unavailable: no web key is configured, or the registry call failed.
    """
    if not settings.FMCSA_WEBKEY:
        raise Unavailable("FMCSA web key not configured")

    url = f"{settings.FMCSA_BASE_URL}/carriers/docket-number/{mc}"
    try:
        response = await client.get(
            url,
            params={"webKey": settings.FMCSA_WEBKEY},
            headers={"accept": "application/json"},
            timeout=settings.FMCSA_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        raise Unavailable(f"FMCSA {exc.response.status_code}") from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise Unavailable(str(exc) or exc.__class__.__name__) from exc

    return parse_carrier(mc, _extract_carrier(payload))


async def check_eligibility(
    mc: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> EligibilityResult:
    """Check whether the carrier with docket number ``mc`` may haul loads.

    ``client`` is injectable for tests; by default a short-lived client is
    opened per lookup.

    Raises:
        InvalidInput: ``mc`` contains no digits.
    """
    digits = only_digits(mc)
    if not digits:
        raise InvalidInput("mc required")

    if not settings.FMCSA_WEBKEY:
        # Expected in local/demo setups, so no warning.
        return fallback_result(digits)

    try:
        if client is not None:
            return await lookup_carrier(digits, client)
        async with httpx.AsyncClient() as owned_client:
            return await lookup_carrier(digits, owned_client)
    except Unavailable as exc:
        logger.warning("FMCSA lookup for MC %s failed, using fallback: %s", digits, exc)
        return fallback_result(digits, error=str(exc))
