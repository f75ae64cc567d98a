"""Free-text US place matching for load search.

Carriers say "Dallas", "Dallas, Texas" or "dallas tx" on the phone; loads
are stored as "Dallas, TX". Both sides are reduced to a canonical form
(lower-case, no punctuation, state names abbreviated) and then compared
with a deliberately permissive rule:

  - equal canonical forms match
  - equal city tokens (the part before the first comma) match
  - either canonical form containing the other's city token matches

So "Dallas" matches "Dallas, TX" and "Dallas, Texas" matches "Dallas, TX".
The containment rule is coarse on purpose: a bare state query such as
"TX" only matches when its token happens to appear in the candidate.
"""

import re
from types import MappingProxyType
from typing import Optional

STATE_ABBREVIATIONS = MappingProxyType({
    "alabama": "al",
    "alaska": "ak",
    "arizona": "az",
    "arkansas": "ar",
    "california": "ca",
    "colorado": "co",
    "connecticut": "ct",
    "delaware": "de",
    "florida": "fl",
    "georgia": "ga",
    "hawaii": "hi",
    "idaho": "id",
    "illinois": "il",
    "indiana": "in",
    "iowa": "ia",
    "kansas": "ks",
    "kentucky": "ky",
    "louisiana": "la",
    "maine": "me",
    "maryland": "md",
    "massachusetts": "ma",
    "michigan": "mi",
    "minnesota": "mn",
    "mississippi": "ms",
    "missouri": "mo",
    "montana": "mt",
    "nebraska": "ne",
    "nevada": "nv",
    "new hampshire": "nh",
    "new jersey": "nj",
    "new mexico": "nm",
    "new york": "ny",
    "north carolina": "nc",
    "north dakota": "nd",
    "ohio": "oh",
    "oklahoma": "ok",
    "oregon": "or",
    "pennsylvania": "pa",
    "rhode island": "ri",
    "south carolina": "sc",
    "south dakota": "sd",
    "tennessee": "tn",
    "texas": "tx",
    "utah": "ut",
    "vermont": "vt",
    "virginia": "va",
    "washington": "wa",
    "west virginia": "wv",
    "wisconsin": "wi",
    "wyoming": "wy",
})

# Longest names first: "west virginia" before "virginia".
_STATE_PATTERN = re.compile(
    r"\b("
    + "|".join(re.escape(name) for name in sorted(STATE_ABBREVIATIONS, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)

_PUNCTUATION = re.compile(r"[.,]")
_WHITESPACE = re.compile(r"\s+")


def normalize_place(text: Optional[str]) -> str:
    """Canonicalize a place string for comparison.

    >>> normalize_place("  Dallas,   Texas. ")
    'dallas tx'

    Idempotent: normalizing an already-normalized string is a no-op.
    """
    if not text:
        return ""
    cleaned = _PUNCTUATION.sub("", text.lower())
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    return _STATE_PATTERN.sub(lambda m: STATE_ABBREVIATIONS[m.group(1).lower()], cleaned)


def city_token(text: Optional[str]) -> str:
    """Return the normalized part of ``text`` before its first comma."""
    if not text:
        return ""
    return normalize_place(text.split(",", 1)[0])


def place_matches(candidate: Optional[str], query: Optional[str]) -> bool:
    """Check whether a load's place ``candidate`` satisfies a search ``query``.

    An empty or missing query matches everything; an empty candidate
    never matches a non-empty query.

    Departure from the plain containment rule: an empty city token (query
    ", GA" or ".") is not treated as a substring of every place, so such
    queries only match by exact normalized equality.
    """
    if not query or not query.strip():
        return True
    if not candidate:
        return False

    candidate_norm = normalize_place(candidate)
    query_norm = normalize_place(query)
    if candidate_norm == query_norm:
        return True

    candidate_city = city_token(candidate)
    query_city = city_token(query)
    # An empty token is a substring of everything; never let it match.
    if candidate_city and candidate_city == query_city:
        return True
    if query_city and query_city in candidate_norm:
        return True
    if candidate_city and candidate_city in query_norm:
        return True
    return False
