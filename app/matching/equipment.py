"""Equipment-type matching against a small fixed taxonomy.

Unlike places, equipment categories must match exactly once synonyms are
folded: a reefer load is never offered to a dry-van carrier.
"""

import re
from types import MappingProxyType
from typing import Optional

EQUIPMENT_SYNONYMS = MappingProxyType({
    "van": "dry van",
    "dry van": "dry van",
    "dryvan": "dry van",
    "reefer": "reefer",
    "refrigerated": "reefer",
    "refrigerated van": "reefer",
    "flatbed": "flatbed",
    "flat bed": "flatbed",
    "step deck": "step deck",
    "stepdeck": "step deck",
})

_SEPARATORS = re.compile(r"[\s\-_]+")


def canonical_equipment(text: Optional[str]) -> str:
    """Map an equipment string to its canonical category.

    Unknown types fall back to their own lower-cased form, so "Power Only"
    still matches "power only".
    """
    if not text:
        return ""
    cleaned = _SEPARATORS.sub(" ", text.lower()).strip()
    return EQUIPMENT_SYNONYMS.get(cleaned, cleaned)


def equipment_matches(load_equipment: Optional[str], query_equipment: Optional[str]) -> bool:
    if not query_equipment or not query_equipment.strip():
        return True
    return canonical_equipment(load_equipment) == canonical_equipment(query_equipment)
