import logging
from typing import Optional, Sequence

from app import database
from app.loads.models import Load, SearchQuery
from app.matching.equipment import equipment_matches
from app.matching.places import place_matches
from app.numeric import to_number

logger = logging.getLogger(__name__)

# Results are read aloud to the carrier, best first.
MAX_RESULTS = 3


def load_matches(load: Load, query: SearchQuery) -> bool:
    """Check a single load against every active filter in the query.

    pickup_datetime is accepted but not evaluated.
    """
    return (
        place_matches(load.origin, query.origin)
        and place_matches(load.destination, query.destination)
        and equipment_matches(load.equipment_type, query.equipment_type)
    )


def rank_loads(loads: Sequence[Load], query: SearchQuery) -> list[Load]:
    """Filter ``loads`` by ``query`` and return the best-paying few.

    Sorted by loadboard_rate descending; non-numeric or missing rates count
    as 0 for ordering only (the load itself is returned unchanged). The sort
    is stable, so equal rates keep their snapshot order.
    """
    matched = [load for load in loads if load_matches(load, query)]
    matched.sort(key=lambda load: to_number(load.loadboard_rate), reverse=True)
    return matched[:MAX_RESULTS]


async def search_loads(query: SearchQuery) -> list[Load]:
    """Run a search against the current load snapshot in storage."""
    loads = await database.list_loads()
    results = rank_loads(loads, query)
    logger.info(
        "Load search origin=%r destination=%r equipment=%r matched %d of %d",
        query.origin,
        query.destination,
        query.equipment_type,
        len(results),
        len(loads),
    )
    return results


async def get_load_by_id(load_id: str) -> Optional[Load]:
    """Fetch a single load by its load_id.

    Returns None if no load exists with that ID, which the router
    converts into a 404 HTTP response.
    """
    return await database.find_load(load_id)
