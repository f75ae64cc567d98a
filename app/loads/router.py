from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import verify_api_key
from app.loads.models import Load, LoadSearchResponse, SearchQuery
from app.loads.service import get_load_by_id, search_loads

# All routes under /api/loads require a valid API key in the X-API-Key header.
router = APIRouter(prefix="/api/loads", tags=["loads"], dependencies=[Depends(verify_api_key)])


@router.post("/search", response_model=LoadSearchResponse)
async def search(query: SearchQuery):
    """Search for loads matching the carrier's lane and equipment.

    The voice AI calls this after asking the carrier where they are, where
    they want to go and what they pull. Any field may be missing or "".
    Returns at most three loads, highest board rate first.
    """
    results = await search_loads(query)
    return LoadSearchResponse(results=results, total=len(results))


@router.get("/{load_id}", response_model=Load)
async def get_load(load_id: str):
    """Retrieve a specific load by its ID."""
    load = await get_load_by_id(load_id)
    if not load:
        raise HTTPException(status_code=404, detail="Load not found")
    return load
