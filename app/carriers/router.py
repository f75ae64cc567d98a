from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.carriers.models import EligibilityResult
from app.carriers.service import check_eligibility
from app.dependencies import verify_api_key
from app.exceptions import InvalidInput

router = APIRouter(
    prefix="/api/carriers",
    tags=["carriers"],
    dependencies=[Depends(verify_api_key)],
)


@router.get("/eligibility", response_model=EligibilityResult)
async def eligibility(mc: Optional[str] = Query(None)):  # e.g. "MC-123456" or "123456"
    """Check a carrier's FMCSA authority before offering loads.

    The voice AI calls this right after the carrier gives their MC number.
    If the registry is down the carrier is let through with fallback=True.
    """
    try:
        return await check_eligibility(mc)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
