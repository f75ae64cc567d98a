from fastapi import APIRouter, Depends, HTTPException

from app import database
from app.dependencies import verify_api_key
from app.exceptions import InvalidInput, NotFound
from app.negotiations.models import NegotiationDecision, NegotiationRequest
from app.negotiations.service import evaluate_negotiation, negotiation_record

NEGOTIATIONS_COLLECTION = "negotiations"

# All routes under /api/negotiations require a valid API key in the X-API-Key header.
router = APIRouter(
    prefix="/api/negotiations",
    tags=["negotiations"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("/negotiate", response_model=NegotiationDecision)
async def negotiate(request: NegotiationRequest):
    """Decide whether to accept, counter or reject a carrier's offer.

    Called by the voice AI each time the carrier names a price.

    Flow:
    1. No load_id → 400
    2. Look up the load in the current snapshot → 404 if not found
    3. Correct obvious transcription errors, then apply the pricing rules
    4. Record the outcome for the metrics dashboard
    """
    loads = await database.list_loads()
    try:
        decision = evaluate_negotiation(loads, request)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFound as exc:
        raise HTTPException(status_code=404, detail="Load not found") from exc

    await database.append_record(NEGOTIATIONS_COLLECTION, negotiation_record(request, decision))
    return decision
