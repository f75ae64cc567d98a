from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from app.calls.models import CallbackReceipt, LocalMetrics, NotifyRepRequest, NotifyRepResponse
from app.calls.service import local_metrics, notify_rep, store_callback
from app.dependencies import verify_api_key

router = APIRouter(
    prefix="/api/calls",
    tags=["calls"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("/callback", response_model=CallbackReceipt)
async def callback(payload: Optional[dict[str, Any]] = Body(None)):
    """Store the full end-of-call payload from the voice workflow for metrics."""
    return await store_callback(payload or {})


@router.get("/metrics", response_model=LocalMetrics)
async def metrics():
    """Call totals, outcome and sentiment breakdowns, and the last ten calls."""
    return await local_metrics()


@router.post("/notify-rep", response_model=NotifyRepResponse)
async def notify(request: NotifyRepRequest):
    """Tell a sales rep a call is ready for hand-off (logged only for now)."""
    return notify_rep(request)
