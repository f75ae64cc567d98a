import hmac
import logging
from typing import Annotated

from fastapi import Header, HTTPException

from app.config import settings

logger = logging.getLogger(__name__)


async def verify_api_key(x_api_key: Annotated[str, Header(alias="X-API-Key")]) -> str:
    """Reject requests whose X-API-Key doesn't match the configured key.

    A missing header fails request validation (422) before this runs.
    """
    if not hmac.compare_digest(x_api_key.encode(), settings.API_KEY.encode()):
        logger.warning("Rejected request with invalid API key")
        raise HTTPException(status_code=401, detail="Invalid API key")
    return x_api_key
