"""
Roku IAP Relay — System routes
  GET /health   liveness + configuration check
"""
from fastapi import APIRouter

import config
from models import StatusResponse

router = APIRouter(tags=["System"])


@router.get("/health", response_model=StatusResponse, summary="Health check")
async def health_check():
    """
    Returns 200 while the relay process is up. Roku itself is never contacted.

    `status` is `degraded` when ROKU_DEV_TOKEN is unset, since every /validate
    call would then fail with 503.
    """
    if not config.ROKU_DEV_TOKEN:
        return StatusResponse(status="degraded", message="ROKU_DEV_TOKEN is not set")
    return StatusResponse(status="ok", message="Roku IAP relay is running")
