"""
Roku IAP Relay — Validation routes
  POST /validate   validate a Roku transaction with the relay's developer token
"""
from functools import lru_cache

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

import config
from errors import DecodeError, IAPResponseError, TransportError
from guards import limiter, verify_client_secret
from models import ValidateRequest, ValidationResult
from roku import Config, IAPClient, new_with_config

router = APIRouter(tags=["Validation"])


@lru_cache(maxsize=1)
def get_client() -> IAPClient:
    """Roku client built once from the relay settings. Tests swap it via dependency_overrides."""
    if not config.ROKU_DEV_TOKEN:
        raise HTTPException(
            status_code=503,
            detail="Relay not configured: set ROKU_DEV_TOKEN.",
        )
    return new_with_config(Config(
        dev_token=config.ROKU_DEV_TOKEN,
        is_production=config.ROKU_IS_PRODUCTION,
        timeout=config.ROKU_TIMEOUT_SEC,
    ))


@router.post("/validate", response_model=ValidationResult, summary="Validate a Roku transaction",
             dependencies=[Depends(verify_client_secret)])
@limiter.limit(config.VALIDATE_RATE_LIMIT)
def validate_transaction(
    request: Request,
    data: ValidateRequest,
    client: IAPClient = Depends(get_client),
):
    """
    Validate a Roku Pay transaction id and return the purchase record as Roku reports it.

    - **transaction_id**: the id returned by the Roku channel store after purchase

    **Error mapping:**
    - Roku rejected the transaction → `400` with Roku's message, status and code
    - Roku unreachable → `502` (`504` on timeout)
    - Roku answered 2xx with an unexpected body → `502`
    """
    try:
        return client.verify(data.transaction_id)
    except IAPResponseError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message":         e.message,
                "status":          e.status,
                "error_code":      e.error_code,
                "error_details":   e.error_details,
                "upstream_status": e.status_code,
            },
        )
    except TransportError as e:
        status_code = 504 if isinstance(e.__cause__, httpx.TimeoutException) else 502
        raise HTTPException(status_code=status_code, detail=f"Roku unreachable: {e}")
    except DecodeError as e:
        raise HTTPException(status_code=502, detail=f"Unexpected Roku response: {e}")
