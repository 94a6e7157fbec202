"""
Roku IAP Relay — Request guards
  - verify_client_secret: shared app secret header (blocks unauthenticated requests)
  - limiter:              per-IP rate limiter, applied with @limiter.limit()

The relay holds the Roku developer token, so every validation it performs is
billed to that token. Both guards sit in front of /validate.
"""
from fastapi import Header, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

import config


async def verify_client_secret(x_relay_secret: str = Header(default="")) -> None:
    """
    Validate the shared app secret sent in every request as `X-Relay-Secret`.
    Set CLIENT_SECRET env var to enable. If unset, validation is skipped (dev mode).
    """
    if config.CLIENT_SECRET and x_relay_secret != config.CLIENT_SECRET:
        raise HTTPException(status_code=401, detail="Invalid or missing relay secret.")


def client_ip(request: Request) -> str:
    """Rate-limit key. CF-Connecting-IP when behind Cloudflare, else the peer address."""
    return request.headers.get("CF-Connecting-IP") or get_remote_address(request)


limiter = Limiter(key_func=client_ip)
