"""
Roku IAP Relay
==============
Server-side validation of Roku Pay transactions.

The Roku developer token must never ship inside a channel. Channels send the
transaction id here instead; the relay validates it with Roku and returns the
purchase record.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import CLIENT_SECRET, LOG_LEVEL, ROKU_DEV_TOKEN, ROKU_TIMEOUT_SEC
from guards import limiter
from roku import DEFAULT_TIMEOUT
from routers import system, validate

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    if not ROKU_DEV_TOKEN:
        logger.warning("ROKU_DEV_TOKEN is unset; /validate will answer 503")
    if not CLIENT_SECRET:
        logger.warning("CLIENT_SECRET is unset; running in dev mode without auth")
    logger.info("Roku IAP relay started (timeout=%ss)", ROKU_TIMEOUT_SEC or DEFAULT_TIMEOUT)
    yield
    logger.info("Roku IAP relay shutting down")


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    lifespan=lifespan,
    title="Roku IAP Relay",
    description="""
Server-side validation of **Roku Pay** in-channel purchases.

## How it works

1. The channel completes a purchase and receives a transaction id
2. The channel posts the transaction id to `/validate`
3. The relay calls Roku's `validate-transaction` service with its developer token
4. The purchase record is returned as Roku reports it (camelCase fields)

Each request is exactly one call to Roku. Nothing is stored, cached or retried.
""",
    version="1.0.0",
    license_info={"name": "MIT"},
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(validate.router)
app.include_router(system.router)
