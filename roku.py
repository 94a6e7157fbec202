"""
Roku In-App Purchase Validation
===============================
Validates a transaction against the Roku Pay web service:

    GET https://apipub.roku.com/listen/transaction-service.svc/validate-transaction/{devToken}/{transactionId}

One call = one round trip. No retries, no caching. Every failure is raised
to the caller as a RokuError subclass (see errors.py):

    - no response at all        → TransportError
    - non-2xx response          → IAPResponseError (message = Roku's errorMessage)
    - 2xx with undecodable body → DecodeError
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

import httpx
from pydantic import ValidationError

from errors import DecodeError, IAPResponseError, TransportError
from models import IAPErrorBody, ValidationResult

logger = logging.getLogger(__name__)

PRODUCTION_URL  = "https://apipub.roku.com"
DEFAULT_TIMEOUT = 5.0  # seconds
MAX_REDIRECTS   = 10
VALIDATE_PATH   = "/listen/transaction-service.svc/validate-transaction/{dev_token}/{transaction_id}"


@dataclass(frozen=True)
class Config:
    """Options for new_with_config(). A zero or negative timeout means DEFAULT_TIMEOUT."""

    dev_token: str
    # Accepted for API compatibility. Roku exposes a single endpoint, so it has no effect.
    is_production: bool = True
    timeout: float = 0.0


class IAPClient(Protocol):
    """Anything that can validate a Roku transaction. Client is the real one."""

    def verify(self, transaction_id: str) -> ValidationResult: ...


class _BorrowedTransport(httpx.BaseTransport):
    """Caller-owned transport lent to a per-call httpx.Client, which must not close it."""

    def __init__(self, transport: httpx.BaseTransport):
        self._transport = transport

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self._transport.handle_request(request)

    def close(self) -> None:
        pass


def _check_deadline(deadline: float, timeout: float, request: httpx.Request) -> None:
    if time.monotonic() > deadline:
        raise httpx.ReadTimeout(f"request exceeded the {timeout}s timeout", request=request)


@dataclass(frozen=True)
class Client:
    url: str
    dev_token: str
    timeout: float = DEFAULT_TIMEOUT
    # Optional httpx transport (mock transports in tests, custom proxies ...). Never closed here.
    transport: httpx.BaseTransport | None = field(default=None, compare=False, repr=False)

    def validation_url(self, transaction_id: str) -> str:
        return self.url + VALIDATE_PATH.format(
            dev_token=self.dev_token, transaction_id=transaction_id
        )

    def _get(self, url: str) -> tuple[int, str]:
        """
        GET `url` and return (status code, body).

        `timeout` is one deadline for the whole request: connect, redirects,
        headers and body. httpx only bounds each phase, so the body is streamed
        and the deadline checked per chunk.
        """
        deadline = time.monotonic() + self.timeout
        transport = _BorrowedTransport(self.transport) if self.transport is not None else None

        with httpx.Client(
            timeout=self.timeout,
            transport=transport,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        ) as http:
            with http.stream("GET", url) as resp:
                chunks: list[bytes] = []
                for chunk in resp.iter_bytes():
                    _check_deadline(deadline, self.timeout, resp.request)
                    chunks.append(chunk)
                _check_deadline(deadline, self.timeout, resp.request)
                # JSON is UTF-8 on the wire
                return resp.status_code, b"".join(chunks).decode("utf-8", errors="replace")

    def verify(self, transaction_id: str) -> ValidationResult:
        """
        Validate `transaction_id` with Roku and return the decoded purchase record.

        Redirects are followed (up to MAX_REDIRECTS) and the final status decides
        the outcome. Raises TransportError, IAPResponseError or DecodeError.
        """
        url = self.validation_url(transaction_id)
        logger.debug("Validating Roku transaction %s", transaction_id)

        try:
            status_code, body = self._get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Roku request failed for transaction %r: %r", transaction_id, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        logger.debug("Roku answered %s for transaction %s", status_code, transaction_id)

        if status_code < 200 or status_code >= 300:
            raise _response_error(status_code, body)

        try:
            return ValidationResult.model_validate_json(body)
        except ValidationError as exc:
            logger.error(
                "Undecodable validation result for transaction %s (HTTP %s)",
                transaction_id, status_code,
            )
            raise DecodeError(
                f"invalid validation result body: {exc}",
                result=ValidationResult(),
                body=body,
            ) from exc


def _response_error(status_code: int, body: str) -> IAPResponseError:
    try:
        decoded = IAPErrorBody.model_validate_json(body)
    except ValidationError:
        logger.warning("Roku answered %s with an unparseable body", status_code)
        return IAPResponseError(
            f"received status {status_code} with unparseable body",
            status_code=status_code,
        )

    logger.warning(
        "Roku rejected transaction (HTTP %s, code=%r): %s",
        status_code, decoded.error_code, decoded.message,
    )
    return IAPResponseError(
        decoded.message,
        status_code=status_code,
        status=decoded.status,
        error_details=decoded.error_details,
        error_code=decoded.error_code,
    )


# ── Constructors ──────────────────────────────────────────────────────────────

def new(dev_token: str) -> Client:
    """Production client with the default 5 second timeout."""
    return Client(url=PRODUCTION_URL, dev_token=dev_token, timeout=DEFAULT_TIMEOUT)


def new_with_config(config: Config) -> Client:
    return Client(
        url=PRODUCTION_URL,
        dev_token=config.dev_token,
        timeout=config.timeout if config.timeout > 0 else DEFAULT_TIMEOUT,
    )
