"""
Roku IAP — Error hierarchy
  TransportError    no HTTP response was obtained (DNS, refused, timeout ...)
  IAPResponseError  Roku answered with a non-2xx status
  DecodeError       Roku answered 2xx but the body is not a validation result
"""
from typing import Any


class RokuError(Exception):
    """Base class for every failure raised by Client.verify()."""


class TransportError(RokuError):
    """The request never produced a response. The httpx error is chained as __cause__."""


class IAPResponseError(RokuError):
    """
    Non-2xx answer from the validation endpoint.

    str(exc) is exactly the `errorMessage` Roku sent back. The remaining fields
    of the error body are kept as attributes.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        status: str = "",
        error_details: str = "",
        error_code: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status = status
        self.error_details = error_details
        self.error_code = error_code


class DecodeError(RokuError):
    def __init__(self, message: str, *, result: Any, body: str):
        super().__init__(message)
        # Zero-value ValidationResult, returned alongside the failure
        self.result = result
        self.body = body
