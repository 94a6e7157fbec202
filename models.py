"""
Roku IAP — Pydantic models (wire shapes + relay request/response bodies)
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _WireModel(BaseModel):
    """Roku JSON body. Absent or null fields fall back to their zero value."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ValidationResult(_WireModel):
    transaction_id:         str   = Field(default="",  alias="transactionId")
    purchase_date:          str   = Field(default="",  alias="purchaseDate")
    channel_name:           str   = Field(default="",  alias="channelName")
    product_name:           str   = Field(default="",  alias="productName")
    product_id:             str   = Field(default="",  alias="productId")
    amount:                 float = Field(default=0.0, alias="amount")
    currency:               str   = Field(default="",  alias="currency")
    quantity:               int   = Field(default=0,   alias="quantity")
    expiration_date:        str   = Field(default="",  alias="expirationDate")
    original_purchase_date: str   = Field(default="",  alias="originalPurchaseDate")
    status:                 str   = Field(default="",  alias="status")
    error_message:          str   = Field(default="",  alias="errorMessage")


class IAPErrorBody(_WireModel):
    status:        str = Field(default="", alias="status")
    message:       str = Field(default="", alias="errorMessage")
    error_details: str = Field(default="", alias="errorDetails")
    error_code:    str = Field(default="", alias="errorCode")


# ── Relay bodies ──────────────────────────────────────────────────────────────

class ValidateRequest(BaseModel):
    transaction_id: str  # opaque, forwarded to Roku untouched

    @field_validator("transaction_id")
    @classmethod
    def transaction_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("transaction_id cannot be empty")
        return v


class StatusResponse(BaseModel):
    status: str
    message: str
