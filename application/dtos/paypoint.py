"""
PayPoint (Pay360) hosted payments wire format (Pydantic v2).

Field aliases follow the gateway's camelCase JSON; python code uses the
snake_case names (populate_by_name).
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from shared.codes.payment_codes import PayPointNotificationFormat, PayPointStatus


class _PayPointModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- session request -------------------------------------------------------

class PayPointCustomer(_PayPointModel):
    registered: bool = False


class PayPointAmount(_PayPointModel):
    fixed: Decimal

    @field_validator("fixed")
    @classmethod
    def _two_places(cls, v: Decimal) -> Decimal:
        return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)

    @field_serializer("fixed", when_used="json")
    def _as_number(self, v: Decimal) -> float:
        # The gateway expects a JSON number, not pydantic's default decimal string
        return float(v)


class PayPointMoney(_PayPointModel):
    currency: str
    amount: PayPointAmount


class PayPointTransaction(_PayPointModel):
    merchant_reference: str = Field(alias="merchantReference")
    money: PayPointMoney
    description: Optional[str] = None


class PayPointUrl(_PayPointModel):
    url: str


class PayPointNotificationUrl(_PayPointModel):
    url: str
    format: str = PayPointNotificationFormat.REST_JSON


class PayPointSession(_PayPointModel):
    return_url: PayPointUrl = Field(alias="returnUrl")
    cancel_url: PayPointUrl = Field(alias="cancelUrl")
    transaction_notification: PayPointNotificationUrl = Field(alias="transactionNotification")


class PaymentSessionRequest(_PayPointModel):
    locale: Optional[str] = None
    customer: PayPointCustomer = Field(default_factory=PayPointCustomer)
    transaction: PayPointTransaction
    session: PayPointSession

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# --- session response ------------------------------------------------------

class PaymentSessionResponse(_PayPointModel):
    """Gateway answer; returned with the same shape on 2xx and error statuses."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    status: Optional[str] = None
    redirect_url: Optional[str] = Field(default=None, alias="redirectUrl")
    reason_code: Optional[str] = Field(default=None, alias="reasonCode")
    reason_message: Optional[str] = Field(default=None, alias="reasonMessage")

    @property
    def is_success(self) -> bool:
        return self.status == PayPointStatus.SUCCESS


# --- asynchronous notification --------------------------------------------

class CallbackTransaction(_PayPointModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    status: Optional[str] = None
    merchant_ref: Optional[str] = Field(default=None, alias="merchantRef")
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")


class CallbackNotification(_PayPointModel):
    transaction: CallbackTransaction
