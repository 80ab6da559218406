"""
Payment plugin DTOs (Pydantic v2) used at application boundaries.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.types import condecimal


class StorefrontContext(BaseModel):
    """Per-request storefront data the session request is built from."""

    store_id: int = 0
    store_location: str
    working_language: Optional[str] = None
    primary_currency_code: str

    @field_validator("store_location")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"

    @field_validator("primary_currency_code")
    @classmethod
    def _upper_and_validate_currency(cls, v: str) -> str:
        u = (v or "").upper()
        if len(u) != 3 or not u.isalpha():
            raise ValueError("currency must be ISO-4217 alpha-3")
        return u


class CartItem(BaseModel):
    unit_price: condecimal(ge=0)  # type: ignore[valid-type]
    quantity: int = Field(default=1, ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class PostProcessResult(BaseModel):
    order_id: int
    redirect_url: Optional[str] = None

    @property
    def redirected(self) -> bool:
        return self.redirect_url is not None


class PaymentOperationResult(BaseModel):
    """Outcome of process/capture/refund/void/recurring operations."""

    errors: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def add_error(self, error: str) -> None:
        self.errors.append(error)


class PayPointPaymentSettings(BaseModel):
    """Gateway credentials and fee configuration for one store scope."""

    api_username: Optional[str] = None
    api_password: Optional[str] = None
    installation_id: Optional[str] = None
    use_sandbox: bool = True
    additional_fee: Decimal = Decimal("0")
    additional_fee_percentage: bool = False

    # Frozen for the duration of a transaction; edits go through the configure screen
    model_config = ConfigDict(frozen=True)


class ConfigurationModel(BaseModel):
    """Admin configuration form (Admin/PaymentPayPoint/Configure)."""

    active_store_scope_configuration: int = 0

    api_username: Optional[str] = None
    api_password: Optional[str] = None
    installation_id: Optional[str] = None
    installation_id_override_for_store: bool = False
    use_sandbox: bool = True
    use_sandbox_override_for_store: bool = False
    additional_fee: condecimal(ge=0) = Decimal("0")  # type: ignore[valid-type]
    additional_fee_override_for_store: bool = False
    additional_fee_percentage: bool = False
    additional_fee_percentage_override_for_store: bool = False


class PaymentMethodInfo(BaseModel):
    system_name: str
    description: str
    redirection_tip: str
    payment_method_type: str
    recurring_payment_type: str
    skip_payment_info: bool
    supports_capture: bool
    supports_partially_refund: bool
    supports_refund: bool
    supports_void: bool
