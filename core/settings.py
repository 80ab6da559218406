"""
PayPoint transport settings using pydantic-settings v2 with nested env keys.

Gateway credentials live in the per-store settings table (see
application.services.paypoint_settings); this module only carries the
process-wide transport knobs.
"""
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field

from shared.codes.payment_codes import PAYPOINT_ENDPOINTS, PAYPOINT_SESSION_PATH


class PaymentTimeouts(BaseModel):
    connect: float = 5.0
    read: float = 30.0
    write: float = 30.0
    total: float = 30.0


class PayPointTransportSettings(BaseSettings):
    sandbox_url: str = Field(default=PAYPOINT_ENDPOINTS["sandbox"])
    live_url: str = Field(default=PAYPOINT_ENDPOINTS["live"])
    session_path_template: str = Field(default=PAYPOINT_SESSION_PATH)
    timeouts: PaymentTimeouts = Field(default_factory=PaymentTimeouts)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PAYPOINT__",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


paypoint_settings = PayPointTransportSettings()
