"""
Payment gateway port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from application.dtos.paypoint import PaymentSessionRequest, PaymentSessionResponse


@runtime_checkable
class PayPointGateway(Protocol):
    """Hosted payment session creation.

    Implementations perform exactly one outbound call per invocation, without
    retries, and return the gateway's structured answer even when the HTTP
    status is an error.
    """

    provider: str

    async def create_session(self, request: PaymentSessionRequest) -> PaymentSessionResponse: ...

    async def aclose(self) -> None: ...
