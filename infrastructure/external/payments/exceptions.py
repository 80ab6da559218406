"""
Gateway failures raised by payment clients.

Both are BusinessException subclasses so the global handler renders them as
HTTP 502 envelopes.
"""
from __future__ import annotations

from typing import Optional

from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode


class _GatewayFailure(BusinessException):
    code: PaymentCode

    def __init__(self, message: str, *, provider: str, details: Optional[dict] = None):
        super().__init__(
            code=self.code,
            message=message,
            error_type=type(self).__name__,
            details={"provider": provider, **(details or {})},
            message_key="payments.provider_error",
        )


class PaymentProviderError(_GatewayFailure):
    """The gateway answered with something that is not a session response."""

    code = PaymentCode.PROVIDER_ERROR


class PaymentRecoverableError(_GatewayFailure):
    """Transport failure below HTTP (DNS, refused connection, timeout).

    Not retried here; the shopper can start checkout again.
    """

    code = PaymentCode.PROVIDER_RECOVERABLE
