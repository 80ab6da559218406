"""
Shared plumbing for gateway clients: one lazily created httpx.AsyncClient per
client instance, timeouts from settings, structured logging, and translation
of sub-HTTP failures into PaymentRecoverableError.
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

from core.logging_config import get_logger
from core.settings import PaymentTimeouts
from infrastructure.external.payments.exceptions import PaymentRecoverableError


logger = get_logger(__name__)


class BasePaymentClient:
    provider: str = "base"

    def __init__(
        self,
        *,
        timeouts: Optional[PaymentTimeouts] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeouts = timeouts or PaymentTimeouts()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self._timeouts.total,
            connect=self._timeouts.connect,
            read=self._timeouts.read,
            write=self._timeouts.write,
        )

    @property
    def http(self) -> httpx.AsyncClient:
        # Kept open for reuse; aclose() releases it
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def _post_json(self, url: str, payload: Any, headers: dict[str, str]) -> httpx.Response:
        """Single POST, no retry. Any HTTP status is returned to the caller."""
        try:
            return await self.http.post(url, json=payload, headers=headers)
        except httpx.TransportError as exc:
            logger.error(
                "payment_provider_unreachable",
                provider=self.provider,
                url=url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise PaymentRecoverableError(
                f"{self.provider} request failed: {exc}",
                provider=self.provider,
                details={"url": url},
            ) from exc

    async def aclose(self) -> None:
        """Close underlying HTTP client if created."""
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None

    def _log(self, event: str, **kwargs: Any) -> None:
        logger.info(event, provider=self.provider, **kwargs)
