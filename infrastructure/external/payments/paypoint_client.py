"""
PayPoint (Pay360) hosted payments REST adapter.

One POST per checkout attempt to
``{base}/hosted/rest/sessions/{installationId}/payments`` with HTTP Basic
authentication. Error statuses carry the same JSON body as successes, so the
body is parsed regardless of the status code.
"""
from __future__ import annotations

import base64
from typing import Optional

import httpx
from pydantic import ValidationError

from application.dtos.payments import PayPointPaymentSettings
from application.dtos.paypoint import PaymentSessionRequest, PaymentSessionResponse
from core.settings import PayPointTransportSettings, paypoint_settings
from infrastructure.external.payments.base import BasePaymentClient
from infrastructure.external.payments.exceptions import PaymentProviderError


class PayPointClient(BasePaymentClient):
    provider = "paypoint"

    def __init__(
        self,
        credentials: PayPointPaymentSettings,
        transport_settings: Optional[PayPointTransportSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = transport_settings or paypoint_settings
        super().__init__(timeouts=self._settings.timeouts, transport=transport)
        self._credentials = credentials

    @property
    def service_url(self) -> str:
        return self._settings.sandbox_url if self._credentials.use_sandbox else self._settings.live_url

    @property
    def session_url(self) -> str:
        path = self._settings.session_path_template.format(
            installation_id=self._credentials.installation_id or ""
        )
        return f"{self.service_url.rstrip('/')}{path}"

    @property
    def authorization_header(self) -> str:
        login = f"{self._credentials.api_username or ''}:{self._credentials.api_password or ''}"
        return "Basic " + base64.b64encode(login.encode("utf-8")).decode("ascii")

    async def create_session(self, request: PaymentSessionRequest) -> PaymentSessionResponse:
        headers = {
            "Authorization": self.authorization_header,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        self._log(
            "paypoint_session_request",
            url=self.session_url,
            merchant_reference=request.transaction.merchant_reference,
            sandbox=self._credentials.use_sandbox,
        )
        resp = await self._post_json(self.session_url, request.to_payload(), headers)

        try:
            session = PaymentSessionResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            raise PaymentProviderError(
                "Malformed PayPoint session response",
                provider=self.provider,
                details={"http_status": resp.status_code},
            ) from exc

        self._log(
            "paypoint_session_response",
            http_status=resp.status_code,
            status=session.status,
            session_id=session.session_id,
        )
        return session
