"""
Factory for payment gateway clients.
"""
from __future__ import annotations

from typing import Optional

import httpx

from application.dtos.payments import PayPointPaymentSettings
from application.ports.payment_gateway import PayPointGateway


def get_payment_gateway(
    credentials: PayPointPaymentSettings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PayPointGateway:
    from .paypoint_client import PayPointClient
    return PayPointClient(credentials, transport=transport)
