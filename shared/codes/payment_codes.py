"""
Payment specific codes and PayPoint (Pay360) protocol constants.
"""
from __future__ import annotations

from enum import IntEnum


class PaymentCode(IntEnum):
    """Gateway failures surfaced through the API (6xxxx)."""

    PROVIDER_ERROR = 60000
    PROVIDER_RECOVERABLE = 60001


class PayPointStatus:
    """Status values reported by the hosted payments API and callbacks."""

    SUCCESS = "SUCCESS"


class PayPointNotificationFormat:
    REST_JSON = "REST_JSON"


PAYPOINT_ENDPOINTS = {
    "sandbox": "https://api.mite.pay360.com",
    "live": "https://api.pay360.com",
}

PAYPOINT_SESSION_PATH = "/hosted/rest/sessions/{installation_id}/payments"

# Relative storefront paths embedded in the session request
RETURN_PATH = "checkout/completed/{order_id}"
CANCEL_PATH = "orderdetails/{order_id}"
CALLBACK_PATH = "Plugins/PaymentPayPoint/Callback"
CONFIGURE_PATH = "Admin/PaymentPayPoint/Configure"
