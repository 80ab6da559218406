import base64
import json
from decimal import Decimal
from uuid import uuid4

import httpx
import pytest
from structlog.testing import capture_logs

from application.dtos.payments import PayPointPaymentSettings, StorefrontContext
from application.services.paypoint_processor import PayPointPaymentProcessor
from domain.order import Order
from infrastructure.external.payments import get_payment_gateway
from infrastructure.external.payments.exceptions import PaymentProviderError, PaymentRecoverableError
from infrastructure.external.payments.paypoint_client import PayPointClient


CREDENTIALS = PayPointPaymentSettings(
    api_username="merchant",
    api_password="s3cret",
    installation_id="5300129",
    use_sandbox=True,
)


def _request():
    order = Order(id=11, order_guid=uuid4(), order_total=Decimal("19.99"))
    storefront = StorefrontContext(store_location="https://shop.example.com/", primary_currency_code="GBP")
    processor = PayPointPaymentProcessor(get_payment_gateway(CREDENTIALS), CREDENTIALS)
    return processor.build_session_request(order, storefront)


def test_factory_returns_paypoint_client():
    assert isinstance(get_payment_gateway(CREDENTIALS), PayPointClient)


def test_session_url_follows_sandbox_flag():
    sandbox = PayPointClient(CREDENTIALS)
    live = PayPointClient(CREDENTIALS.model_copy(update={"use_sandbox": False}))
    assert sandbox.session_url == "https://api.mite.pay360.com/hosted/rest/sessions/5300129/payments"
    assert live.session_url == "https://api.pay360.com/hosted/rest/sessions/5300129/payments"


def test_authorization_header_is_basic_utf8():
    client = PayPointClient(CREDENTIALS.model_copy(update={"api_password": "pässword"}))
    scheme, token = client.authorization_header.split(" ", 1)
    assert scheme == "Basic"
    assert base64.b64decode(token).decode("utf-8") == "merchant:pässword"


@pytest.mark.asyncio
async def test_create_session_posts_json_and_parses_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={
            "sessionId": "sess-1",
            "status": "SUCCESS",
            "redirectUrl": "https://api.mite.pay360.com/hosted/pay/sess-1",
        })

    client = PayPointClient(CREDENTIALS, transport=httpx.MockTransport(handler))
    try:
        response = await client.create_session(_request())
    finally:
        await client.aclose()

    assert response.is_success
    assert response.redirect_url == "https://api.mite.pay360.com/hosted/pay/sess-1"
    assert seen["method"] == "POST"
    assert seen["url"] == "https://api.mite.pay360.com/hosted/rest/sessions/5300129/payments"
    assert seen["headers"]["authorization"] == client.authorization_header
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["body"]["transaction"]["money"] == {"currency": "GBP", "amount": {"fixed": 19.99}}


@pytest.mark.asyncio
async def test_error_status_body_is_still_parsed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={
            "status": "FAILED",
            "reasonCode": "V100",
            "reasonMessage": "Invalid credentials",
        })

    client = PayPointClient(CREDENTIALS, transport=httpx.MockTransport(handler))
    response = await client.create_session(_request())
    await client.aclose()

    assert not response.is_success
    assert response.reason_code == "V100"
    assert response.reason_message == "Invalid credentials"


@pytest.mark.asyncio
async def test_numeric_reason_code_is_a_rejection_not_a_fault():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={
            "status": "FAILED",
            "reasonCode": 401,
            "reasonMessage": "Unauthorized",
        })

    order = Order(id=12, order_guid=uuid4(), order_total=Decimal("5.00"))
    storefront = StorefrontContext(store_location="https://shop.example.com/", primary_currency_code="GBP")
    client = PayPointClient(CREDENTIALS, transport=httpx.MockTransport(handler))
    processor = PayPointPaymentProcessor(client, CREDENTIALS)
    try:
        with capture_logs() as logs:
            result = await processor.begin_payment(order, storefront)
    finally:
        await processor.aclose()

    assert result.redirect_url is None
    errors = [entry for entry in logs if entry["log_level"] == "error"]
    assert len(errors) == 1
    assert errors[0]["reason_code"] == "401"
    assert errors[0]["reason_message"] == "Unauthorized"


@pytest.mark.asyncio
async def test_malformed_body_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    client = PayPointClient(CREDENTIALS, transport=httpx.MockTransport(handler))
    with pytest.raises(PaymentProviderError) as exc_info:
        await client.create_session(_request())
    await client.aclose()
    assert exc_info.value.details["http_status"] == 502


@pytest.mark.asyncio
async def test_transport_failure_raises_recoverable_error():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = PayPointClient(CREDENTIALS, transport=httpx.MockTransport(handler))
    with pytest.raises(PaymentRecoverableError):
        await client.create_session(_request())
    await client.aclose()
    # no retry
    assert len(calls) == 1
