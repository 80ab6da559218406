from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from structlog.testing import capture_logs

from application.dtos.payments import CartItem, PayPointPaymentSettings, StorefrontContext
from application.dtos.paypoint import PaymentSessionResponse
from application.services.paypoint_processor import PayPointPaymentProcessor
from domain.order import Order, PaymentStatus


class StubGateway:
    provider = "stub"

    def __init__(self, response: PaymentSessionResponse):
        self.response = response
        self.requests = []
        self.closed = False

    async def create_session(self, request):
        self.requests.append(request)
        return self.response

    async def aclose(self):
        self.closed = True


class StubResources:
    def __init__(self, values):
        self.values = values

    async def get(self, name, language="en"):
        return self.values.get((name, language))

    async def add_or_update(self, name, value, language="en"):
        self.values[(name, language)] = value

    async def delete(self, name):
        return 0


STOREFRONT = StorefrontContext(
    store_location="https://shop.example.com/",
    working_language="en",
    primary_currency_code="USD",
)


def _order(**overrides) -> Order:
    data = dict(id=7, order_guid=uuid4(), order_total=Decimal("25.00"))
    data.update(overrides)
    return Order(**data)


def _error_logs(logs):
    return [entry for entry in logs if entry["log_level"] == "error"]


@pytest.mark.asyncio
async def test_begin_payment_redirects_on_success():
    gateway = StubGateway(PaymentSessionResponse(
        session_id="s-1", status="SUCCESS", redirect_url="https://pay.example/abc",
    ))
    processor = PayPointPaymentProcessor(gateway, PayPointPaymentSettings())
    order = _order()

    with capture_logs() as logs:
        result = await processor.begin_payment(order, STOREFRONT)

    assert result.redirected
    assert result.redirect_url == "https://pay.example/abc"
    assert len(gateway.requests) == 1
    assert gateway.requests[0].transaction.merchant_reference == str(order.order_guid)
    assert logs == []


@pytest.mark.asyncio
async def test_begin_payment_logs_rejection_once():
    gateway = StubGateway(PaymentSessionResponse(
        status="FAILED", reason_code="V402", reason_message="Invalid installation",
    ))
    processor = PayPointPaymentProcessor(gateway, PayPointPaymentSettings())

    with capture_logs() as logs:
        result = await processor.post_process_payment(_order(), STOREFRONT)

    assert not result.redirected
    errors = _error_logs(logs)
    assert len(errors) == 1
    assert errors[0]["event"] == "paypoint_session_failed"
    assert errors[0]["reason_code"] == "V402"
    assert errors[0]["reason_message"] == "Invalid installation"
    assert "V402 - Invalid installation" in errors[0]["message"]


@pytest.mark.asyncio
async def test_success_without_redirect_url_is_not_followed():
    gateway = StubGateway(PaymentSessionResponse(status="SUCCESS"))
    processor = PayPointPaymentProcessor(gateway, PayPointPaymentSettings())

    with capture_logs() as logs:
        result = await processor.begin_payment(_order(), STOREFRONT)

    assert result.redirect_url is None
    assert len(_error_logs(logs)) == 1


@pytest.mark.asyncio
async def test_unsupported_operations_report_errors():
    processor = PayPointPaymentProcessor(StubGateway(PaymentSessionResponse()), PayPointPaymentSettings())
    order = _order()

    assert (await processor.process_payment()).success
    assert (await processor.capture(order)).errors == ["Capture method not supported"]
    assert (await processor.refund(order, Decimal("1"))).errors == ["Refund method not supported"]
    assert (await processor.void(order)).errors == ["Void method not supported"]
    assert (await processor.process_recurring_payment(order)).errors == ["Recurring payment not supported"]
    assert not (await processor.cancel_recurring_payment(order)).success


def test_capability_flags():
    processor = PayPointPaymentProcessor(StubGateway(PaymentSessionResponse()), PayPointPaymentSettings())
    assert processor.system_name == "Payments.PayPoint"
    assert processor.payment_method_type == "redirection"
    assert processor.recurring_payment_type == "not_supported"
    assert not any([
        processor.supports_capture,
        processor.supports_partially_refund,
        processor.supports_refund,
        processor.supports_void,
        processor.skip_payment_info,
    ])
    assert processor.hide_payment_method([]) is False


def test_can_repost_after_one_minute_while_pending():
    created = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    processor = PayPointPaymentProcessor(StubGateway(PaymentSessionResponse()), PayPointPaymentSettings())
    order = _order(created_on_utc=created)

    assert not processor.can_repost_process_payment(order, created + timedelta(seconds=59))
    assert processor.can_repost_process_payment(order, created + timedelta(minutes=1))

    order.payment_status = PaymentStatus.PAID
    assert not processor.can_repost_process_payment(order, created + timedelta(hours=1))


def test_can_repost_requires_order():
    processor = PayPointPaymentProcessor(StubGateway(PaymentSessionResponse()), PayPointPaymentSettings())
    with pytest.raises(ValueError):
        processor.can_repost_process_payment(None)


def test_additional_fee_uses_settings():
    settings = PayPointPaymentSettings(additional_fee=Decimal("10"), additional_fee_percentage=True)
    processor = PayPointPaymentProcessor(StubGateway(PaymentSessionResponse()), settings)
    cart = [CartItem(unit_price=Decimal("12.50"), quantity=2)]
    assert processor.get_additional_handling_fee(cart) == Decimal("2.50")


def test_configuration_page_url():
    assert (
        PayPointPaymentProcessor.get_configuration_page_url("https://shop.example.com")
        == "https://shop.example.com/Admin/PaymentPayPoint/Configure"
    )


@pytest.mark.asyncio
async def test_description_prefers_stored_resource():
    name = "Plugins.Payments.PayPoint.PaymentMethodDescription"
    resources = StubResources({(name, "fr"): "Vous serez redirigé vers PayPoint."})
    processor = PayPointPaymentProcessor(
        StubGateway(PaymentSessionResponse()), PayPointPaymentSettings(), resources=resources,
    )

    assert await processor.get_payment_method_description("fr") == "Vous serez redirigé vers PayPoint."
    assert (
        await processor.get_payment_method_description("en")
        == "You will be redirected to PayPoint site to complete the order."
    )

    info = await processor.get_payment_method_info("en")
    assert info.system_name == "Payments.PayPoint"
    assert info.payment_method_type == "redirection"


@pytest.mark.asyncio
async def test_aclose_closes_gateway():
    gateway = StubGateway(PaymentSessionResponse())
    await PayPointPaymentProcessor(gateway, PayPointPaymentSettings()).aclose()
    assert gateway.closed
