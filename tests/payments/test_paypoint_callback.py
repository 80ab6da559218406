import asyncio
import json
from dataclasses import replace
from decimal import Decimal
from uuid import UUID

import pytest
from structlog.testing import capture_logs

from application.services.paypoint_callback import CallbackOutcome, PayPointCallbackHandler, parse_order_guid
from domain.order import Order, OrderProcessingService, OrderStatus, PaymentStatus


ORDER_GUID = UUID("3fa85f64-5717-4562-b3fc-2c963f66afa6")


class InMemoryOrders:
    def __init__(self, *orders: Order):
        self.orders = {o.order_guid: o for o in orders}

    async def get_by_id(self, order_id):
        return next((o for o in self.orders.values() if o.id == order_id), None)

    async def get_by_guid(self, order_guid):
        return self.orders.get(order_guid)


class RecordingSettlement:
    def __init__(self):
        self.paid = []

    def can_mark_order_as_paid(self, order):
        return order.can_mark_as_paid()

    async def mark_order_as_paid(self, order, capture_transaction_id=None):
        self.paid.append(capture_transaction_id)
        order.record_capture_transaction(capture_transaction_id)
        order.mark_as_paid()
        return True


def _body(status="SUCCESS", merchant_ref=str(ORDER_GUID), transaction_id="TXN123") -> bytes:
    return json.dumps({
        "transaction": {"status": status, "merchantRef": merchant_ref, "transactionId": transaction_id},
    }).encode()


def _handler(*orders):
    store = InMemoryOrders(*orders)
    settlement = RecordingSettlement()
    return PayPointCallbackHandler(store, settlement), store, settlement


def _payable_order(**overrides) -> Order:
    data = dict(id=5, order_guid=ORDER_GUID, order_total=Decimal("19.99"))
    data.update(overrides)
    return Order(**data)


def _error_logs(logs):
    return [entry for entry in logs if entry["log_level"] == "error"]


@pytest.mark.asyncio
async def test_success_settles_payable_order():
    order = _payable_order()
    handler, store, settlement = _handler(order)

    outcome = await handler.handle(_body())

    assert outcome is CallbackOutcome.SETTLED
    assert order.capture_transaction_id == "TXN123"
    assert order.payment_status == PaymentStatus.PAID
    assert settlement.paid == ["TXN123"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"", b"not json", b"{}", b'{"transaction": "x"}', b"[1, 2]"])
async def test_unparsable_body_logs_once(body):
    order = _payable_order()
    handler, store, settlement = _handler(order)

    with capture_logs() as logs:
        outcome = await handler.handle(body)

    assert outcome is CallbackOutcome.PARSE_FAILED
    errors = _error_logs(logs)
    assert [e["event"] for e in errors] == ["paypoint_callback_parse_failed"]
    assert settlement.paid == []


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["DECLINED", "FAILED", "success", None])
async def test_non_success_status_logs_once(status):
    order = _payable_order()
    handler, store, settlement = _handler(order)

    with capture_logs() as logs:
        outcome = await handler.handle(_body(status=status))

    assert outcome is CallbackOutcome.TRANSACTION_FAILED
    assert len(_error_logs(logs)) == 1
    assert order.payment_status == PaymentStatus.PENDING
    assert order.capture_transaction_id is None
    assert settlement.paid == []


@pytest.mark.asyncio
@pytest.mark.parametrize("merchant_ref", ["not-a-guid", "", None])
async def test_invalid_reference_logs_once(merchant_ref):
    handler, store, settlement = _handler(_payable_order())

    with capture_logs() as logs:
        outcome = await handler.handle(_body(merchant_ref=merchant_ref))

    assert outcome is CallbackOutcome.INVALID_REFERENCE
    assert [e["event"] for e in _error_logs(logs)] == ["paypoint_callback_invalid_reference"]
    assert settlement.paid == []


@pytest.mark.asyncio
async def test_unknown_order_is_ignored_silently():
    handler, store, settlement = _handler()

    with capture_logs() as logs:
        outcome = await handler.handle(_body())

    assert outcome is CallbackOutcome.ORDER_NOT_FOUND
    assert logs == []
    assert settlement.paid == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"payment_status": PaymentStatus.PAID},
        {"payment_status": PaymentStatus.REFUNDED},
        {"order_status": OrderStatus.CANCELLED},
    ],
)
async def test_order_not_payable_is_ignored_silently(overrides):
    order = _payable_order(capture_transaction_id="EARLIER", **overrides)
    handler, store, settlement = _handler(order)

    with capture_logs() as logs:
        outcome = await handler.handle(_body())

    assert outcome is CallbackOutcome.NOT_PAYABLE
    assert logs == []
    assert order.capture_transaction_id == "EARLIER"
    assert settlement.paid == []


@pytest.mark.asyncio
async def test_numeric_transaction_id_is_kept_as_text():
    order = _payable_order()
    handler, _, _ = _handler(order)
    body = json.dumps({
        "transaction": {"status": "SUCCESS", "merchantRef": str(ORDER_GUID), "transactionId": 987654},
    }).encode()

    assert await handler.handle(body) is CallbackOutcome.SETTLED
    assert order.capture_transaction_id == "987654"



class StoredOrders:
    """Hands out a fresh copy per read, as separate sessions would."""

    def __init__(self, order: Order):
        self.row = order
        self.settled = []

    async def get_by_id(self, order_id):
        await asyncio.sleep(0)
        return replace(self.row) if self.row.id == order_id else None

    async def get_by_guid(self, order_guid):
        await asyncio.sleep(0)
        return replace(self.row) if self.row.order_guid == order_guid else None

    async def settle_if_payable(self, order):
        await asyncio.sleep(0)
        if not self.row.can_mark_as_paid():
            return False
        self.row = replace(order)
        self.settled.append(order.capture_transaction_id)
        return True


@pytest.mark.asyncio
async def test_concurrent_deliveries_settle_order_once():
    store = StoredOrders(_payable_order())

    def handler():
        return PayPointCallbackHandler(store, OrderProcessingService(store))

    outcomes = await asyncio.gather(
        handler().handle(_body(transaction_id="TXN1")),
        handler().handle(_body(transaction_id="TXN2")),
    )

    assert sorted(o.value for o in outcomes) == ["not_payable", "settled"]
    assert store.settled == ["TXN1"]
    assert store.row.capture_transaction_id == "TXN1"
    assert store.row.payment_status == PaymentStatus.PAID


def test_parse_order_guid():
    assert parse_order_guid(" 3fa85f64-5717-4562-b3fc-2c963f66afa6 ") == ORDER_GUID
    assert parse_order_guid("3FA85F645717-4562B3FC2C963F66AFA6") == ORDER_GUID
    assert parse_order_guid("123") is None
    assert parse_order_guid(None) is None
