"""
PayPoint transaction notification handling.

The gateway posts a JSON notification once a hosted payment completes. Every
notification is acknowledged with HTTP 200 by the route whatever happens
here, so the gateway never retries; problems are reported through the log.

The notification carries no signature. It is trusted only as far as it names
a known, still payable order.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import ValidationError

from application.dtos.paypoint import CallbackNotification
from application.ports.host import OrderSettlement, OrderStore
from core.logging_config import get_logger
from shared.codes.payment_codes import PayPointStatus


logger = get_logger(__name__)


class CallbackOutcome(str, Enum):
    PARSE_FAILED = "parse_failed"
    TRANSACTION_FAILED = "transaction_failed"
    INVALID_REFERENCE = "invalid_reference"
    ORDER_NOT_FOUND = "order_not_found"
    NOT_PAYABLE = "not_payable"
    SETTLED = "settled"


def parse_order_guid(value: Optional[str]) -> Optional[UUID]:
    """Parse a merchant reference into an order GUID, None when invalid."""
    if not value:
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None


class PayPointCallbackHandler:
    def __init__(self, orders: OrderStore, settlement: OrderSettlement) -> None:
        self._orders = orders
        self._settlement = settlement

    async def handle(self, raw_body: bytes) -> CallbackOutcome:
        try:
            notification = CallbackNotification.model_validate_json(raw_body or b"")
        except ValidationError as exc:
            logger.error("paypoint_callback_parse_failed", error=str(exc))
            return CallbackOutcome.PARSE_FAILED

        transaction = notification.transaction
        if transaction.status != PayPointStatus.SUCCESS:
            logger.error(
                "paypoint_callback_transaction_failed",
                status=transaction.status,
                merchant_ref=transaction.merchant_ref,
                transaction_id=transaction.transaction_id,
            )
            return CallbackOutcome.TRANSACTION_FAILED

        order_guid = parse_order_guid(transaction.merchant_ref)
        if order_guid is None:
            logger.error("paypoint_callback_invalid_reference", merchant_ref=transaction.merchant_ref)
            return CallbackOutcome.INVALID_REFERENCE

        order = await self._orders.get_by_guid(order_guid)
        if order is None:
            return CallbackOutcome.ORDER_NOT_FOUND

        # Already paid, cancelled, refunded: nothing to do
        if not self._settlement.can_mark_order_as_paid(order):
            return CallbackOutcome.NOT_PAYABLE

        # A concurrent delivery may have settled the order since it was read
        if not await self._settlement.mark_order_as_paid(order, transaction.transaction_id):
            return CallbackOutcome.NOT_PAYABLE
        logger.info(
            "paypoint_callback_settled",
            order_id=order.id,
            order_guid=str(order_guid),
            transaction_id=transaction.transaction_id,
        )
        return CallbackOutcome.SETTLED
