"""
订单处理领域服务 - 支付结算
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from .entity import Order
from .repository import OrderRepository


class OrderProcessingService:
    """Marks orders as paid at most once per order."""

    def __init__(
        self,
        repository: OrderRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._repository = repository
        self._clock = clock

    def can_mark_order_as_paid(self, order: Order) -> bool:
        return order.can_mark_as_paid()

    async def mark_order_as_paid(self, order: Order, capture_transaction_id: Optional[str] = None) -> bool:
        """
        结算订单，返回本次调用是否完成了结算

        The snapshot check only short-circuits; the stored row decides, so
        concurrent deliveries for one order settle it exactly once.
        """
        if not self.can_mark_order_as_paid(order):
            return False

        paid = replace(order)
        if capture_transaction_id is not None:
            paid.record_capture_transaction(capture_transaction_id)
        paid.mark_as_paid(self._clock())
        if not await self._repository.settle_if_payable(paid):
            return False

        order.capture_transaction_id = paid.capture_transaction_id
        order.payment_status = paid.payment_status
        order.order_status = paid.order_status
        order.paid_date_utc = paid.paid_date_utc
        return True
