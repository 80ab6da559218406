"""
订单领域实体 - 宿主平台订单的支付相关视图

The host platform owns the order; the plugin only reads it, records the
gateway transaction id and drives the pending -> paid transition.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from domain.common.exceptions import DomainValidationException


class PaymentStatus(str, Enum):
    """支付状态枚举"""
    PENDING = "pending"
    AUTHORIZED = "authorized"
    PAID = "paid"
    PARTIALLY_REFUNDED = "partially_refunded"
    REFUNDED = "refunded"
    VOIDED = "voided"


class OrderStatus(str, Enum):
    """订单状态枚举"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


# Payment states from which an order can no longer be marked as paid
SETTLED_PAYMENT_STATUSES = (PaymentStatus.PAID, PaymentStatus.REFUNDED, PaymentStatus.VOIDED)


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """确保时间为 UTC 时区"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class Order:
    """
    订单聚合根（支付视图）

    业务规则：
    1. order_guid 是对外的唯一商户参考号
    2. 已取消、已支付、已退款或已作废的订单不可再标记为已支付
    3. 标记已支付时，待处理订单进入处理中
    """

    id: Optional[int]
    order_guid: UUID
    order_total: Decimal
    store_id: int = 0
    customer_currency_code: str = "USD"
    order_status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method_system_name: Optional[str] = None
    capture_transaction_id: Optional[str] = None
    created_on_utc: Optional[datetime] = None
    paid_date_utc: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.order_total, Decimal):
            self.order_total = Decimal(str(self.order_total))
        if self.order_total < 0:
            raise DomainValidationException(
                f"Order total cannot be negative: {self.order_total}",
                field="order_total",
            )
        self.created_on_utc = _ensure_utc(self.created_on_utc) or datetime.now(timezone.utc)
        self.paid_date_utc = _ensure_utc(self.paid_date_utc)

    def can_mark_as_paid(self) -> bool:
        """检查订单当前是否可标记为已支付"""
        if self.order_status == OrderStatus.CANCELLED:
            return False
        return self.payment_status not in SETTLED_PAYMENT_STATUSES

    def record_capture_transaction(self, transaction_id: Optional[str]) -> None:
        self.capture_transaction_id = transaction_id

    def mark_as_paid(self, now: Optional[datetime] = None) -> None:
        """
        标记订单已支付

        业务规则：只有可支付状态的订单才能转为 paid
        """
        if not self.can_mark_as_paid():
            raise DomainValidationException(
                f"Order cannot be marked as paid (order status {self.order_status.value}, "
                f"payment status {self.payment_status.value})",
                field="payment_status",
            )
        self.payment_status = PaymentStatus.PAID
        self.paid_date_utc = _ensure_utc(now) or datetime.now(timezone.utc)
        if self.order_status == OrderStatus.PENDING:
            self.order_status = OrderStatus.PROCESSING

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID
