"""
订单数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Uuid
from datetime import datetime, timezone

from .base import Base


class OrderModel(Base):
    """
    订单数据库模型（宿主平台订单表的插件视图）

    所有业务规则都在 domain.order.entity.Order 中
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_guid = Column(Uuid(as_uuid=True), unique=True, index=True, nullable=False, comment="订单GUID/商户参考号")
    store_id = Column(Integer, nullable=False, default=0, comment="店铺ID")

    order_total = Column(Numeric(precision=18, scale=4), nullable=False, comment="订单总额")
    customer_currency_code = Column(String(3), nullable=False, default="USD", comment="货币代码 ISO-4217")

    order_status = Column(String(20), nullable=False, default="pending", index=True, comment="订单状态")
    payment_status = Column(String(30), nullable=False, default="pending", index=True, comment="支付状态")
    payment_method_system_name = Column(String(100), nullable=True, comment="支付方式")
    capture_transaction_id = Column(String(200), nullable=True, comment="网关交易ID")

    created_on_utc = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )
    paid_date_utc = Column(DateTime(timezone=True), nullable=True, comment="支付完成时间")

    def __repr__(self):
        return f"<OrderModel(id={self.id}, order_guid='{self.order_guid}', payment_status='{self.payment_status}')>"
