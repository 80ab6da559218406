"""
订单仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional
from decimal import Decimal
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from domain.order.entity import SETTLED_PAYMENT_STATUSES, Order, OrderStatus, PaymentStatus
from domain.order.repository import OrderRepository
from domain.common.exceptions import OrderNotFoundException
from infrastructure.models.order import OrderModel
from core.logging_config import get_logger


logger = get_logger(__name__)


class SQLAlchemyOrderRepository(OrderRepository):
    """订单仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: OrderModel) -> Order:
        """将数据库模型转换为领域实体"""
        return Order(
            id=model.id,
            order_guid=model.order_guid,
            store_id=model.store_id,
            order_total=Decimal(str(model.order_total)),
            customer_currency_code=model.customer_currency_code,
            order_status=OrderStatus(model.order_status),
            payment_status=PaymentStatus(model.payment_status),
            payment_method_system_name=model.payment_method_system_name,
            capture_transaction_id=model.capture_transaction_id,
            created_on_utc=model.created_on_utc,
            paid_date_utc=model.paid_date_utc,
        )

    def _to_model(self, entity: Order) -> OrderModel:
        """将领域实体转换为数据库模型"""
        return OrderModel(
            id=entity.id,
            order_guid=entity.order_guid,
            store_id=entity.store_id,
            order_total=entity.order_total,
            customer_currency_code=entity.customer_currency_code,
            order_status=entity.order_status.value,
            payment_status=entity.payment_status.value,
            payment_method_system_name=entity.payment_method_system_name,
            capture_transaction_id=entity.capture_transaction_id,
            created_on_utc=entity.created_on_utc,
            paid_date_utc=entity.paid_date_utc,
        )

    async def create(self, order: Order) -> Order:
        """创建订单"""
        db_order = self._to_model(order)
        self.session.add(db_order)
        await self.session.flush()
        await self.session.refresh(db_order)
        return self._to_entity(db_order)

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """根据ID获取订单"""
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        db_order = result.scalar_one_or_none()
        return self._to_entity(db_order) if db_order else None

    async def get_by_guid(self, order_guid: UUID) -> Optional[Order]:
        """根据订单GUID获取订单"""
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.order_guid == order_guid)
        )
        db_order = result.scalar_one_or_none()
        return self._to_entity(db_order) if db_order else None

    async def update(self, order: Order) -> Order:
        """更新订单的支付相关字段"""
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == order.id)
        )
        db_order = result.scalar_one_or_none()

        if not db_order:
            raise OrderNotFoundException(order.id)

        db_order.order_status = order.order_status.value
        db_order.payment_status = order.payment_status.value
        db_order.capture_transaction_id = order.capture_transaction_id
        db_order.paid_date_utc = order.paid_date_utc

        await self.session.flush()
        await self.session.refresh(db_order)
        logger.info(
            "order_updated",
            order_id=db_order.id,
            payment_status=db_order.payment_status,
        )
        return self._to_entity(db_order)

    async def settle_if_payable(self, order: Order) -> bool:
        """仅当数据库中的订单仍可支付时写入已支付状态"""
        result = await self.session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order.id,
                OrderModel.order_status != OrderStatus.CANCELLED.value,
                OrderModel.payment_status.notin_([s.value for s in SETTLED_PAYMENT_STATUSES]),
            )
            .values(
                order_status=order.order_status.value,
                payment_status=order.payment_status.value,
                capture_transaction_id=order.capture_transaction_id,
                paid_date_utc=order.paid_date_utc,
            )
            .execution_options(synchronize_session=False)
        )
        settled = result.rowcount == 1
        logger.info(
            "order_settlement_attempted",
            order_id=order.id,
            settled=settled,
            capture_transaction_id=order.capture_transaction_id,
        )
        return settled
