"""
订单仓储接口 - 定义订单数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .entity import Order


class OrderRepository(ABC):
    """订单仓储抽象接口"""

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """创建订单"""
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """根据ID获取订单"""
        pass

    @abstractmethod
    async def get_by_guid(self, order_guid: UUID) -> Optional[Order]:
        """根据订单GUID（商户参考号）获取订单"""
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        """更新订单"""
        pass

    @abstractmethod
    async def settle_if_payable(self, order: Order) -> bool:
        """
        原子地写入已支付状态

        仅当存储中的订单仍可支付时才写入，返回是否写入成功。
        """
        pass
