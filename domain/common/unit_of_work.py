"""Unit of Work 抽象定义

一个工作单元对应一次回调或一次管理操作：正常退出时提交，异常时回滚。
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from domain.order.repository import OrderRepository
from domain.settings.repository import SettingRepository, LocaleResourceRepository


class AbstractUnitOfWork(ABC):
    order_repository: Optional[OrderRepository]
    setting_repository: Optional[SettingRepository]
    locale_resource_repository: Optional[LocaleResourceRepository]

    def __init__(self, *, readonly: bool = False) -> None:
        self.readonly = readonly
        self._committed = False
        self.order_repository = None
        self.setting_repository = None
        self.locale_resource_repository = None

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc is not None:
            await self.rollback()
        elif not self.readonly and not self._committed:
            await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
