"""SQLAlchemy Unit of Work 实现"""
from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from domain.common.unit_of_work import AbstractUnitOfWork
from infrastructure.database import AsyncSessionLocal
from infrastructure.repositories.order_repository import SQLAlchemyOrderRepository
from infrastructure.repositories.setting_repository import (
    SQLAlchemySettingRepository,
    SQLAlchemyLocaleResourceRepository,
)


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """每个工作单元独占一个会话；只读单元不提交，退出时直接关闭会话"""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        *,
        readonly: bool = False,
    ) -> None:
        super().__init__(readonly=readonly)
        self._session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.order_repository = SQLAlchemyOrderRepository(self.session)
        self.setting_repository = SQLAlchemySettingRepository(self.session)
        self.locale_resource_repository = SQLAlchemyLocaleResourceRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        finally:
            await self.session.close()
            self.session = None
            self.order_repository = None
            self.setting_repository = None
            self.locale_resource_repository = None

    async def commit(self) -> None:
        if self.session.in_transaction():
            await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        if self.session.in_transaction():
            await self.session.rollback()
        self._committed = False
