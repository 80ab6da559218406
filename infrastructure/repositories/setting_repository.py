"""
设置与本地化资源仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from domain.settings.repository import SettingRepository, LocaleResourceRepository
from infrastructure.models.setting import SettingModel, LocaleResourceModel


class SQLAlchemySettingRepository(SettingRepository):
    """设置仓储的SQLAlchemy实现（名称不区分大小写）"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get(self, key: str, store_id: int) -> Optional[SettingModel]:
        result = await self.session.execute(
            select(SettingModel).where(
                SettingModel.name == key.lower(),
                SettingModel.store_id == store_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_value(self, key: str, store_id: int = 0) -> Optional[str]:
        db_setting = await self._get(key, store_id)
        return db_setting.value if db_setting else None

    async def set_value(self, key: str, value: str, store_id: int = 0) -> None:
        db_setting = await self._get(key, store_id)
        if db_setting is None:
            self.session.add(SettingModel(name=key.lower(), value=value, store_id=store_id))
        else:
            db_setting.value = value
        await self.session.flush()

    async def exists(self, key: str, store_id: int = 0) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(SettingModel).where(
                SettingModel.name == key.lower(),
                SettingModel.store_id == store_id,
            )
        )
        return result.scalar() > 0

    async def delete(self, key: str, store_id: int = 0) -> bool:
        db_setting = await self._get(key, store_id)
        if db_setting is None:
            return False
        await self.session.delete(db_setting)
        await self.session.flush()
        return True

    async def delete_by_prefix(self, prefix: str) -> int:
        result = await self.session.execute(
            delete(SettingModel).where(SettingModel.name.startswith(prefix.lower()))
        )
        await self.session.flush()
        return result.rowcount or 0


class SQLAlchemyLocaleResourceRepository(LocaleResourceRepository):
    """本地化资源仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get(self, name: str, language: str) -> Optional[LocaleResourceModel]:
        result = await self.session.execute(
            select(LocaleResourceModel).where(
                LocaleResourceModel.name == name,
                LocaleResourceModel.language == language,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, name: str, language: str = "en") -> Optional[str]:
        db_resource = await self._get(name, language)
        return db_resource.value if db_resource else None

    async def add_or_update(self, name: str, value: str, language: str = "en") -> None:
        db_resource = await self._get(name, language)
        if db_resource is None:
            self.session.add(LocaleResourceModel(name=name, value=value, language=language))
        else:
            db_resource.value = value
        await self.session.flush()

    async def delete(self, name: str) -> int:
        result = await self.session.execute(
            delete(LocaleResourceModel).where(LocaleResourceModel.name == name)
        )
        await self.session.flush()
        return result.rowcount or 0
