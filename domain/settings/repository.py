"""
设置与本地化资源仓储接口

Settings are keyed by name and store id; store id 0 holds the value shared
by every storefront, a positive id holds a per-store override.
"""
from abc import ABC, abstractmethod
from typing import Optional


class SettingRepository(ABC):
    """设置仓储抽象接口"""

    @abstractmethod
    async def get_value(self, key: str, store_id: int = 0) -> Optional[str]:
        """读取指定范围内的设置值，不做范围回退"""
        pass

    @abstractmethod
    async def set_value(self, key: str, value: str, store_id: int = 0) -> None:
        """写入（新增或覆盖）设置值"""
        pass

    @abstractmethod
    async def exists(self, key: str, store_id: int = 0) -> bool:
        pass

    @abstractmethod
    async def delete(self, key: str, store_id: int = 0) -> bool:
        pass

    @abstractmethod
    async def delete_by_prefix(self, prefix: str) -> int:
        """删除所有范围内以 prefix 开头的设置，返回删除条数"""
        pass


class LocaleResourceRepository(ABC):
    """本地化资源仓储抽象接口"""

    @abstractmethod
    async def get(self, name: str, language: str = "en") -> Optional[str]:
        pass

    @abstractmethod
    async def add_or_update(self, name: str, value: str, language: str = "en") -> None:
        pass

    @abstractmethod
    async def delete(self, name: str) -> int:
        """删除所有语言下的同名资源"""
        pass
