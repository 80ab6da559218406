"""
Host platform ports: the services the plugin borrows from the storefront.

The plugin never owns orders, settings or resource strings; it talks to them
through these narrow protocols so tests and other hosts can supply their own.
"""
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable
from uuid import UUID

from domain.order.entity import Order


@runtime_checkable
class OrderStore(Protocol):
    async def get_by_id(self, order_id: int) -> Optional[Order]: ...

    async def get_by_guid(self, order_guid: UUID) -> Optional[Order]: ...


@runtime_checkable
class OrderSettlement(Protocol):
    """At-most-once settlement: mark_order_as_paid is decided by the stored order."""

    def can_mark_order_as_paid(self, order: Order) -> bool: ...

    async def mark_order_as_paid(self, order: Order, capture_transaction_id: Optional[str] = None) -> bool: ...


@runtime_checkable
class SettingsStore(Protocol):
    async def get_value(self, key: str, store_id: int = 0) -> Optional[str]: ...

    async def set_value(self, key: str, value: str, store_id: int = 0) -> None: ...

    async def exists(self, key: str, store_id: int = 0) -> bool: ...

    async def delete(self, key: str, store_id: int = 0) -> bool: ...

    async def delete_by_prefix(self, prefix: str) -> int: ...


@runtime_checkable
class LocaleResourceStore(Protocol):
    async def get(self, name: str, language: str = "en") -> Optional[str]: ...

    async def add_or_update(self, name: str, value: str, language: str = "en") -> None: ...

    async def delete(self, name: str) -> int: ...
