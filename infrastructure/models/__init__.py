"""Infrastructure models package exports."""
from .base import Base, metadata
from .order import OrderModel
from .setting import SettingModel, LocaleResourceModel

__all__ = [
    "Base",
    "metadata",
    "OrderModel",
    "SettingModel",
    "LocaleResourceModel",
]
