"""
设置与本地化资源数据库模型
"""
from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from .base import Base


class SettingModel(Base):
    """宿主设置表：名称 + 店铺ID 唯一，店铺ID 0 为全局值"""
    __tablename__ = "settings"
    __table_args__ = (
        UniqueConstraint("name", "store_id", name="uq_settings_name_store"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True, comment="设置名")
    value = Column(Text, nullable=False, default="", comment="设置值")
    store_id = Column(Integer, nullable=False, default=0, comment="店铺ID")

    def __repr__(self):
        return f"<SettingModel(name='{self.name}', store_id={self.store_id})>"


class LocaleResourceModel(Base):
    """本地化资源表"""
    __tablename__ = "locale_resources"
    __table_args__ = (
        UniqueConstraint("name", "language", name="uq_locale_resources_name_language"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True, comment="资源名")
    value = Column(Text, nullable=False, comment="资源文本")
    language = Column(String(10), nullable=False, default="en", comment="语言代码")
