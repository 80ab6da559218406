"""
Plugin install/uninstall bookkeeping: default settings and locale resources.
"""
from __future__ import annotations

from application.dtos.payments import PayPointPaymentSettings
from application.ports.host import LocaleResourceStore
from application.services.paypoint_settings import PayPointSettingsService
from core.logging_config import get_logger
from shared.resources import DEFAULT_RESOURCES, PLUGIN_RESOURCE_NAMES


logger = get_logger(__name__)


class PluginInstaller:
    def __init__(self, settings: PayPointSettingsService, resources: LocaleResourceStore) -> None:
        self._settings = settings
        self._resources = resources

    async def install(self) -> None:
        # New installations talk to the sandbox until configured otherwise
        await self._settings.save(PayPointPaymentSettings(use_sandbox=True), store_scope=0)
        for name in PLUGIN_RESOURCE_NAMES:
            await self._resources.add_or_update(name, DEFAULT_RESOURCES[name], "en")
        logger.info("paypoint_plugin_installed", resources=len(PLUGIN_RESOURCE_NAMES))

    async def uninstall(self) -> None:
        removed = await self._settings.delete_all()
        for name in PLUGIN_RESOURCE_NAMES:
            await self._resources.delete(name)
        logger.info("paypoint_plugin_uninstalled", settings_removed=removed, resources=len(PLUGIN_RESOURCE_NAMES))
