"""
PayPoint settings stored in the host settings table.

Each field is one row keyed ``paypointpaymentsettings.<field>`` plus a store
id. Store 0 holds the shared value; a positive store id holds an override
that wins for that storefront only.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from application.dtos.payments import ConfigurationModel, PayPointPaymentSettings
from application.ports.host import SettingsStore
from core.logging_config import get_logger


logger = get_logger(__name__)

SETTINGS_PREFIX = "paypointpaymentsettings."

# Fields an admin may override per store; credentials are saved at the chosen scope directly
OVERRIDABLE_FIELDS = (
    "installation_id",
    "use_sandbox",
    "additional_fee",
    "additional_fee_percentage",
)
CREDENTIAL_FIELDS = ("api_username", "api_password")


def setting_key(field: str) -> str:
    return SETTINGS_PREFIX + field.replace("_", "")


def _to_storage(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def _from_storage(field: str, raw: str) -> Any:
    annotation = PayPointPaymentSettings.model_fields[field].annotation
    if annotation is bool:
        return raw.strip().lower() in {"true", "1", "yes"}
    if annotation is Decimal:
        try:
            return Decimal(raw)
        except InvalidOperation:
            logger.warning("paypoint_setting_invalid_decimal", key=setting_key(field), value=raw)
            return Decimal("0")
    return raw or None


class PayPointSettingsService:
    def __init__(self, store: SettingsStore) -> None:
        self._store = store

    async def _read(self, field: str, store_scope: int) -> Optional[str]:
        key = setting_key(field)
        if store_scope > 0:
            value = await self._store.get_value(key, store_scope)
            if value is not None:
                return value
        return await self._store.get_value(key, 0)

    async def load(self, store_scope: int = 0) -> PayPointPaymentSettings:
        """Settings effective for a storefront (store overrides win)."""
        values: dict[str, Any] = {}
        for field in PayPointPaymentSettings.model_fields:
            raw = await self._read(field, store_scope)
            if raw is not None:
                values[field] = _from_storage(field, raw)
        return PayPointPaymentSettings(**values)

    async def save(self, settings: PayPointPaymentSettings, store_scope: int = 0) -> None:
        for field in PayPointPaymentSettings.model_fields:
            await self._store.set_value(setting_key(field), _to_storage(getattr(settings, field)), store_scope)

    async def get_configuration(self, store_scope: int = 0) -> ConfigurationModel:
        settings = await self.load(store_scope)
        model = ConfigurationModel(
            active_store_scope_configuration=store_scope,
            **settings.model_dump(),
        )
        if store_scope > 0:
            overrides = {
                f"{field}_override_for_store": await self._store.exists(setting_key(field), store_scope)
                for field in OVERRIDABLE_FIELDS
            }
            model = model.model_copy(update=overrides)
        return model

    async def save_configuration(self, model: ConfigurationModel) -> PayPointPaymentSettings:
        store_scope = model.active_store_scope_configuration

        for field in CREDENTIAL_FIELDS:
            await self._store.set_value(setting_key(field), _to_storage(getattr(model, field)), store_scope)

        for field in OVERRIDABLE_FIELDS:
            key = setting_key(field)
            override = getattr(model, f"{field}_override_for_store")
            if override or store_scope == 0:
                await self._store.set_value(key, _to_storage(getattr(model, field)), store_scope)
            elif store_scope > 0:
                await self._store.delete(key, store_scope)

        logger.info(
            "paypoint_settings_saved",
            store_scope=store_scope,
            use_sandbox=model.use_sandbox,
            installation_id=model.installation_id,
        )
        return await self.load(store_scope)

    async def delete_all(self) -> int:
        return await self._store.delete_by_prefix(SETTINGS_PREFIX)
