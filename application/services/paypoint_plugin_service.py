"""Application layer orchestration for the PayPoint plugin (application/services).

Each workflow opens one unit of work and wires the processor, callback
handler, settings service and installer to the repositories it exposes.
"""
from __future__ import annotations

from typing import Callable

from application.dtos.payments import (
    ConfigurationModel,
    PaymentMethodInfo,
    PayPointPaymentSettings,
    PostProcessResult,
    StorefrontContext,
)
from application.ports.payment_gateway import PayPointGateway
from application.services.paypoint_callback import CallbackOutcome, PayPointCallbackHandler
from application.services.paypoint_processor import PayPointPaymentProcessor
from application.services.paypoint_settings import PayPointSettingsService
from application.services.plugin_installer import PluginInstaller
from domain.common.exceptions import OrderNotFoundException
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.order.service import OrderProcessingService


GatewayFactory = Callable[[PayPointPaymentSettings], PayPointGateway]


class PayPointPluginService:
    """High-level plugin workflows bridging API and domain layers."""

    def __init__(self, uow_factory: Callable[..., AbstractUnitOfWork], gateway_factory: GatewayFactory):
        self._uow_factory = uow_factory
        self._gateway_factory = gateway_factory

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------
    async def post_process_payment(self, order_id: int, storefront: StorefrontContext) -> PostProcessResult:
        async with self._uow_factory(readonly=True) as uow:
            order = await uow.order_repository.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundException(order_id)
            settings = await PayPointSettingsService(uow.setting_repository).load(storefront.store_id)

        processor = PayPointPaymentProcessor(self._gateway_factory(settings), settings)
        try:
            return await processor.post_process_payment(order, storefront)
        finally:
            await processor.aclose()

    async def handle_callback(self, raw_body: bytes) -> CallbackOutcome:
        async with self._uow_factory() as uow:
            settlement = OrderProcessingService(uow.order_repository)
            handler = PayPointCallbackHandler(uow.order_repository, settlement)
            return await handler.handle(raw_body)

    async def get_payment_method_info(self, language: str, store_scope: int = 0) -> PaymentMethodInfo:
        async with self._uow_factory(readonly=True) as uow:
            settings = await PayPointSettingsService(uow.setting_repository).load(store_scope)
            processor = PayPointPaymentProcessor(
                self._gateway_factory(settings),
                settings,
                resources=uow.locale_resource_repository,
            )
            try:
                return await processor.get_payment_method_info(language)
            finally:
                await processor.aclose()

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    async def get_configuration(self, store_scope: int = 0) -> ConfigurationModel:
        async with self._uow_factory(readonly=True) as uow:
            return await PayPointSettingsService(uow.setting_repository).get_configuration(store_scope)

    async def save_configuration(self, model: ConfigurationModel) -> ConfigurationModel:
        async with self._uow_factory() as uow:
            service = PayPointSettingsService(uow.setting_repository)
            await service.save_configuration(model)
            return await service.get_configuration(model.active_store_scope_configuration)

    async def install(self) -> None:
        async with self._uow_factory() as uow:
            installer = PluginInstaller(PayPointSettingsService(uow.setting_repository), uow.locale_resource_repository)
            await installer.install()

    async def uninstall(self) -> None:
        async with self._uow_factory() as uow:
            installer = PluginInstaller(PayPointSettingsService(uow.setting_repository), uow.locale_resource_repository)
            await installer.uninstall()
