"""
PayPoint plugin routes.

Storefront endpoints keep the host's plugin paths; admin endpoints require the
admin bearer token. Keep this thin: no gateway details here.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse, Response as PlainResponse
from starlette import status as http_status

from api.dependencies import get_plugin_service, get_storefront, require_admin
from application.dtos.payments import ConfigurationModel, StorefrontContext
from application.services.paypoint_plugin_service import PayPointPluginService
from core.response import success_response
from core.i18n import t, get_language_code
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException


router = APIRouter(tags=["PayPoint"])
admin_router = APIRouter(
    prefix="/Admin/PaymentPayPoint",
    tags=["PayPoint Admin"],
    dependencies=[Depends(require_admin)],
)
logger = get_logger(__name__)


@router.post("/Plugins/PaymentPayPoint/Callback", summary="Transaction notification")
async def paypoint_callback(
    request: Request,
    service: PayPointPluginService = Depends(get_plugin_service),
):
    # Acknowledge every notification so the gateway does not retry
    raw_body = await request.body()
    try:
        outcome = await service.handle_callback(raw_body)
    except BusinessException as exc:
        logger.error("paypoint_callback_rejected", code=int(exc.code), message=exc.message)
        return PlainResponse(status_code=http_status.HTTP_200_OK)
    logger.debug("paypoint_callback_handled", outcome=outcome.value)
    return PlainResponse(status_code=http_status.HTTP_200_OK)


@router.post("/Plugins/PaymentPayPoint/PostProcessPayment/{order_id}", summary="Redirect to hosted payment page")
async def post_process_payment(
    order_id: int,
    storefront: StorefrontContext = Depends(get_storefront),
    service: PayPointPluginService = Depends(get_plugin_service),
):
    result = await service.post_process_payment(order_id, storefront)
    if result.redirected:
        return RedirectResponse(url=result.redirect_url, status_code=http_status.HTTP_302_FOUND)
    return success_response(
        data={"order_id": result.order_id, "redirected": False},
        message=t("payments.paypoint.redirect.skipped"),
    )


@router.get("/Plugins/PaymentPayPoint/PaymentInfo", summary="Payment method info")
async def payment_info(
    storefront: StorefrontContext = Depends(get_storefront),
    service: PayPointPluginService = Depends(get_plugin_service),
):
    info = await service.get_payment_method_info(get_language_code(), storefront.store_id)
    return success_response(data=info.model_dump(mode="json"), message=t("payments.paypoint.payment_info"))


@admin_router.get("/Configure", summary="Get plugin configuration")
async def get_configuration(
    store_scope: int = Query(default=0, ge=0),
    service: PayPointPluginService = Depends(get_plugin_service),
):
    model = await service.get_configuration(store_scope)
    return success_response(data=model.model_dump(mode="json"))


@admin_router.post("/Configure", summary="Save plugin configuration")
async def save_configuration(
    payload: ConfigurationModel,
    store_scope: Optional[int] = Query(default=None, ge=0),
    service: PayPointPluginService = Depends(get_plugin_service),
):
    if store_scope is not None:
        payload = payload.model_copy(update={"active_store_scope_configuration": store_scope})
    model = await service.save_configuration(payload)
    return success_response(data=model.model_dump(mode="json"), message=t("Admin.Plugins.Saved"))


@admin_router.post("/Install", summary="Install plugin")
async def install_plugin(service: PayPointPluginService = Depends(get_plugin_service)):
    await service.install()
    return success_response(message=t("Admin.Plugins.Installed"))


@admin_router.post("/Uninstall", summary="Uninstall plugin")
async def uninstall_plugin(service: PayPointPluginService = Depends(get_plugin_service)):
    await service.uninstall()
    return success_response(message=t("Admin.Plugins.Uninstalled"))
