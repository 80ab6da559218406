"""
API依赖项 - 服务装配与管理接口认证
"""
import hmac
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from application.dtos.payments import StorefrontContext
from application.services.paypoint_plugin_service import PayPointPluginService
from core.config import settings
from core.exceptions import UnauthorizedException, ForbiddenException
from core.i18n import get_language_code
from infrastructure.external.payments import get_payment_gateway
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork

# HTTP Bearer for admin API calls
http_bearer = HTTPBearer(
    scheme_name="Bearer",
    description="Admin API token",
    auto_error=False,
)


async def get_plugin_service() -> PayPointPluginService:
    return PayPointPluginService(uow_factory=SQLAlchemyUnitOfWork, gateway_factory=get_payment_gateway)


async def require_admin(
    bearer_token: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> None:
    """校验管理接口令牌（未配置 ADMIN_API_TOKEN 时管理接口全部拒绝）"""
    if not bearer_token or not bearer_token.credentials:
        raise UnauthorizedException()
    expected = settings.ADMIN_API_TOKEN
    if not expected or not hmac.compare_digest(bearer_token.credentials, expected):
        raise ForbiddenException()


async def get_storefront(request: Request) -> StorefrontContext:
    """当前请求对应的店铺上下文（店铺地址缺省取请求的 base_url）"""
    return StorefrontContext(
        store_id=settings.store.id,
        store_location=settings.store.location or str(request.base_url),
        working_language=get_language_code(),
        primary_currency_code=settings.store.primary_currency_code,
    )
