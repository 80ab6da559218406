"""领域层业务异常定义，供领域、应用与基础设施层使用。

core 层负责把异常映射为 HTTP 响应，领域层不反向依赖 core。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类

    message_key 指向本地化资源；format_params 用于填充其中的占位符。
    """

    def __init__(
        self,
        code: int,
        message: str,
        *,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
        message_key: Optional[str] = None,
        format_params: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        self.message_key = message_key
        self.format_params = format_params


class OrderNotFoundException(BusinessException):
    def __init__(self, order_id: Optional[int] = None, *, order_guid: Optional[str] = None):
        details = {
            key: value
            for key, value in (("order_id", order_id), ("order_guid", order_guid))
            if value is not None
        }
        super().__init__(
            BusinessCode.ORDER_NOT_FOUND,
            "Order not found",
            error_type="OrderNotFound",
            details=details or None,
            message_key="order.not_found",
        )


class DomainValidationException(BusinessException):
    """违反订单业务规则（金额、状态流转）"""

    def __init__(self, message: str, *, field: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(
            BusinessCode.PARAM_VALIDATION_ERROR,
            message,
            error_type="DomainValidationError",
            details=details,
            field=field,
            message_key="validation.domain",
            format_params={"reason": message},
        )
