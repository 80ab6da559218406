"""
Business codes returned in the ``code`` field of every JSON envelope.

Gateway specific codes and PayPoint protocol constants live in
``shared.codes.payment_codes``.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    SUCCESS = 0

    # 请求参数 (1xxxx)
    PARAM_ERROR = 10000
    PARAM_VALIDATION_ERROR = 10003

    # 业务 (2xxxx)
    BUSINESS_ERROR = 20000
    NOT_FOUND = 20006
    ORDER_NOT_FOUND = 20010

    # 管理接口认证 (3xxxx)
    UNAUTHORIZED = 30001
    FORBIDDEN = 30002

    # 系统 (4xxxx)
    SYSTEM_ERROR = 40000
    SERVICE_UNAVAILABLE = 40003


__all__ = ["BusinessCode"]
