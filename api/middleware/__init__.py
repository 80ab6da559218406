from .request_id import RequestIDMiddleware
from .logging import LoggingMiddleware
from .locale import LocaleMiddleware

__all__ = [
    "RequestIDMiddleware",
    "LoggingMiddleware",
    "LocaleMiddleware",
]
