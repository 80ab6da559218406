from .entity import Order, OrderStatus, PaymentStatus
from .repository import OrderRepository
from .service import OrderProcessingService

__all__ = ["Order", "OrderStatus", "PaymentStatus", "OrderRepository", "OrderProcessingService"]
