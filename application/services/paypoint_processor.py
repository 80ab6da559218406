"""
PayPoint payment processor: the redirection payment method exposed to checkout.

``begin_payment`` is the only code path that talks to the gateway. It builds
a hosted payment session for a placed order and returns the URL the shopper
must be redirected to. A gateway rejection is logged and the order stays
pending; transport faults and malformed answers propagate to the caller.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, Optional

from application.dtos.payments import (
    CartItem,
    PaymentMethodInfo,
    PaymentOperationResult,
    PayPointPaymentSettings,
    PostProcessResult,
    StorefrontContext,
)
from application.dtos.paypoint import (
    PaymentSessionRequest,
    PayPointAmount,
    PayPointCustomer,
    PayPointMoney,
    PayPointNotificationUrl,
    PayPointSession,
    PayPointTransaction,
    PayPointUrl,
)
from application.ports.host import LocaleResourceStore
from application.ports.payment_gateway import PayPointGateway
from application.services.fee_calculator import AdditionalFeeCalculator
from core.logging_config import get_logger
from domain.common.exceptions import DomainValidationException
from domain.order.entity import Order, PaymentStatus
from shared.codes.payment_codes import (
    CALLBACK_PATH,
    CANCEL_PATH,
    CONFIGURE_PATH,
    RETURN_PATH,
    PayPointNotificationFormat,
)
from shared.resources import DEFAULT_RESOURCES


logger = get_logger(__name__)

SYSTEM_NAME = "Payments.PayPoint"
DESCRIPTION_RESOURCE = "Plugins.Payments.PayPoint.PaymentMethodDescription"
REDIRECTION_TIP_RESOURCE = "Plugins.Payments.PayPoint.RedirectionTip"

# Customers may re-enter the hosted page only after this delay
REPOST_DELAY = timedelta(minutes=1)


def round_amount(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)


class PayPointPaymentProcessor:
    system_name = SYSTEM_NAME

    supports_capture = False
    supports_partially_refund = False
    supports_refund = False
    supports_void = False
    recurring_payment_type = "not_supported"
    payment_method_type = "redirection"
    skip_payment_info = False

    def __init__(
        self,
        gateway: PayPointGateway,
        settings: PayPointPaymentSettings,
        *,
        fee_calculator: Optional[AdditionalFeeCalculator] = None,
        resources: Optional[LocaleResourceStore] = None,
    ) -> None:
        self.gateway = gateway
        self.settings = settings
        self._fee_calculator = fee_calculator or AdditionalFeeCalculator()
        self._resources = resources

    # Session initiation

    def build_session_request(self, order: Order, storefront: StorefrontContext) -> PaymentSessionRequest:
        if order.id is None:
            raise DomainValidationException("Order must be persisted before payment", field="id")
        if order.order_total <= 0:
            raise DomainValidationException(
                f"Order total must be positive: {order.order_total}",
                field="order_total",
            )
        location = storefront.store_location
        return PaymentSessionRequest(
            locale=storefront.working_language,
            customer=PayPointCustomer(registered=False),
            transaction=PayPointTransaction(
                merchant_reference=str(order.order_guid),
                money=PayPointMoney(
                    currency=storefront.primary_currency_code,
                    amount=PayPointAmount(fixed=round_amount(order.order_total)),
                ),
                description=f"Order #{order.id}",
            ),
            session=PayPointSession(
                return_url=PayPointUrl(url=location + RETURN_PATH.format(order_id=order.id)),
                cancel_url=PayPointUrl(url=location + CANCEL_PATH.format(order_id=order.id)),
                transaction_notification=PayPointNotificationUrl(
                    url=location + CALLBACK_PATH,
                    format=PayPointNotificationFormat.REST_JSON,
                ),
            ),
        )

    async def begin_payment(self, order: Order, storefront: StorefrontContext) -> PostProcessResult:
        request = self.build_session_request(order, storefront)
        response = await self.gateway.create_session(request)

        if response.is_success and response.redirect_url:
            return PostProcessResult(order_id=order.id, redirect_url=response.redirect_url)

        logger.error(
            "paypoint_session_failed",
            order_id=order.id,
            status=response.status,
            reason_code=response.reason_code,
            reason_message=response.reason_message,
            message=f"PayPoint transaction failed. {response.reason_code} - {response.reason_message}",
        )
        return PostProcessResult(order_id=order.id, redirect_url=None)

    # Host checkout hook name
    post_process_payment = begin_payment

    async def process_payment(self) -> PaymentOperationResult:
        # Nothing is charged before redirection
        return PaymentOperationResult()

    def can_repost_process_payment(self, order: Order, now: Optional[datetime] = None) -> bool:
        """Whether the shopper may be sent to the hosted page again.

        The callback may still be in flight right after checkout, so a
        short delay protects against paying twice.
        """
        if order is None:
            raise ValueError("order is required")
        if order.payment_status != PaymentStatus.PENDING:
            return False
        now = now or datetime.now(timezone.utc)
        return now - order.created_on_utc >= REPOST_DELAY

    # Unsupported gateway operations

    async def capture(self, order: Order) -> PaymentOperationResult:
        return self._not_supported("Capture method not supported")

    async def refund(self, order: Order, amount: Decimal) -> PaymentOperationResult:
        return self._not_supported("Refund method not supported")

    async def void(self, order: Order) -> PaymentOperationResult:
        return self._not_supported("Void method not supported")

    async def process_recurring_payment(self, order: Order) -> PaymentOperationResult:
        return self._not_supported("Recurring payment not supported")

    async def cancel_recurring_payment(self, order: Order) -> PaymentOperationResult:
        return self._not_supported("Recurring payment not supported")

    @staticmethod
    def _not_supported(message: str) -> PaymentOperationResult:
        result = PaymentOperationResult()
        result.add_error(message)
        return result

    # Checkout presentation

    def hide_payment_method(self, cart: Iterable[CartItem]) -> bool:
        return False

    def get_additional_handling_fee(self, cart: Iterable[CartItem]) -> Decimal:
        return self._fee_calculator.calculate(
            cart,
            self.settings.additional_fee,
            self.settings.additional_fee_percentage,
        )

    @staticmethod
    def get_configuration_page_url(store_location: str) -> str:
        if not store_location.endswith("/"):
            store_location += "/"
        return store_location + CONFIGURE_PATH

    async def _resource(self, name: str, language: str) -> str:
        value = None
        if self._resources is not None:
            value = await self._resources.get(name, language)
        return value or DEFAULT_RESOURCES[name]

    async def get_payment_method_description(self, language: str = "en") -> str:
        return await self._resource(DESCRIPTION_RESOURCE, language)

    async def get_payment_method_info(self, language: str = "en") -> PaymentMethodInfo:
        return PaymentMethodInfo(
            system_name=self.system_name,
            description=await self.get_payment_method_description(language),
            redirection_tip=await self._resource(REDIRECTION_TIP_RESOURCE, language),
            payment_method_type=self.payment_method_type,
            recurring_payment_type=self.recurring_payment_type,
            skip_payment_info=self.skip_payment_info,
            supports_capture=self.supports_capture,
            supports_partially_refund=self.supports_partially_refund,
            supports_refund=self.supports_refund,
            supports_void=self.supports_void,
        )

    async def aclose(self) -> None:
        close = getattr(self.gateway, "aclose", None)
        if callable(close):
            await close()
