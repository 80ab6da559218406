"""
Additional handling fee charged for paying with this method.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable

from application.dtos.payments import CartItem


_CENT = Decimal("0.01")


class AdditionalFeeCalculator:
    """Fixed or percentage fee over the cart subtotal."""

    def calculate(self, cart: Iterable[CartItem], fee: Decimal, use_percentage: bool) -> Decimal:
        if fee is None or fee <= 0:
            return Decimal("0")
        if not use_percentage:
            return fee
        subtotal = sum((item.subtotal for item in cart), Decimal("0"))
        return (subtotal * fee / Decimal(100)).quantize(_CENT, rounding=ROUND_HALF_EVEN)
