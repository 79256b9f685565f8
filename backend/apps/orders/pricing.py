"""
Order total calculation.

All amounts are ``Decimal``. Discount and tax are rounded to cents before the
total is summed, so ``total == subtotal - discount + tax + delivery_fee`` holds
exactly for every stored order.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple, Union

Number = Union[Decimal, int, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

PROMO_CODE = "WELCOME10"
PROMO_DISCOUNT_RATE = Decimal("0.10")
FREE_DELIVERY_THRESHOLD = Decimal("499")
DELIVERY_FEE = Decimal("49.00")
TAX_RATE = Decimal("0.05")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    delivery_fee: Decimal
    total: Decimal
    item_count: int
    applied_promo_code: Optional[str] = None

    @property
    def promo_applied(self) -> bool:
        return self.applied_promo_code is not None


def to_money(value: Number) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_promo_code(promo_code: Optional[str]) -> Optional[str]:
    if promo_code is None:
        return None
    code = str(promo_code).strip().upper()
    return code or None


def promo_discount_rate(promo_code: Optional[str]) -> Decimal:
    return PROMO_DISCOUNT_RATE if normalize_promo_code(promo_code) == PROMO_CODE else Decimal("0")


def delivery_fee_for(subtotal: Decimal) -> Decimal:
    return ZERO if subtotal >= FREE_DELIVERY_THRESHOLD else DELIVERY_FEE


def compute_subtotal(lines: Iterable[Tuple[Number, int]]) -> Tuple[Decimal, int]:
    subtotal = ZERO
    item_count = 0
    for unit_price, quantity in lines:
        subtotal += Decimal(str(unit_price)) * int(quantity)
        item_count += int(quantity)
    return to_money(subtotal), item_count


def compute_order_totals(
    lines: Iterable[Tuple[Number, int]], promo_code: Optional[str] = None
) -> OrderTotals:
    """Price ``(unit_price, quantity)`` lines; an empty list yields all zeros."""
    subtotal, item_count = compute_subtotal(lines)
    if item_count == 0:
        return OrderTotals(
            subtotal=ZERO,
            discount=ZERO,
            tax=ZERO,
            delivery_fee=ZERO,
            total=ZERO,
            item_count=0,
        )
    rate = promo_discount_rate(promo_code)
    discount = to_money(subtotal * rate)
    tax = to_money((subtotal - discount) * TAX_RATE)
    fee = delivery_fee_for(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        delivery_fee=fee,
        total=subtotal - discount + tax + fee,
        item_count=item_count,
        applied_promo_code=PROMO_CODE if rate else None,
    )
