"""Pricing engine for carts and orders.

Pure functions over (price, discount, quantity) lines. Amounts are carried as
`Decimal` internally and rounded to cents only when the aggregate figures are
published; individual lines are never rounded.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Convert a stored float/int/str amount to Decimal without binary noise."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def effective_price(price, discount=0) -> Decimal:
    """Base price after the discount percentage is applied.

    A zero discount returns the base price untouched.
    """
    price = to_decimal(price)
    discount = to_decimal(discount)
    if discount <= ZERO:
        return price
    return max(price * (1 - discount / HUNDRED), ZERO)


def line_amount(price, discount, quantity) -> Decimal:
    """Unrounded contribution of one line to the subtotal."""
    return effective_price(price, discount) * int(quantity)


@dataclass(frozen=True)
class PricedLine:
    price: Decimal
    discount: Decimal
    quantity: int

    @property
    def amount(self) -> Decimal:
        return line_amount(self.price, self.discount, self.quantity)


@dataclass(frozen=True)
class Totals:
    """Published figures of a set of lines, each rounded to cents."""

    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    total: Decimal = ZERO

    def as_dict(self) -> dict[str, float]:
        return {
            "subtotal": float(self.subtotal),
            "tax": float(self.tax),
            "total": float(self.total),
        }


def compute_totals(lines: Iterable[PricedLine], tax_rate) -> Totals:
    """Aggregate lines into subtotal, tax and total.

    Each figure is rounded independently from the unrounded sums, so `total`
    is never derived from the already-rounded subtotal and tax.
    """
    raw_subtotal = sum((line.amount for line in lines), ZERO)
    raw_tax = raw_subtotal * to_decimal(tax_rate)
    return Totals(
        subtotal=round_money(raw_subtotal),
        tax=round_money(raw_tax),
        total=round_money(raw_subtotal + raw_tax),
    )
