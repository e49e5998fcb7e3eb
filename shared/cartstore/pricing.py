"""Order summary figures derived from a cart"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .models import CartState

MONEY_QUANT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round to cents for display; stored amounts stay unrounded"""
    return Decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{quantize_money(value)}"


@dataclass(frozen=True)
class OrderSummary:
    """Subtotal, shipping, tax and grand total for a cart"""
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    item_count: int


def summarize(
    state: CartState,
    tax_rate: Decimal = Decimal("0.10"),
    shipping: Decimal = Decimal("0"),
) -> OrderSummary:
    """
    Build the order summary shown at checkout.

    Tax applies to the merchandise subtotal only.
    """
    tax_rate = Decimal(str(tax_rate))
    shipping = Decimal(str(shipping))
    if tax_rate < 0:
        raise ValueError(f"Tax rate cannot be negative: {tax_rate}")

    subtotal = state.total
    tax = subtotal * tax_rate
    return OrderSummary(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
        item_count=state.cart_count,
    )
