from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    def display(self) -> dict:
        return {
            "subtotal": PricingPolicy.display(self.subtotal),
            "tax": PricingPolicy.display(self.tax),
            "shipping": PricingPolicy.display(self.shipping),
            "total": PricingPolicy.display(self.total),
        }


@dataclass(frozen=True)
class PricingPolicy:
    """Fixed tax rate and flat shipping fee applied to every order.

    Amounts stay unrounded; ``display`` rounds to cents for presentation.
    """

    tax_rate: Decimal = Decimal("0.10")
    shipping_fee: Decimal = Decimal("5.99")

    def subtotal(self, lines: Iterable) -> Decimal:
        return sum((line.unit_price * line.quantity for line in lines), Decimal("0"))

    def totals(self, lines: Iterable) -> OrderTotals:
        subtotal = self.subtotal(lines)
        tax = subtotal * self.tax_rate
        return OrderTotals(
            subtotal=subtotal,
            tax=tax,
            shipping=self.shipping_fee,
            total=subtotal + tax + self.shipping_fee,
        )

    @staticmethod
    def display(amount: Decimal) -> float:
        return float(Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP))


DEFAULT_PRICING = PricingPolicy()
