"""
Pricing Policy

Maps an insurance provider ("obra social") to a discount ratio and applies
it to the base consultation price.
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


class PricingPolicy:
    """
    Domain service that prices a consultation for an insurance provider.

    Each booking entry point owns its own discount table; the container wires
    the table explicitly instead of sharing a global one.

    Example:
        ```python
        policy = PricingPolicy({"OSDE": 0.3}, base_price=5000)
        policy.price("OSDE")      # Decimal("3500.00")
        policy.price("Desconocida")  # Decimal("5000.00")
        ```
    """

    def __init__(self, discounts: Mapping[str, float], base_price: float | Decimal = 5000):
        """
        Initialize pricing policy.

        Args:
            discounts: Discount ratio (0..1) per insurance provider name
            base_price: Price before any discount
        """
        self._discounts = {name: Decimal(str(ratio)) for name, ratio in discounts.items()}
        self._base_price = Decimal(str(base_price))

    @property
    def base_price(self) -> Decimal:
        return self._base_price

    def discount(self, insurance_name: str | None) -> Decimal:
        """Discount ratio for a provider; unknown providers get no discount."""
        if not insurance_name:
            return Decimal("0")
        return self._discounts.get(insurance_name, Decimal("0"))

    def price(self, insurance_name: str | None) -> Decimal:
        """Final price rounded to cents."""
        final = self._base_price * (Decimal("1") - self.discount(insurance_name))
        return final.quantize(CENTS, ROUND_HALF_UP)

    def is_fully_covered(self, insurance_name: str | None) -> bool:
        """A zero final price means no payment is required."""
        return self.price(insurance_name) == ZERO
