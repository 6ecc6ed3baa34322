# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Payment gateway port.
# ============================================================================
"""Payment Gateway Port.

Implementations: MercadoPagoClient
"""

from decimal import Decimal
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IPaymentGateway(Protocol):
    """Checkout preferences and payment lookup.

    Failures raise ``MercadoPagoError`` subclasses.
    """

    async def create_preference(
        self,
        title: str,
        description: str,
        unit_price: Decimal,
        payer_email: str,
        external_reference: str,
        metadata: dict[str, Any],
        back_urls: dict[str, str],
        notification_url: str | None = None,
    ) -> dict[str, Any]:
        """
        Returns:
            Dict with ``preference_id``, ``init_point`` and ``sandbox_init_point``.
        """
        ...

    async def get_payment(self, payment_id: str) -> dict[str, Any]:
        ...
