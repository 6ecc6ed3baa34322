# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Creates a Mercado Pago checkout for a slot.
# ============================================================================
"""Create Payment Preference Use Case."""

import logging
from typing import TYPE_CHECKING

from turnos.core.domain import EntityNotFoundException

from ...domain.services import PricingPolicy
from ..dto import CreatePaymentPreferenceRequest, PaymentPreferenceResult

if TYPE_CHECKING:
    from ..ports import IPaymentGateway, ISlotRepository

logger = logging.getLogger(__name__)

PREFERENCE_TITLE = "Reserva de turno médico"


class CreatePaymentPreferenceUseCase:
    """Genera la preferencia de pago del turno según la obra social.

    When the insurance covers the whole price no preference is created and
    the result carries ``init_point=None``.
    """

    def __init__(
        self,
        slot_repository: "ISlotRepository",
        payment_gateway: "IPaymentGateway",
        pricing_policy: PricingPolicy,
        frontend_url: str,
        notification_url: str | None = None,
    ) -> None:
        self._slots = slot_repository
        self._payments = payment_gateway
        self._pricing = pricing_policy
        self._frontend_url = frontend_url.rstrip("/")
        self._notification_url = notification_url

    async def execute(self, request: CreatePaymentPreferenceRequest) -> PaymentPreferenceResult:
        """
        Raises:
            EntityNotFoundException: Slot not found.
            SlotUnavailableException: Slot already occupied.
            MercadoPagoError: Preference could not be created.
        """
        slot = await self._slots.find_by_id(request.slot_id)
        if slot is None:
            raise EntityNotFoundException("Turno", request.slot_id, "Turno no encontrado")
        slot.ensure_bookable()

        price = self._pricing.price(request.insurance_name)
        if self._pricing.is_fully_covered(request.insurance_name):
            logger.info(f"[MP-PREFERENCE] Slot {request.slot_id} fully covered by {request.insurance_name}")
            return PaymentPreferenceResult(price=price)

        preference = await self._payments.create_preference(
            title=PREFERENCE_TITLE,
            description=f"Obra social: {request.insurance_name}",
            unit_price=price,
            payer_email=request.payer_email,
            external_reference=request.slot_id,
            metadata={"slot_id": request.slot_id, "obra_social": request.insurance_name},
            back_urls=self._back_urls(),
            notification_url=self._notification_url,
        )
        logger.info(
            f"[MP-PREFERENCE] Preference {preference.get('preference_id')} for slot {request.slot_id}: {price}"
        )
        return PaymentPreferenceResult(
            price=price,
            init_point=preference.get("init_point"),
            preference_id=preference.get("preference_id"),
            sandbox_init_point=preference.get("sandbox_init_point"),
        )

    def _back_urls(self) -> dict[str, str]:
        base = f"{self._frontend_url}/pago/estatus?status="
        return {
            "success": f"{base}approved",
            "failure": f"{base}rejected",
            "pending": f"{base}pending",
        }
