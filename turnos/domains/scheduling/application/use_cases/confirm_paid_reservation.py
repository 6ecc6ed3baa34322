# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Books a slot once Mercado Pago reports an approved payment.
# ============================================================================
"""Confirm Paid Reservation Use Case.

Mercado Pago may deliver the same notification several times. A slot that is
missing or already occupied makes the notification a no-op, and the atomic
commit guarantees a single booking when deliveries race.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from turnos.core.domain import EntityNotFoundException, SlotUnavailableException

from ...domain.value_objects import InsuranceSelection
from ..dto import PaymentNotification, SlotDetailsDTO, WebhookResult

if TYPE_CHECKING:
    from ..ports import IPatientRepository, IPaymentGateway
    from ..services import SlotBookingService

logger = logging.getLogger(__name__)

APPROVED_STATUS = "approved"
PAYMENT_TYPE = "payment"


class ConfirmPaidReservationUseCase:
    """Procesa notificaciones de pago y reserva el turno pagado."""

    def __init__(
        self,
        booking_service: "SlotBookingService",
        patient_repository: "IPatientRepository",
        payment_gateway: "IPaymentGateway",
        default_obra_social: str = "Particular",
    ) -> None:
        self._booking = booking_service
        self._patients = patient_repository
        self._payments = payment_gateway
        self._default_obra_social = default_obra_social

    async def execute(self, notification: PaymentNotification) -> WebhookResult:
        """Process one notification.

        Returns:
            WebhookResult with status "success" or "ignored".

        Raises:
            IntegrationException: Payment or calendar gateway failed.
            OrphanedCalendarEventException: Event created but slot not saved.
        """
        if notification.notification_type != PAYMENT_TYPE:
            logger.info(f"[MP-WEBHOOK] Ignoring notification type: {notification.notification_type}")
            return WebhookResult(status="ignored", reason=f"type:{notification.notification_type}")

        payment_id = notification.payment_id
        if not payment_id:
            logger.warning("[MP-WEBHOOK] Payment notification without payment id")
            return WebhookResult(status="ignored", reason="missing_payment_id")

        payment = await self._payments.get_payment(payment_id)
        status = payment.get("status")
        logger.info(f"[MP-WEBHOOK] Payment {payment_id}: status={status}")

        if status != APPROVED_STATUS:
            return WebhookResult(status="ignored", reason=f"status:{status}", payment_id=payment_id)

        metadata: dict[str, Any] = payment.get("metadata") or {}
        slot_id = metadata.get("slot_id") or payment.get("external_reference")
        if not slot_id:
            logger.warning(f"[MP-WEBHOOK] Payment {payment_id} has no slot reference")
            return WebhookResult(status="ignored", reason="missing_slot_id", payment_id=payment_id)
        slot_id = str(slot_id)

        details = await self._booking_details(slot_id)
        if details is None:
            logger.info(f"[MP-WEBHOOK] Slot {slot_id} missing or already booked, payment {payment_id}")
            return WebhookResult(
                status="ignored", reason="slot_unavailable", payment_id=payment_id, slot_id=slot_id
            )

        payer_email = (payment.get("payer") or {}).get("email")
        patient = await self._patients.find_by_email(payer_email) if payer_email else None
        if patient is None:
            # Pago aprobado sin paciente asociado: requiere reintegro manual
            logger.warning(
                f"[MP-WEBHOOK] No patient for payer email {payer_email!r}, "
                f"payment {payment_id} for slot {slot_id} not applied"
            )
            return WebhookResult(
                status="ignored", reason="patient_not_found", payment_id=payment_id, slot_id=slot_id
            )

        obra_social = InsuranceSelection(name=metadata.get("obra_social") or self._default_obra_social)
        price = self._amount(payment_id, payment.get("transaction_amount"))

        try:
            reservation = await self._booking.book(details, patient, obra_social, price)
        except SlotUnavailableException:
            logger.info(f"[MP-WEBHOOK] Slot {slot_id} booked by a concurrent delivery")
            return WebhookResult(
                status="ignored", reason="slot_unavailable", payment_id=payment_id, slot_id=slot_id
            )

        logger.info(f"[MP-WEBHOOK] Slot {slot_id} booked from payment {payment_id}")
        return WebhookResult(
            status="success",
            payment_id=payment_id,
            slot_id=slot_id,
            data={
                "patient_id": str(patient.id),
                "price_paid": float(reservation.price_paid),
                "calendar_event_id": reservation.calendar_event.id,
            },
        )

    async def _booking_details(self, slot_id: str) -> SlotDetailsDTO | None:
        try:
            return await self._booking.load_bookable(slot_id)
        except (EntityNotFoundException, SlotUnavailableException):
            return None

    @staticmethod
    def _amount(payment_id: str, value: Any) -> Decimal:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError):
            amount = None
        if amount is not None and amount.is_finite():
            return amount.quantize(Decimal("0.01"))
        logger.warning(
            f"[MP-WEBHOOK] Approved payment {payment_id} has invalid transaction_amount {value!r}, "
            "recording price 0.00"
        )
        return Decimal("0.00")
