# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Shared booking steps for every reservation entry point.
# ============================================================================
"""Slot Booking Service.

Every reservation path (direct, priced, payment-confirmed) converges here:
the slot is validated, the calendar event is created and the slot is
committed with a single conditional update.
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from turnos.core.domain import (
    EntityNotFoundException,
    IntegrationException,
    OrphanedCalendarEventException,
    SlotUnavailableException,
)

from ...domain.entities import Patient
from ...domain.services import CalendarEventBuilder
from ...domain.value_objects import InsuranceSelection
from ..dto import ReservationResult, SlotDetailsDTO

if TYPE_CHECKING:
    from ..ports import ICalendarGateway, ISlotRepository

logger = logging.getLogger(__name__)


class SlotBookingService:
    """Books a slot for a patient and mirrors it in the calendar."""

    def __init__(
        self,
        slot_repository: "ISlotRepository",
        calendar_gateway: "ICalendarGateway",
        event_builder: CalendarEventBuilder,
    ) -> None:
        self._slots = slot_repository
        self._calendar = calendar_gateway
        self._event_builder = event_builder

    async def load_bookable(self, slot_id: str) -> SlotDetailsDTO:
        """Load a slot with its doctor and specialty and check it is available.

        Raises:
            EntityNotFoundException: Slot does not exist.
            SlotUnavailableException: Slot is already occupied.
        """
        details = await self._slots.find_details(slot_id)
        if details is None:
            raise EntityNotFoundException("Turno", slot_id, "Turno no encontrado")
        details.slot.ensure_bookable()
        return details

    async def book(
        self,
        details: SlotDetailsDTO,
        patient: Patient,
        obra_social: InsuranceSelection,
        price: Decimal,
    ) -> ReservationResult:
        """Create the calendar event and commit the slot.

        Raises:
            IntegrationException: Calendar event could not be created; nothing was written.
            SlotUnavailableException: Another booking committed first.
            OrphanedCalendarEventException: Event created but the slot could not be saved.
        """
        slot = details.slot
        slot_id = str(slot.id)
        if details.doctor is None:
            raise EntityNotFoundException("Médico", slot.doctor_id)
        if details.specialty is None:
            raise EntityNotFoundException("Especialidad", slot.specialty_id)

        payload = self._event_builder.build(
            slot_date=slot.slot_date,
            slot_time=slot.slot_time,
            doctor=details.doctor,
            specialty=details.specialty,
            patient=patient,
            insurance_name=obra_social.name,
        )
        event = await self._calendar.create_event(
            summary=payload.summary,
            description=payload.description,
            start=payload.start,
            end=payload.end,
            attendees=payload.attendees,
            time_zone=payload.time_zone,
        )
        logger.info(f"[CALENDAR] Event {event.id} created for slot {slot_id}")

        try:
            committed = await self._slots.occupy_if_available(
                slot_id=slot_id,
                patient_id=str(patient.id),
                obra_social=obra_social,
                price_paid=price,
                calendar_event_id=event.id,
            )
        except Exception as e:
            logger.error(
                f"[RESERVA] Slot {slot_id} could not be saved after creating event {event.id}: {e}",
                exc_info=True,
            )
            raise OrphanedCalendarEventException(slot_id, event.id, e) from e

        if not committed:
            logger.warning(f"[RESERVA] Slot {slot_id} was booked concurrently, removing event {event.id}")
            await self._discard_event(slot_id, event.id)
            raise SlotUnavailableException(slot_id)

        slot.occupy(
            patient_id=str(patient.id),
            obra_social=obra_social,
            price_paid=price,
            calendar_event_id=event.id,
        )
        logger.info(f"[RESERVA] Slot {slot_id} booked by patient {patient.id} (price {price})")
        return ReservationResult(slot=slot, calendar_event=event, price_paid=price)

    async def _discard_event(self, slot_id: str, event_id: str) -> None:
        try:
            await self._calendar.delete_event(event_id)
        except IntegrationException as e:
            logger.error(f"[CALENDAR] Orphaned event {event_id} for slot {slot_id}: {e}")
