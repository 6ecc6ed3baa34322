# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Reschedules a slot and its calendar event.
# ============================================================================
"""Update Slot Use Case."""

import logging
from typing import TYPE_CHECKING

from turnos.core.domain import AppointmentConflictException, EntityNotFoundException

from ...domain.entities import Slot, parse_slot_date, parse_slot_time
from ...domain.services import UPDATED_EVENT_SUMMARY, CalendarEventBuilder
from ..dto import UpdateSlotRequest

if TYPE_CHECKING:
    from ..ports import ICalendarGateway, ISlotRepository

logger = logging.getLogger(__name__)


class UpdateSlotUseCase:
    """Reprograma un turno.

    The doctor-level uniqueness check runs before anything is written. When
    the slot has a calendar event it is moved to the new start and end.
    """

    def __init__(
        self,
        slot_repository: "ISlotRepository",
        calendar_gateway: "ICalendarGateway",
        event_builder: CalendarEventBuilder,
    ) -> None:
        self._slots = slot_repository
        self._calendar = calendar_gateway
        self._event_builder = event_builder

    async def execute(self, request: UpdateSlotRequest) -> Slot:
        """
        Raises:
            EntityNotFoundException: Slot not found.
            AppointmentConflictException: Another slot of the doctor uses that date and time.
            IntegrationException: Calendar event could not be updated.
        """
        new_date = parse_slot_date(request.slot_date)
        new_time = parse_slot_time(request.slot_time)

        slot = await self._slots.find_by_id(request.slot_id)
        if slot is None:
            raise EntityNotFoundException("Turno", request.slot_id, "Turno no encontrado")

        doctor_id = request.doctor_id or slot.doctor_id
        if await self._slots.exists_for_doctor_at(doctor_id, new_date, new_time, exclude_id=request.slot_id):
            raise AppointmentConflictException(
                doctor_id=doctor_id,
                time_slot=f"{new_date.isoformat()} {new_time}",
                message="Ya existe un turno para ese médico en esa fecha y hora",
            )

        slot.doctor_id = doctor_id
        if request.specialty_id:
            slot.specialty_id = request.specialty_id
        slot.reschedule(new_date, new_time)
        slot = await self._slots.update_schedule(slot)
        logger.info(f"Slot {slot.id} rescheduled to {new_date} {new_time}")

        if slot.has_calendar_event():
            window = self._event_builder.window(new_date, new_time)
            await self._calendar.update_event(
                event_id=str(slot.calendar_event_id),
                summary=UPDATED_EVENT_SUMMARY,
                start=window.start,
                end=window.end,
                time_zone=window.time_zone,
            )
            logger.info(f"[CALENDAR] Event {slot.calendar_event_id} moved for slot {slot.id}")

        return slot
