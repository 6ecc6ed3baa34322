# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Deletes a slot and its calendar event.
# ============================================================================
"""Delete Slot Use Case."""

import logging
from typing import TYPE_CHECKING

from turnos.core.domain import EntityNotFoundException, IntegrationException

from ..dto import DeleteSlotResult

if TYPE_CHECKING:
    from ..ports import ICalendarGateway, ISlotRepository

logger = logging.getLogger(__name__)


class DeleteSlotUseCase:
    """Elimina un turno y, si corresponde, su evento de calendario."""

    def __init__(self, slot_repository: "ISlotRepository", calendar_gateway: "ICalendarGateway") -> None:
        self._slots = slot_repository
        self._calendar = calendar_gateway

    async def execute(self, slot_id: str) -> DeleteSlotResult:
        """
        Raises:
            EntityNotFoundException: Slot not found.
        """
        slot = await self._slots.delete(slot_id)
        if slot is None:
            raise EntityNotFoundException("Turno", slot_id, "Turno no encontrado")
        logger.info(f"Slot {slot_id} deleted")

        if not slot.has_calendar_event():
            return DeleteSlotResult(slot_id=slot_id)

        event_id = str(slot.calendar_event_id)
        try:
            await self._calendar.delete_event(event_id)
        except IntegrationException as e:
            logger.error(f"[CALENDAR] Could not delete event {event_id} of deleted slot {slot_id}: {e}")
            return DeleteSlotResult(slot_id=slot_id, had_calendar_event=True, calendar_event_deleted=False)

        logger.info(f"[CALENDAR] Event {event_id} deleted")
        return DeleteSlotResult(slot_id=slot_id, had_calendar_event=True, calendar_event_deleted=True)
