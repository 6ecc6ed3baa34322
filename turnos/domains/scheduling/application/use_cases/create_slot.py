# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Publishes a new available slot.
# ============================================================================
"""Create Slot Use Case."""

import logging
from typing import TYPE_CHECKING

from turnos.core.domain import AppointmentConflictException

from ...domain.entities import Slot
from ..dto import CreateSlotRequest

if TYPE_CHECKING:
    from ..ports import ISlotRepository

logger = logging.getLogger(__name__)


class CreateSlotUseCase:
    """Publica un turno disponible para un médico."""

    def __init__(self, slot_repository: "ISlotRepository") -> None:
        self._slots = slot_repository

    async def execute(self, request: CreateSlotRequest) -> Slot:
        """
        Raises:
            ValidationException: Invalid date or time.
            AppointmentConflictException: The doctor already has a slot at that date and time.
        """
        slot = Slot.create(
            doctor_id=request.doctor_id,
            specialty_id=request.specialty_id,
            slot_date=request.slot_date,
            slot_time=request.slot_time,
        )
        if await self._slots.exists_for_doctor_at(slot.doctor_id, slot.slot_date, slot.slot_time):
            raise AppointmentConflictException(
                doctor_id=slot.doctor_id,
                time_slot=f"{slot.slot_date.isoformat()} {slot.slot_time}",
                message="Ya existe un turno para ese médico en esa fecha y hora",
            )
        slot = await self._slots.add(slot)
        logger.info(f"Slot {slot.id} created for doctor {slot.doctor_id} at {slot.slot_date} {slot.slot_time}")
        return slot
