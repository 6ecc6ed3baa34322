# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Slot persistence port.
# ============================================================================
"""Slot Repository Port.

Defines the storage operations the reservation workflow depends on.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities import Slot
    from ...domain.value_objects import InsuranceSelection
    from ..dto import SlotDetailsDTO


@runtime_checkable
class ISlotRepository(Protocol):
    """Interface for slot storage.

    Implementations: SQLAlchemySlotRepository, InMemorySlotRepository (tests)
    """

    async def find_by_id(self, slot_id: str) -> "Slot | None":
        ...

    async def find_details(self, slot_id: str) -> "SlotDetailsDTO | None":
        """Slot joined with its doctor and specialty."""
        ...

    async def find_by_patient(self, patient_id: str) -> "list[SlotDetailsDTO]":
        """Slots booked by a patient, date descending then time ascending."""
        ...

    async def find_available_by_doctor(self, doctor_id: str) -> "list[Slot]":
        """Available slots of a doctor, date then time ascending."""
        ...

    async def find_all_with_details(self) -> "list[SlotDetailsDTO]":
        ...

    async def exists_for_doctor_at(
        self,
        doctor_id: str,
        slot_date: date,
        slot_time: str,
        exclude_id: str | None = None,
    ) -> bool:
        """Whether another slot of the doctor already uses date + time."""
        ...

    async def add(self, slot: "Slot") -> "Slot":
        ...

    async def update_schedule(self, slot: "Slot") -> "Slot":
        """Persist doctor, specialty, date and time of an existing slot."""
        ...

    async def occupy_if_available(
        self,
        slot_id: str,
        patient_id: str,
        obra_social: "InsuranceSelection",
        price_paid: Decimal,
        calendar_event_id: str,
    ) -> bool:
        """Atomically mark the slot occupied only if it is still available.

        Returns:
            True if this call performed the transition, False if the slot was
            missing or no longer available.
        """
        ...

    async def delete(self, slot_id: str) -> "Slot | None":
        """Delete a slot and return it, or None if it did not exist."""
        ...
