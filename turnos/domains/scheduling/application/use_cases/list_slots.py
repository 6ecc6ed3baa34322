# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Read-side use cases for slots.
# ============================================================================
"""List Slots Use Cases."""

import dataclasses
from typing import TYPE_CHECKING

from ...domain.entities import Slot
from ..dto import SlotDetailsDTO

if TYPE_CHECKING:
    from ..ports import IPatientRepository, ISlotRepository


class ListPatientSlotsUseCase:
    """Turnos de un paciente, fecha descendente y hora ascendente."""

    def __init__(self, slot_repository: "ISlotRepository") -> None:
        self._slots = slot_repository

    async def execute(self, patient_id: str) -> list[SlotDetailsDTO]:
        return await self._slots.find_by_patient(patient_id)


class ListAvailableSlotsUseCase:
    """Turnos disponibles de un médico."""

    def __init__(self, slot_repository: "ISlotRepository") -> None:
        self._slots = slot_repository

    async def execute(self, doctor_id: str) -> list[Slot]:
        return await self._slots.find_available_by_doctor(doctor_id)


class ListAllSlotsUseCase:
    """Listado completo para administración.

    Patients are enriched with document and phone from their profile; both
    stay None when the patient has no profile.
    """

    def __init__(self, slot_repository: "ISlotRepository", patient_repository: "IPatientRepository") -> None:
        self._slots = slot_repository
        self._patients = patient_repository

    async def execute(self) -> list[SlotDetailsDTO]:
        slots = await self._slots.find_all_with_details()
        patient_ids = sorted({item.patient.id for item in slots if item.patient is not None})
        if not patient_ids:
            return slots

        profiles = await self._patients.find_profiles(patient_ids)
        enriched: list[SlotDetailsDTO] = []
        for item in slots:
            profile = profiles.get(item.patient.id) if item.patient else None
            if profile is None:
                enriched.append(item)
                continue
            patient = dataclasses.replace(item.patient, document=profile.document, phone=profile.phone)
            enriched.append(dataclasses.replace(item, patient=patient))
        return enriched
