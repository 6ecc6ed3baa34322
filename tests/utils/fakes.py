"""
In-memory fakes for scheduling ports.

The slot repository keeps the same atomicity as the SQL conditional update:
``occupy_if_available`` checks and writes without awaiting in between.
"""

import asyncio
import dataclasses
from datetime import date
from decimal import Decimal
from typing import Any

from turnos.clients import GoogleCalendarError, MercadoPagoError, MercadoPagoNotFoundError
from turnos.core.domain import AppointmentConflictException, EntityNotFoundException
from turnos.domains.scheduling.application.dto import PatientSummary, SlotDetailsDTO
from turnos.domains.scheduling.application.ports import CalendarEvent
from turnos.domains.scheduling.domain.entities import Doctor, Patient, PatientProfile, Slot, Specialty
from turnos.domains.scheduling.domain.value_objects import InsuranceSelection, SlotStatus


class InMemorySlotRepository:
    """Slot repository backed by dicts."""

    def __init__(self):
        self.slots: dict[str, Slot] = {}
        self.doctors: dict[str, Doctor] = {}
        self.specialties: dict[str, Specialty] = {}
        self.patients: dict[str, Patient] = {}
        self.fail_on_occupy: Exception | None = None
        self._sequence = 0

    # Seeding helpers

    def seed(self, slot: Slot) -> Slot:
        self.slots[str(slot.id)] = dataclasses.replace(slot)
        return slot

    def add_doctor(self, doctor: Doctor) -> None:
        self.doctors[str(doctor.id)] = doctor

    def add_specialty(self, specialty: Specialty) -> None:
        self.specialties[str(specialty.id)] = specialty

    def add_patient(self, patient: Patient) -> None:
        self.patients[str(patient.id)] = patient

    def stored(self, slot_id: str) -> Slot:
        return self.slots[slot_id]

    # ISlotRepository

    async def find_by_id(self, slot_id: str) -> Slot | None:
        slot = self.slots.get(slot_id)
        return dataclasses.replace(slot) if slot else None

    async def find_details(self, slot_id: str) -> SlotDetailsDTO | None:
        slot = self.slots.get(slot_id)
        return self._details(slot) if slot else None

    async def find_by_patient(self, patient_id: str) -> list[SlotDetailsDTO]:
        owned = [slot for slot in self.slots.values() if slot.patient_id == patient_id]
        owned.sort(key=lambda slot: slot.slot_time)
        owned.sort(key=lambda slot: slot.slot_date, reverse=True)
        return [self._details(slot) for slot in owned]

    async def find_available_by_doctor(self, doctor_id: str) -> list[Slot]:
        return [
            dataclasses.replace(slot)
            for slot in self.slots.values()
            if slot.doctor_id == doctor_id and slot.is_available()
        ]

    async def find_all_with_details(self) -> list[SlotDetailsDTO]:
        return [self._details(slot) for slot in self.slots.values()]

    async def exists_for_doctor_at(
        self,
        doctor_id: str,
        slot_date: date,
        slot_time: str,
        exclude_id: str | None = None,
    ) -> bool:
        return any(
            slot.doctor_id == doctor_id
            and slot.slot_date == slot_date
            and slot.slot_time == slot_time
            and slot.id != exclude_id
            for slot in self.slots.values()
        )

    async def add(self, slot: Slot) -> Slot:
        if await self.exists_for_doctor_at(slot.doctor_id, slot.slot_date, slot.slot_time):
            raise AppointmentConflictException(doctor_id=slot.doctor_id)
        if slot.id is None:
            self._sequence += 1
            slot.id = f"slot-new-{self._sequence}"
        self.slots[slot.id] = dataclasses.replace(slot)
        return slot

    async def update_schedule(self, slot: Slot) -> Slot:
        stored = self.slots.get(str(slot.id))
        if stored is None:
            raise EntityNotFoundException("Turno", slot.id)
        stored.doctor_id = slot.doctor_id
        stored.specialty_id = slot.specialty_id
        stored.slot_date = slot.slot_date
        stored.slot_time = slot.slot_time
        return dataclasses.replace(stored)

    async def occupy_if_available(
        self,
        slot_id: str,
        patient_id: str,
        obra_social: InsuranceSelection,
        price_paid: Decimal,
        calendar_event_id: str,
    ) -> bool:
        if self.fail_on_occupy is not None:
            raise self.fail_on_occupy
        stored = self.slots.get(slot_id)
        if stored is None or not stored.is_available():
            return False
        stored.status = SlotStatus.OCCUPIED
        stored.patient_id = patient_id
        stored.obra_social = obra_social
        stored.price_paid = price_paid
        stored.calendar_event_id = calendar_event_id
        return True

    async def delete(self, slot_id: str) -> Slot | None:
        return self.slots.pop(slot_id, None)

    def _details(self, slot: Slot) -> SlotDetailsDTO:
        patient = self.patients.get(slot.patient_id) if slot.patient_id else None
        return SlotDetailsDTO(
            slot=dataclasses.replace(slot),
            doctor=self.doctors.get(slot.doctor_id),
            specialty=self.specialties.get(slot.specialty_id),
            patient=(
                PatientSummary(
                    id=str(patient.id),
                    first_name=patient.first_name,
                    last_name=patient.last_name,
                    email=patient.email,
                    role=patient.role,
                )
                if patient
                else None
            ),
        )


class InMemoryPatientRepository:
    """Patient repository backed by a dict."""

    def __init__(self, patients: list[Patient] | None = None, profiles: list[PatientProfile] | None = None):
        self.patients = {str(p.id): p for p in patients or []}
        self.profiles = {p.user_id: p for p in profiles or []}

    async def find_by_id(self, patient_id: str) -> Patient | None:
        return self.patients.get(patient_id)

    async def find_by_email(self, email: str) -> Patient | None:
        return next((p for p in self.patients.values() if p.email.lower() == email.lower()), None)

    async def find_profiles(self, user_ids: list[str]) -> dict[str, PatientProfile]:
        return {user_id: self.profiles[user_id] for user_id in user_ids if user_id in self.profiles}


class FakeCalendarGateway:
    """Records calendar calls; ``create_event`` yields to the loop once."""

    def __init__(self):
        self.events: dict[str, dict[str, Any]] = {}
        self.created: list[str] = []
        self.updated: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self.fail_on_create = False
        self.fail_on_update = False
        self.fail_on_delete = False

    async def create_event(
        self,
        summary: str,
        description: str,
        start: str,
        end: str,
        attendees: list[str],
        time_zone: str,
    ) -> CalendarEvent:
        await asyncio.sleep(0)
        if self.fail_on_create:
            raise GoogleCalendarError("create failed")
        event_id = f"evt-{len(self.created) + 1}"
        self.events[event_id] = {
            "summary": summary,
            "description": description,
            "start": start,
            "end": end,
            "attendees": attendees,
            "time_zone": time_zone,
        }
        self.created.append(event_id)
        return CalendarEvent(id=event_id, html_link=f"https://calendar.test/{event_id}")

    async def update_event(self, event_id: str, summary: str, start: str, end: str, time_zone: str) -> None:
        if self.fail_on_update:
            raise GoogleCalendarError("update failed")
        self.updated.append(
            {"event_id": event_id, "summary": summary, "start": start, "end": end, "time_zone": time_zone}
        )

    async def delete_event(self, event_id: str) -> None:
        if self.fail_on_delete:
            raise GoogleCalendarError("delete failed")
        self.events.pop(event_id, None)
        self.deleted.append(event_id)


class FakePaymentGateway:
    """Serves canned payments and records created preferences."""

    def __init__(self):
        self.payments: dict[str, dict[str, Any]] = {}
        self.preferences: list[dict[str, Any]] = []
        self.lookups: list[str] = []
        self.fail_on_get: MercadoPagoError | None = None

    def add_payment(
        self,
        payment_id: str,
        status: str = "approved",
        slot_id: str | None = "slot-1",
        payer_email: str | None = "juan@example.com",
        amount: float = 3500.0,
        obra_social: str | None = "OSDE",
        external_reference: str | None = None,
    ) -> None:
        metadata: dict[str, Any] = {}
        if slot_id:
            metadata["slot_id"] = slot_id
        if obra_social:
            metadata["obra_social"] = obra_social
        self.payments[payment_id] = {
            "id": payment_id,
            "status": status,
            "transaction_amount": amount,
            "external_reference": external_reference,
            "metadata": metadata,
            "payer": {"email": payer_email},
        }

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
        preference_id = f"pref-{len(self.preferences) + 1}"
        self.preferences.append(
            {
                "title": title,
                "description": description,
                "unit_price": unit_price,
                "payer_email": payer_email,
                "external_reference": external_reference,
                "metadata": metadata,
                "back_urls": back_urls,
                "notification_url": notification_url,
            }
        )
        return {
            "preference_id": preference_id,
            "init_point": f"https://mp.test/checkout/{preference_id}",
            "sandbox_init_point": f"https://sandbox.mp.test/checkout/{preference_id}",
        }

    async def get_payment(self, payment_id: str) -> dict[str, Any]:
        self.lookups.append(payment_id)
        if self.fail_on_get is not None:
            raise self.fail_on_get
        if payment_id not in self.payments:
            raise MercadoPagoNotFoundError(f"Payment {payment_id} not found")
        return self.payments[payment_id]
