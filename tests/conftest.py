"""
Shared pytest fixtures for all tests.

Provides in-memory repositories, fake gateways and sample scheduling data.
"""

import os
from datetime import date

import pytest

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from tests.utils.builders import DoctorBuilder, PatientBuilder, SlotBuilder, SpecialtyBuilder  # noqa: E402
from tests.utils.fakes import (  # noqa: E402
    FakeCalendarGateway,
    FakePaymentGateway,
    InMemoryPatientRepository,
    InMemorySlotRepository,
)
from turnos.domains.scheduling.application.services import SlotBookingService  # noqa: E402
from turnos.domains.scheduling.domain.services import CalendarEventBuilder, PricingPolicy  # noqa: E402

# ============================================================================
# DOMAIN DATA FIXTURES
# ============================================================================


@pytest.fixture
def specialty():
    return SpecialtyBuilder().with_id("spec-1").with_name("Cardiología").build()


@pytest.fixture
def doctor(specialty):
    return (
        DoctorBuilder()
        .with_id("doc-1")
        .with_name("Ana", "García")
        .with_specialty(specialty.id)
        .build()
    )


@pytest.fixture
def patient():
    return (
        PatientBuilder()
        .with_id("pat-1")
        .with_name("Juan", "Pérez")
        .with_email("juan@example.com")
        .build()
    )


@pytest.fixture
def available_slot(doctor, specialty):
    return (
        SlotBuilder()
        .with_id("slot-1")
        .for_doctor(doctor.id, specialty.id)
        .at(date(2025, 3, 10), "09:00")
        .build()
    )


# ============================================================================
# FAKE INFRASTRUCTURE FIXTURES
# ============================================================================


@pytest.fixture
def slot_repository(doctor, specialty, patient, available_slot):
    repository = InMemorySlotRepository()
    repository.add_doctor(doctor)
    repository.add_specialty(specialty)
    repository.add_patient(patient)
    repository.seed(available_slot)
    return repository


@pytest.fixture
def patient_repository(patient):
    return InMemoryPatientRepository([patient])


@pytest.fixture
def calendar_gateway():
    return FakeCalendarGateway()


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture
def event_builder():
    return CalendarEventBuilder("America/Argentina/Buenos_Aires", 30)


@pytest.fixture
def reservation_pricing():
    return PricingPolicy({"OSDE": 0.3, "Swiss Medical": 0.25, "IOSFA": 0.2, "Otra": 0.1, "Particular": 0})


@pytest.fixture
def payment_pricing():
    return PricingPolicy({"OSDE": 1, "Swiss Medical": 0.998, "IOSFA": 0.2, "Otra": 0.1, "Particular": 0})


@pytest.fixture
def booking_service(slot_repository, calendar_gateway, event_builder):
    return SlotBookingService(slot_repository, calendar_gateway, event_builder)
