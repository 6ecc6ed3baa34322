"""Test utilities and helpers."""

from tests.utils.builders import DoctorBuilder, PatientBuilder, SlotBuilder, SpecialtyBuilder
from tests.utils.fakes import (
    FakeCalendarGateway,
    FakePaymentGateway,
    InMemoryPatientRepository,
    InMemorySlotRepository,
)

__all__ = [
    # Builders
    "SlotBuilder",
    "DoctorBuilder",
    "SpecialtyBuilder",
    "PatientBuilder",
    # Fakes
    "InMemorySlotRepository",
    "InMemoryPatientRepository",
    "FakeCalendarGateway",
    "FakePaymentGateway",
]
