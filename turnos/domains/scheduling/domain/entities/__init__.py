# Domain Entities
from .doctor import Doctor, Specialty
from .patient import PATIENT_ROLE, Patient, PatientProfile
from .slot import Slot, parse_slot_date, parse_slot_time

__all__ = [
    "Doctor",
    "PATIENT_ROLE",
    "Patient",
    "PatientProfile",
    "Slot",
    "Specialty",
    "parse_slot_date",
    "parse_slot_time",
]
