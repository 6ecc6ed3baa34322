# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Ports (interfaces) for storage and external systems.
# ============================================================================
"""Scheduling Application Ports.

- ISlotRepository: slot storage with the atomic booking transition
- IPatientRepository: patient and profile lookup
- ICalendarGateway: external calendar
- IPaymentGateway: payment provider
"""

from .calendar_gateway import CalendarEvent, ICalendarGateway
from .patient_repository import IPatientRepository
from .payment_gateway import IPaymentGateway
from .slot_repository import ISlotRepository

__all__ = [
    "CalendarEvent",
    "ICalendarGateway",
    "IPatientRepository",
    "IPaymentGateway",
    "ISlotRepository",
]
