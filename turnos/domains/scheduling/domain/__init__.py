"""
Scheduling Domain Layer

Components:
- Entities: Slot (aggregate root), Patient, PatientProfile, Doctor, Specialty
- Value Objects: SlotStatus, InsuranceSelection
- Domain Services: PricingPolicy, CalendarEventBuilder
"""
