"""
Scheduling Repositories

SQLAlchemy implementations of the scheduling ports.
"""

from .patient_repository import SQLAlchemyPatientRepository
from .slot_repository import SQLAlchemySlotRepository

__all__ = ["SQLAlchemyPatientRepository", "SQLAlchemySlotRepository"]
