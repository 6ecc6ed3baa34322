# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Patient lookup port.
# ============================================================================
"""Patient Repository Port."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities import Patient, PatientProfile


@runtime_checkable
class IPatientRepository(Protocol):
    """Read access to patients and their optional profile (ficha)."""

    async def find_by_id(self, patient_id: str) -> "Patient | None":
        ...

    async def find_by_email(self, email: str) -> "Patient | None":
        """Find a patient by email, used to correlate payment payers."""
        ...

    async def find_profiles(self, user_ids: list[str]) -> "dict[str, PatientProfile]":
        """Profiles keyed by user id; users without a profile are absent."""
        ...
