"""
Patient Repository Implementation

SQLAlchemy implementation of IPatientRepository.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from turnos.domains.scheduling.application.ports import IPatientRepository
from turnos.domains.scheduling.domain.entities import Patient, PatientProfile
from turnos.domains.scheduling.infrastructure.persistence.sqlalchemy.models import (
    PatientProfileModel,
    UserModel,
)


class SQLAlchemyPatientRepository(IPatientRepository):
    """Read access to users and patient profiles."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, patient_id: str) -> Patient | None:
        result = await self.session.execute(select(UserModel).where(UserModel.id == patient_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_email(self, email: str) -> Patient | None:
        """Case-insensitive lookup by email."""
        result = await self.session.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_profiles(self, user_ids: list[str]) -> dict[str, PatientProfile]:
        if not user_ids:
            return {}
        result = await self.session.execute(
            select(PatientProfileModel).where(PatientProfileModel.user_id.in_(user_ids))
        )
        return {
            model.user_id: PatientProfile(
                id=model.id,
                user_id=model.user_id,
                document=model.document,
                phone=model.phone,
            )
            for model in result.scalars().all()
        }

    def _to_entity(self, model: UserModel) -> Patient:
        """Convert model to entity."""
        return Patient(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            role=model.role,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
