"""
Slot Repository Implementation

SQLAlchemy implementation of ISlotRepository.
"""

import logging
from datetime import UTC, date, datetime
from decimal import Decimal

from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.domain import AppointmentConflictException, EntityNotFoundException, generate_uuid_str
from turnos.domains.scheduling.application.dto import PatientSummary, SlotDetailsDTO
from turnos.domains.scheduling.application.ports import ISlotRepository
from turnos.domains.scheduling.domain.entities import Doctor, Slot, Specialty
from turnos.domains.scheduling.domain.value_objects import InsuranceSelection, SlotStatus
from turnos.domains.scheduling.infrastructure.persistence.sqlalchemy.models import (
    DoctorModel,
    SlotModel,
    SpecialtyModel,
    UserModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemySlotRepository(ISlotRepository):
    """
    SQLAlchemy implementation of slot repository.

    The booking transition is a single conditional UPDATE so concurrent
    callers cannot both occupy the same slot.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, slot_id: str) -> Slot | None:
        """Find slot by ID."""
        result = await self.session.execute(select(SlotModel).where(SlotModel.id == slot_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_details(self, slot_id: str) -> SlotDetailsDTO | None:
        """Find slot with doctor and specialty."""
        query = self._details_query().where(SlotModel.id == slot_id)
        result = await self.session.execute(query)
        row = result.one_or_none()
        return self._to_details(*row) if row else None

    async def find_by_patient(self, patient_id: str) -> list[SlotDetailsDTO]:
        """Find slots booked by a patient."""
        query = (
            self._details_query()
            .where(SlotModel.patient_id == patient_id)
            .order_by(SlotModel.slot_date.desc(), SlotModel.slot_time.asc())
        )
        result = await self.session.execute(query)
        return [self._to_details(*row) for row in result.all()]

    async def find_available_by_doctor(self, doctor_id: str) -> list[Slot]:
        """Find available slots for a doctor."""
        result = await self.session.execute(
            select(SlotModel)
            .where(
                and_(
                    SlotModel.doctor_id == doctor_id,
                    SlotModel.status == SlotStatus.AVAILABLE.value,
                )
            )
            .order_by(SlotModel.slot_date, SlotModel.slot_time)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_all_with_details(self) -> list[SlotDetailsDTO]:
        """Find every slot with doctor, specialty and patient."""
        query = (
            select(SlotModel, DoctorModel, SpecialtyModel, UserModel)
            .outerjoin(DoctorModel, SlotModel.doctor_id == DoctorModel.id)
            .outerjoin(SpecialtyModel, SlotModel.specialty_id == SpecialtyModel.id)
            .outerjoin(UserModel, SlotModel.patient_id == UserModel.id)
            .order_by(SlotModel.slot_date, SlotModel.slot_time)
        )
        result = await self.session.execute(query)
        return [
            self._to_details(slot, doctor, specialty, self._to_patient_summary(user))
            for slot, doctor, specialty, user in result.all()
        ]

    async def exists_for_doctor_at(
        self,
        doctor_id: str,
        slot_date: date,
        slot_time: str,
        exclude_id: str | None = None,
    ) -> bool:
        """Check if the doctor already has a slot at date and time."""
        query = select(SlotModel.id).where(
            and_(
                SlotModel.doctor_id == doctor_id,
                SlotModel.slot_date == slot_date,
                SlotModel.slot_time == slot_time,
            )
        )
        if exclude_id:
            query = query.where(SlotModel.id != exclude_id)

        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def add(self, slot: Slot) -> Slot:
        """Insert a new slot."""
        if slot.id is None:
            slot.id = generate_uuid_str()
        self.session.add(self._to_model(slot))
        await self._commit_schedule(slot)
        return slot

    async def update_schedule(self, slot: Slot) -> Slot:
        """Persist doctor, specialty, date and time."""
        result = await self.session.execute(
            update(SlotModel)
            .where(SlotModel.id == slot.id)
            .values(
                doctor_id=slot.doctor_id,
                specialty_id=slot.specialty_id,
                slot_date=slot.slot_date,
                slot_time=slot.slot_time,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.session.rollback()
            raise EntityNotFoundException("Turno", slot.id, "Turno no encontrado")
        await self._commit_schedule(slot)
        return slot

    async def occupy_if_available(
        self,
        slot_id: str,
        patient_id: str,
        obra_social: InsuranceSelection,
        price_paid: Decimal,
        calendar_event_id: str,
    ) -> bool:
        """Atomically move a slot from available to occupied."""
        result = await self.session.execute(
            update(SlotModel)
            .where(
                and_(
                    SlotModel.id == slot_id,
                    SlotModel.status == SlotStatus.AVAILABLE.value,
                )
            )
            .values(
                status=SlotStatus.OCCUPIED.value,
                patient_id=patient_id,
                obra_social=obra_social.to_dict(),
                price_paid=price_paid,
                calendar_event_id=calendar_event_id,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        occupied = result.rowcount == 1
        if not occupied:
            logger.info(f"Slot {slot_id} was not available at commit time")
        return occupied

    async def delete(self, slot_id: str) -> Slot | None:
        """Delete slot and return its last state."""
        result = await self.session.execute(select(SlotModel).where(SlotModel.id == slot_id))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        slot = self._to_entity(model)
        await self.session.delete(model)
        await self.session.commit()
        return slot

    async def _commit_schedule(self, slot: Slot) -> None:
        """Commit a schedule write; the unique constraint backs the conflict check."""
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise AppointmentConflictException(
                doctor_id=slot.doctor_id,
                time_slot=f"{slot.slot_date} {slot.slot_time}",
                message="Ya existe un turno para ese médico en esa fecha y hora",
            ) from e

    @staticmethod
    def _details_query():
        return (
            select(SlotModel, DoctorModel, SpecialtyModel)
            .outerjoin(DoctorModel, SlotModel.doctor_id == DoctorModel.id)
            .outerjoin(SpecialtyModel, SlotModel.specialty_id == SpecialtyModel.id)
        )

    def _to_details(
        self,
        slot: SlotModel,
        doctor: DoctorModel | None,
        specialty: SpecialtyModel | None,
        patient: PatientSummary | None = None,
    ) -> SlotDetailsDTO:
        return SlotDetailsDTO(
            slot=self._to_entity(slot),
            doctor=self._to_doctor(doctor) if doctor else None,
            specialty=Specialty(id=specialty.id, name=specialty.name) if specialty else None,
            patient=patient,
        )

    @staticmethod
    def _to_doctor(model: DoctorModel) -> Doctor:
        return Doctor(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            license_number=model.license_number,
            specialty_id=model.specialty_id,
        )

    @staticmethod
    def _to_patient_summary(model: UserModel | None) -> PatientSummary | None:
        if model is None:
            return None
        return PatientSummary(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            role=model.role,
        )

    def _to_entity(self, model: SlotModel) -> Slot:
        """Convert model to entity."""
        return Slot(
            id=model.id,
            doctor_id=model.doctor_id,
            specialty_id=model.specialty_id,
            slot_date=model.slot_date,
            slot_time=model.slot_time,
            status=SlotStatus(model.status),
            patient_id=model.patient_id,
            obra_social=InsuranceSelection.from_dict(model.obra_social) if model.obra_social else None,
            price_paid=Decimal(str(model.price_paid or 0)),
            calendar_event_id=model.calendar_event_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, slot: Slot) -> SlotModel:
        """Convert entity to model."""
        return SlotModel(
            id=slot.id,
            doctor_id=slot.doctor_id,
            specialty_id=slot.specialty_id,
            slot_date=slot.slot_date,
            slot_time=slot.slot_time,
            status=slot.status.value,
            patient_id=slot.patient_id,
            obra_social=slot.obra_social.to_dict() if slot.obra_social else None,
            price_paid=slot.price_paid,
            calendar_event_id=slot.calendar_event_id,
            created_at=slot.created_at,
            updated_at=slot.updated_at,
        )
