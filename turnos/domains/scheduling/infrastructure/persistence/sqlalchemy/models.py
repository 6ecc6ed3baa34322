"""
Scheduling SQLAlchemy Models

Database models for slots and the catalog data they reference.
"""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from turnos.database.base import Base, TimestampMixin


class SpecialtyModel(Base, TimestampMixin):
    """Especialidad médica."""

    __tablename__ = "specialties"

    id = Column(String(36), primary_key=True)
    name = Column(String(100), unique=True, nullable=False)


class DoctorModel(Base, TimestampMixin):
    """Médico."""

    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    license_number = Column(String(50), nullable=True)
    specialty_id = Column(String(36), ForeignKey("specialties.id"), nullable=True)

    specialty = relationship("SpecialtyModel")


class UserModel(Base, TimestampMixin):
    """Usuario; los pacientes tienen rol 'patient'."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(20), nullable=False, default="patient")


class PatientProfileModel(Base, TimestampMixin):
    """Ficha del paciente."""

    __tablename__ = "patient_profiles"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    document = Column(String(20), nullable=True)
    phone = Column(String(30), nullable=True)


class SlotModel(Base, TimestampMixin):
    """Turno médico."""

    __tablename__ = "slots"
    __table_args__ = (UniqueConstraint("doctor_id", "slot_date", "slot_time", name="uq_slots_doctor_date_time"),)

    id = Column(String(36), primary_key=True)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    specialty_id = Column(String(36), ForeignKey("specialties.id"), nullable=False)
    slot_date = Column(Date, nullable=False)
    slot_time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), nullable=False, default="available", index=True)

    # Reserva
    patient_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    obra_social = Column(JSON, nullable=True)
    price_paid = Column(Numeric(12, 2), nullable=False, default=0)
    calendar_event_id = Column(String(255), nullable=True)

    doctor = relationship("DoctorModel")
    specialty = relationship("SpecialtyModel")
    patient = relationship("UserModel")
