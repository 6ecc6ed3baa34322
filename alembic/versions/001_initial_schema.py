"""Initial schema: specialties, doctors, users, patient profiles and slots

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-03-01

Creates:
- specialties: Medical specialties
- doctors: Doctors attending slots
- users: Application users (patients, doctors, admins)
- patient_profiles: Optional patient demographic data (DNI, phone)
- slots: Bookable appointment slots
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "specialties",
        sa.Column("id", sa.String(36), primary_key=True, comment="UUID"),
        sa.Column("name", sa.String(100), nullable=False, unique=True, comment="Specialty name"),
        *_timestamps(),
    )

    op.create_table(
        "doctors",
        sa.Column("id", sa.String(36), primary_key=True, comment="UUID"),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("license_number", sa.String(50), nullable=True, comment="Matrícula"),
        sa.Column(
            "specialty_id",
            sa.String(36),
            sa.ForeignKey("specialties.id"),
            nullable=True,
            comment="Main specialty",
        ),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True, comment="UUID"),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, comment="Login and payer email"),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default="patient",
            comment="patient, doctor or admin",
        ),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "patient_profiles",
        sa.Column("id", sa.String(36), primary_key=True, comment="UUID"),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
            comment="Owning user",
        ),
        sa.Column("document", sa.String(20), nullable=True, comment="DNI"),
        sa.Column("phone", sa.String(30), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "slots",
        sa.Column("id", sa.String(36), primary_key=True, comment="UUID"),
        sa.Column("doctor_id", sa.String(36), sa.ForeignKey("doctors.id"), nullable=False),
        sa.Column("specialty_id", sa.String(36), sa.ForeignKey("specialties.id"), nullable=False),
        sa.Column("slot_date", sa.Date(), nullable=False, comment="Civil date, no time zone"),
        sa.Column("slot_time", sa.String(5), nullable=False, comment="HH:MM"),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default="available",
            comment="available or occupied",
        ),
        sa.Column("patient_id", sa.String(36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("obra_social", sa.JSON(), nullable=True, comment="{name, member_number}"),
        sa.Column("price_paid", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("calendar_event_id", sa.String(255), nullable=True, comment="Google Calendar event id"),
        *_timestamps(),
        sa.UniqueConstraint("doctor_id", "slot_date", "slot_time", name="uq_slots_doctor_date_time"),
    )
    op.create_index("ix_slots_doctor_id", "slots", ["doctor_id"])
    op.create_index("ix_slots_patient_id", "slots", ["patient_id"])
    op.create_index("ix_slots_status", "slots", ["status"])


def downgrade() -> None:
    op.drop_index("ix_slots_status", table_name="slots")
    op.drop_index("ix_slots_patient_id", table_name="slots")
    op.drop_index("ix_slots_doctor_id", table_name="slots")
    op.drop_table("slots")
    op.drop_table("patient_profiles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("doctors")
    op.drop_table("specialties")
