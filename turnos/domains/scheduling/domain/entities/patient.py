"""Patient Entity.

A user with the patient role, plus the optional clinical profile ("ficha")
that carries demographic data.
"""

from dataclasses import dataclass

from turnos.core.domain import Entity

PATIENT_ROLE = "patient"


@dataclass
class Patient(Entity[str]):
    """Paciente del sistema de turnos."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    role: str = PATIENT_ROLE

    @property
    def full_name(self) -> str:
        """Nombre completo para mostrar."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class PatientProfile(Entity[str]):
    """Ficha del paciente con datos demográficos."""

    user_id: str = ""
    document: str | None = None  # DNI
    phone: str | None = None
