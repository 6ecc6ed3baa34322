"""Doctor and Specialty Entities."""

from dataclasses import dataclass

from turnos.core.domain import Entity


@dataclass
class Specialty(Entity[str]):
    """Especialidad médica."""

    name: str = ""


@dataclass
class Doctor(Entity[str]):
    """Médico que atiende los turnos."""

    first_name: str = ""
    last_name: str = ""
    license_number: str | None = None
    specialty_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
