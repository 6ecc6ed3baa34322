"""Insurance Selection Value Object.

The "obra social" chosen by the patient when booking.
"""

from dataclasses import dataclass
from typing import Any

from turnos.core.domain import ValidationException

DEFAULT_MEMBER_NUMBER = "N/A"


@dataclass(frozen=True)
class InsuranceSelection:
    """Obra social elegida por el paciente."""

    name: str
    member_number: str = DEFAULT_MEMBER_NUMBER

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationException("Obra social inválida", field="obra_social.name")
        object.__setattr__(self, "name", self.name.strip())
        if not self.member_number:
            object.__setattr__(self, "member_number", DEFAULT_MEMBER_NUMBER)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "InsuranceSelection":
        """Build from a stored or submitted mapping.

        Raises:
            ValidationException: If data is not a mapping with a non-empty name.
        """
        if not isinstance(data, dict):
            raise ValidationException("Obra social inválida", field="obra_social")
        return cls(
            name=data.get("name") or "",
            member_number=data.get("member_number") or DEFAULT_MEMBER_NUMBER,
        )

    def to_dict(self) -> dict[str, str]:
        """Convertir a diccionario para persistencia."""
        return {"name": self.name, "member_number": self.member_number}
