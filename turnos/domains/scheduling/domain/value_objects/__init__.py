# Domain Value Objects
from .insurance import DEFAULT_MEMBER_NUMBER, InsuranceSelection
from .slot_status import SlotStatus

__all__ = ["DEFAULT_MEMBER_NUMBER", "InsuranceSelection", "SlotStatus"]
