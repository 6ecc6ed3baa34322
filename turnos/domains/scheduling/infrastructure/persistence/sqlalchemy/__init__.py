from .models import DoctorModel, PatientProfileModel, SlotModel, SpecialtyModel, UserModel

__all__ = ["DoctorModel", "PatientProfileModel", "SlotModel", "SpecialtyModel", "UserModel"]
