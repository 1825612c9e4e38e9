# Models package (re-export table models for stable imports)
from .clinic.patient import PatientRecord
from .clinic.appointment import AppointmentRecord

__all__ = [
    "PatientRecord",
    "AppointmentRecord",
]
