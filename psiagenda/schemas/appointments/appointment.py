# psiagenda/schemas/appointments/appointment.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from ...application.entities import Appointment, AppointmentStatus, DeleteMode, PatientType, Recurrence

class AppointmentBase(BaseModel):
    patient_id: Optional[str] = None
    patient_name: Optional[str] = Field(default=None, max_length=200)
    date: date
    start_time: str = Field(pattern=r"^\d{2}:\d{2}$")  # HH:MM
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    notes: str = ""
    recurrence: Recurrence = Recurrence.NONE
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

class AppointmentCreate(AppointmentBase):
    pass

class AppointmentUpdate(AppointmentBase):
    series_id: Optional[str] = None

class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus

class AppointmentResponse(BaseModel):
    id: str
    series_id: Optional[str] = None
    patient_id: str
    patient_name: str
    date: date
    start_time: str
    duration_minutes: int
    notes: str
    recurrence: Recurrence
    status: AppointmentStatus
    patient_type: PatientType

    @classmethod
    def from_entity(cls, a: Appointment) -> "AppointmentResponse":
        return cls(
            id=a.id,
            series_id=a.series_id,
            patient_id=a.patient_id,
            patient_name=a.patient_name,
            date=a.date,
            start_time=a.start_time,
            duration_minutes=a.duration_minutes,
            notes=a.notes,
            recurrence=a.recurrence,
            status=a.status,
            patient_type=a.patient_type,
        )

class AppointmentListResponse(BaseModel):
    items: List[AppointmentResponse]
    total: int

class DeleteAppointmentResponse(BaseModel):
    success: bool = True
    mode: DeleteMode
    deleted: int
