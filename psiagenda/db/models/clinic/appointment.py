# psiagenda/db/models/clinic/appointment.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import date

class AppointmentRecord(SQLModel, table=True):
    __tablename__ = "appointments"
    # row_id keeps insertion order; id is the public identifier
    row_id: Optional[int] = Field(default=None, primary_key=True)
    id: str = Field(max_length=64, unique=True, index=True)
    series_id: Optional[str] = Field(default=None, max_length=64, index=True)
    patient_id: str = Field(max_length=64, index=True)
    patient_name: str = Field(max_length=200)
    date: date
    start_time: str = Field(max_length=5)
    duration_minutes: int = Field(default=50)
    notes: str = Field(default="")
    recurrence: str = Field(default="none", max_length=20)
    status: str = Field(default="scheduled", max_length=20)
    patient_type: str = Field(default="private", max_length=20)
