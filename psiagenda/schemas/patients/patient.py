# psiagenda/schemas/patients/patient.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

from ...application.entities import Patient, PatientType, VisitSummary

class PatientBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    type: PatientType = PatientType.PRIVATE
    email: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    cpf: Optional[str] = Field(default=None, max_length=14)
    address: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None

class PatientCreate(PatientBase):
    id: Optional[str] = None

class PatientUpdate(PatientBase):
    pass

class PatientResponse(BaseModel):
    id: str
    name: str
    type: PatientType
    email: Optional[str] = None
    phone: Optional[str] = None
    cpf: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, p: Patient) -> "PatientResponse":
        return cls(
            id=p.id,
            name=p.name,
            type=p.type,
            email=p.email,
            phone=p.phone,
            cpf=p.cpf,
            address=p.address,
            notes=p.notes,
            created_at=p.created_at,
        )

class DeletePatientResponse(BaseModel):
    success: bool = True
    appointments_removed: int

class VisitSummaryResponse(BaseModel):
    patient_id: str
    total_appointments: int
    last_visit: Optional[date] = None
    next_visit: Optional[date] = None

    @classmethod
    def from_entity(cls, s: VisitSummary) -> "VisitSummaryResponse":
        return cls(
            patient_id=s.patient_id,
            total_appointments=s.total_appointments,
            last_visit=s.last_visit,
            next_visit=s.next_visit,
        )
