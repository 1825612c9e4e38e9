# psiagenda/db/models/clinic/patient.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone

class PatientRecord(SQLModel, table=True):
    __tablename__ = "patients"
    row_id: Optional[int] = Field(default=None, primary_key=True)
    id: str = Field(max_length=64, unique=True, index=True)
    name: str = Field(max_length=200)
    type: str = Field(default="private", max_length=20)
    email: Optional[str] = Field(max_length=100, default=None)
    phone: Optional[str] = Field(max_length=30, default=None)
    cpf: Optional[str] = Field(max_length=14, default=None)
    address: Optional[str] = Field(max_length=255, default=None)
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
