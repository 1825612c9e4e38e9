from typing import List, Optional
from sqlmodel import Session, select

from .....db.models import PatientRecord
from .....application.entities import Patient, PatientType
from .....application.ports.patients_repo import PatientsRepository


class SqlPatientsRepository(PatientsRepository):
    """Stages changes on the session; the unit of work commits."""

    def __init__(self, session: Session):
        self.session = session

    def _to_entity(self, r: PatientRecord) -> Patient:
        return Patient(
            id=r.id,
            name=r.name,
            type=PatientType(r.type),
            created_at=r.created_at,
            email=r.email,
            phone=r.phone,
            cpf=r.cpf,
            address=r.address,
            notes=r.notes,
        )

    def _row(self, patient_id: str) -> Optional[PatientRecord]:
        return self.session.exec(select(PatientRecord).where(PatientRecord.id == patient_id)).first()

    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        r = self._row(patient_id)
        return self._to_entity(r) if r else None

    def list_all(self) -> List[Patient]:
        rows = self.session.exec(select(PatientRecord).order_by(PatientRecord.row_id)).all()
        return [self._to_entity(r) for r in rows]

    def add(self, patient: Patient) -> None:
        self.session.add(PatientRecord(
            id=patient.id,
            name=patient.name,
            type=patient.type.value,
            created_at=patient.created_at,
            email=patient.email,
            phone=patient.phone,
            cpf=patient.cpf,
            address=patient.address,
            notes=patient.notes,
        ))
        self.session.flush()

    def update(self, patient: Patient) -> None:
        r = self._row(patient.id)
        if not r:
            return
        r.name = patient.name
        r.type = patient.type.value
        r.email = patient.email
        r.phone = patient.phone
        r.cpf = patient.cpf
        r.address = patient.address
        r.notes = patient.notes
        self.session.add(r)
        self.session.flush()

    def delete(self, patient_id: str) -> bool:
        r = self._row(patient_id)
        if not r:
            return False
        self.session.delete(r)
        self.session.flush()
        return True
