from typing import Iterable, List, Optional
from sqlmodel import Session, select

from .....db.models import AppointmentRecord
from .....application.entities import (
    Appointment,
    AppointmentStatus,
    PatientType,
    Recurrence,
)
from .....application.ports.appointments_repo import AppointmentsRepository


class SqlAppointmentsRepository(AppointmentsRepository):
    """Stages changes on the session; the unit of work commits."""

    def __init__(self, session: Session):
        self.session = session

    def _to_entity(self, r: AppointmentRecord) -> Appointment:
        return Appointment(
            id=r.id,
            series_id=r.series_id,
            patient_id=r.patient_id,
            patient_name=r.patient_name,
            date=r.date,
            start_time=r.start_time,
            duration_minutes=r.duration_minutes,
            notes=r.notes,
            recurrence=Recurrence(r.recurrence),
            status=AppointmentStatus(r.status),
            patient_type=PatientType(r.patient_type),
        )

    def _apply(self, r: AppointmentRecord, a: Appointment) -> AppointmentRecord:
        r.id = a.id
        r.series_id = a.series_id
        r.patient_id = a.patient_id
        r.patient_name = a.patient_name
        r.date = a.date
        r.start_time = a.start_time
        r.duration_minutes = a.duration_minutes
        r.notes = a.notes
        r.recurrence = a.recurrence.value
        r.status = a.status.value
        r.patient_type = a.patient_type.value
        return r

    def _select(self):
        return select(AppointmentRecord).order_by(AppointmentRecord.row_id)

    def _row(self, appointment_id: str) -> Optional[AppointmentRecord]:
        return self.session.exec(select(AppointmentRecord).where(AppointmentRecord.id == appointment_id)).first()

    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        r = self._row(appointment_id)
        return self._to_entity(r) if r else None

    def list_all(self) -> List[Appointment]:
        return [self._to_entity(r) for r in self.session.exec(self._select()).all()]

    def list_for_patient(self, patient_id: str) -> List[Appointment]:
        rows = self.session.exec(self._select().where(AppointmentRecord.patient_id == patient_id)).all()
        return [self._to_entity(r) for r in rows]

    def list_in_series(self, series_id: str) -> List[Appointment]:
        rows = self.session.exec(self._select().where(AppointmentRecord.series_id == series_id)).all()
        return [self._to_entity(r) for r in rows]

    def add_many(self, appointments: Iterable[Appointment]) -> None:
        for a in appointments:
            self.session.add(self._apply(AppointmentRecord(), a))
        self.session.flush()

    def replace(self, appointment: Appointment) -> None:
        r = self._row(appointment.id)
        if not r:
            return
        self.session.add(self._apply(r, appointment))
        self.session.flush()

    def _delete_rows(self, rows: List[AppointmentRecord]) -> int:
        for r in rows:
            self.session.delete(r)
        self.session.flush()
        return len(rows)

    def delete_ids(self, appointment_ids: Iterable[str]) -> int:
        ids = list(appointment_ids)
        if not ids:
            return 0
        rows = self.session.exec(select(AppointmentRecord).where(AppointmentRecord.id.in_(ids))).all()
        return self._delete_rows(rows)

    def delete_for_patient(self, patient_id: str) -> int:
        rows = self.session.exec(select(AppointmentRecord).where(AppointmentRecord.patient_id == patient_id)).all()
        return self._delete_rows(rows)

    def sync_patient(self, patient_id: str, patient_name: str, patient_type: PatientType) -> int:
        rows = self.session.exec(select(AppointmentRecord).where(AppointmentRecord.patient_id == patient_id)).all()
        for r in rows:
            r.patient_name = patient_name
            r.patient_type = patient_type.value
            self.session.add(r)
        self.session.flush()
        return len(rows)
