from dataclasses import replace
from typing import Iterable, List, Optional

from ....application.entities import Appointment, Patient, PatientType
from ....application.ports.appointments_repo import AppointmentsRepository
from ....application.ports.patients_repo import PatientsRepository


class InMemoryPatientsRepository(PatientsRepository):
    def __init__(self) -> None:
        self._rows: List[Patient] = []

    def snapshot(self) -> List[Patient]:
        return list(self._rows)

    def restore(self, rows: List[Patient]) -> None:
        self._rows = list(rows)

    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        return next((p for p in self._rows if p.id == patient_id), None)

    def list_all(self) -> List[Patient]:
        return list(self._rows)

    def add(self, patient: Patient) -> None:
        if self.get_by_id(patient.id):
            raise ValueError(f"Duplicate patient id {patient.id}")
        self._rows.append(patient)

    def update(self, patient: Patient) -> None:
        self._rows = [patient if p.id == patient.id else p for p in self._rows]

    def delete(self, patient_id: str) -> bool:
        before = len(self._rows)
        self._rows = [p for p in self._rows if p.id != patient_id]
        return len(self._rows) < before


class InMemoryAppointmentsRepository(AppointmentsRepository):
    # Records are never mutated in place; snapshots rely on that
    def __init__(self) -> None:
        self._rows: List[Appointment] = []

    def snapshot(self) -> List[Appointment]:
        return list(self._rows)

    def restore(self, rows: List[Appointment]) -> None:
        self._rows = list(rows)

    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        return next((a for a in self._rows if a.id == appointment_id), None)

    def list_all(self) -> List[Appointment]:
        return list(self._rows)

    def list_for_patient(self, patient_id: str) -> List[Appointment]:
        return [a for a in self._rows if a.patient_id == patient_id]

    def list_in_series(self, series_id: str) -> List[Appointment]:
        return [a for a in self._rows if a.series_id == series_id]

    def add_many(self, appointments: Iterable[Appointment]) -> None:
        appointments = list(appointments)
        known = {a.id for a in self._rows}
        for a in appointments:
            if a.id in known:
                raise ValueError(f"Duplicate appointment id {a.id}")
            known.add(a.id)
        self._rows.extend(appointments)

    def replace(self, appointment: Appointment) -> None:
        self._rows = [appointment if a.id == appointment.id else a for a in self._rows]

    def delete_ids(self, appointment_ids: Iterable[str]) -> int:
        doomed = set(appointment_ids)
        before = len(self._rows)
        self._rows = [a for a in self._rows if a.id not in doomed]
        return before - len(self._rows)

    def delete_for_patient(self, patient_id: str) -> int:
        before = len(self._rows)
        self._rows = [a for a in self._rows if a.patient_id != patient_id]
        return before - len(self._rows)

    def sync_patient(self, patient_id: str, patient_name: str, patient_type: PatientType) -> int:
        touched = 0
        rows = []
        for a in self._rows:
            if a.patient_id == patient_id:
                a = replace(a, patient_name=patient_name, patient_type=patient_type)
                touched += 1
            rows.append(a)
        self._rows = rows
        return touched
