from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, List, Optional
import logging

from ...exceptions import APIException
from ..entities import (
    Appointment,
    AppointmentDraft,
    AppointmentStatus,
    DeleteMode,
    Patient,
    PatientDraft,
    PatientType,
    Recurrence,
    new_id,
    utc_now,
)
from ..ports.audit_logger import AuditLogger
from ..ports.unit_of_work import UnitOfWork
from .series_expansion import expand

logger = logging.getLogger(__name__)


def _parse_enum(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [m.value for m in enum_cls]
        raise APIException(status_code=400, detail=f"Invalid {label}. Must be one of: {allowed}")


@dataclass
class SchedulingService:
    """Writes to the appointment and patient collections.

    Every operation runs inside one unit of work, so series inserts, series
    deletes and patient cascades either fully apply or not at all.
    """
    uow: UnitOfWork
    audit: Optional[AuditLogger] = None
    total_occurrences: int = 12
    default_duration_minutes: int = 50
    id_factory: Callable[[], str] = field(default=new_id)
    clock: Callable[[], datetime] = field(default=utc_now)

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------
    def save_appointment(self, draft: AppointmentDraft) -> List[Appointment]:
        """Insert a new appointment (plus its series) or replace an existing one.

        Returns the records written.
        """
        recurrence = _parse_enum(Recurrence, draft.recurrence or Recurrence.NONE, "recurrence")
        status = _parse_enum(AppointmentStatus, draft.status or AppointmentStatus.SCHEDULED, "status")
        self._validate_appointment_draft(draft)
        duration = draft.duration_minutes if draft.duration_minutes is not None else self.default_duration_minutes

        with self.uow:
            if draft.id and not self.uow.appointments.get_by_id(draft.id):
                raise APIException(status_code=404, detail="Appointment not found")

            patient = self._resolve_patient(draft)

            series_id = draft.series_id
            if not series_id and recurrence != Recurrence.NONE:
                series_id = self.id_factory()

            base = Appointment(
                id=draft.id or self.id_factory(),
                series_id=series_id,
                patient_id=patient.id,
                patient_name=patient.name,
                date=draft.date,
                start_time=draft.start_time,
                duration_minutes=duration,
                notes=draft.notes or "",
                recurrence=recurrence,
                status=status,
                patient_type=patient.type,
            )

            if draft.id:
                # Edits touch this instance only, even when recurrence changed
                self.uow.appointments.replace(base)
                logger.info(f"Updated appointment {base.id}")
                return [base]

            records = [base]
            if recurrence != Recurrence.NONE:
                records.extend(expand(base, self.total_occurrences - 1, id_factory=self.id_factory))
            self.uow.appointments.add_many(records)
            logger.info(f"Created {len(records)} appointment(s) for patient {patient.id} (series={series_id})")
            return records

    def delete_appointment(self, appointment_id: str, mode: DeleteMode = DeleteMode.SINGLE) -> int:
        """Delete one occurrence, or it and every later occurrence of its series.

        Returns the number of records removed. Unknown ids and appointments
        outside a series fall back to a single delete.
        """
        mode = _parse_enum(DeleteMode, mode, "delete mode")
        with self.uow:
            if mode == DeleteMode.SERIES:
                reference = self.uow.appointments.get_by_id(appointment_id)
                if reference and reference.series_id:
                    doomed = [
                        a.id for a in self.uow.appointments.list_in_series(reference.series_id)
                        if not a.date < reference.date
                    ]
                    removed = self.uow.appointments.delete_ids(doomed)
                    logger.info(f"Deleted {removed} occurrence(s) of series {reference.series_id} from {reference.date}")
                    return removed
                logger.info(f"Appointment {appointment_id} is not part of a series, deleting it alone")
            removed = self.uow.appointments.delete_ids([appointment_id])
            logger.info(f"Deleted appointment {appointment_id} ({removed} removed)")
            return removed

    def update_status(self, appointment_id: str, status: str) -> Appointment:
        status = _parse_enum(AppointmentStatus, status, "status")
        with self.uow:
            appt = self.uow.appointments.get_by_id(appointment_id)
            if not appt:
                raise APIException(status_code=404, detail="Appointment not found")
            updated = replace(appt, status=status)
            self.uow.appointments.replace(updated)
            return updated

    def get_appointment(self, appointment_id: str) -> Appointment:
        with self.uow:
            appt = self.uow.appointments.get_by_id(appointment_id)
        if not appt:
            raise APIException(status_code=404, detail="Appointment not found")
        return appt

    def list_appointments(self) -> List[Appointment]:
        with self.uow:
            return self.uow.appointments.list_all()

    # ------------------------------------------------------------------
    # Patients
    # ------------------------------------------------------------------
    def save_patient(self, draft: PatientDraft) -> Patient:
        name = (draft.name or "").strip()
        if not name:
            raise APIException(status_code=400, detail="Patient name is required")
        patient_type = _parse_enum(PatientType, draft.type or PatientType.PRIVATE, "patient type")

        with self.uow:
            existing = self.uow.patients.get_by_id(draft.id) if draft.id else None
            patient = Patient(
                id=draft.id or self.id_factory(),
                name=name,
                type=patient_type,
                created_at=existing.created_at if existing else self.clock(),
                email=draft.email,
                phone=draft.phone,
                cpf=draft.cpf,
                address=draft.address,
                notes=draft.notes,
            )
            if existing:
                self.uow.patients.update(patient)
                synced = self.uow.appointments.sync_patient(patient.id, patient.name, patient.type)
                logger.info(f"Updated patient {patient.id}, resynced {synced} appointment(s)")
            else:
                self.uow.patients.add(patient)
                logger.info(f"Created patient {patient.id}")
            return patient

    def delete_patient(self, patient_id: str) -> int:
        """Remove a patient and all of their appointments.

        Irreversible: clinical notes go with the appointments, so callers
        confirm with the user before getting here. Returns the number of
        appointments removed.
        """
        with self.uow:
            found = self.uow.patients.delete(patient_id)
            removed = self.uow.appointments.delete_for_patient(patient_id)
        logger.info(f"Deleted patient {patient_id} and {removed} appointment(s)")
        if self.audit:
            self.audit.log("patient.delete", patient_id, success=found, details={"appointments_removed": removed})
        return removed

    def get_patient(self, patient_id: str) -> Patient:
        with self.uow:
            patient = self.uow.patients.get_by_id(patient_id)
        if not patient:
            raise APIException(status_code=404, detail="Patient not found")
        return patient

    def list_patients(self, search: Optional[str] = None) -> List[Patient]:
        with self.uow:
            patients = self.uow.patients.list_all()
        if search:
            needle = search.lower()
            patients = [p for p in patients if needle in p.name.lower()]
        return patients

    # ------------------------------------------------------------------
    def _validate_appointment_draft(self, draft: AppointmentDraft) -> None:
        has_patient = bool(draft.patient_id) or bool((draft.patient_name or "").strip())
        if not has_patient or draft.date is None or not draft.start_time:
            raise APIException(status_code=400, detail="Patient, date and start time are required")
        try:
            datetime.strptime(draft.start_time, "%H:%M")
        except ValueError:
            raise APIException(status_code=400, detail="Invalid start time format. Use HH:MM")
        if draft.duration_minutes is not None and draft.duration_minutes <= 0:
            raise APIException(status_code=400, detail="Duration must be a positive number of minutes")

    def _resolve_patient(self, draft: AppointmentDraft) -> Patient:
        if draft.patient_id:
            patient = self.uow.patients.get_by_id(draft.patient_id)
            if patient:
                return patient

        name = (draft.patient_name or "").strip()
        if not name:
            raise APIException(status_code=400, detail="Patient name is required for a new patient")
        patient = Patient(
            id=draft.patient_id or self.id_factory(),
            name=name,
            type=PatientType.PRIVATE,
            created_at=self.clock(),
        )
        self.uow.patients.add(patient)
        logger.info(f"Registered patient {patient.id} from appointment draft")
        return patient
