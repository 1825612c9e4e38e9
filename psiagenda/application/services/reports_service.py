from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from ...exceptions import APIException
from ..entities import Appointment, ReportKind, VisitSummary
from ..ports.unit_of_work import UnitOfWork
from .clinical_text_service import ClinicalTextService, format_sessions


@dataclass
class ReportsService:
    uow: UnitOfWork
    text: ClinicalTextService

    def session_history(self, patient_id: str) -> List[Appointment]:
        """Appointments of the patient that carry notes, newest first."""
        with self.uow:
            appts = self.uow.appointments.list_for_patient(patient_id)
        with_notes = [a for a in appts if a.notes and a.notes.strip()]
        return sorted(with_notes, key=lambda a: a.date, reverse=True)

    def visit_summary(self, patient_id: str, today: Optional[date] = None) -> VisitSummary:
        today = today or datetime.utcnow().date()
        with self.uow:
            appts = sorted(self.uow.appointments.list_for_patient(patient_id), key=lambda a: a.date)
        past = [a for a in appts if a.date < today]
        upcoming = [a for a in appts if a.date >= today]
        return VisitSummary(
            patient_id=patient_id,
            total_appointments=len(appts),
            last_visit=past[-1].date if past else None,
            next_visit=upcoming[0].date if upcoming else None,
        )

    def generate_report(self, patient_id: str, kind: str) -> str:
        try:
            kind = ReportKind(kind)
        except ValueError:
            raise APIException(status_code=400, detail=f"Invalid report kind. Must be one of: {[k.value for k in ReportKind]}")

        with self.uow:
            patient = self.uow.patients.get_by_id(patient_id)
        if not patient:
            raise APIException(status_code=404, detail="Patient not found")

        history = self.session_history(patient_id)
        if not history:
            raise APIException(status_code=400, detail="No session notes recorded for this patient")

        sessions = format_sessions([(a.date, a.notes) for a in history])
        if kind == ReportKind.TECHNICAL:
            return self.text.technical_report(patient.name, sessions)
        return self.text.supervision_report(patient.name, sessions)
