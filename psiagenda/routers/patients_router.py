from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from ..application.entities import PatientDraft
from ..application.services.reports_service import ReportsService
from ..application.services.scheduling_service import SchedulingService
from ..dependencies import get_reports_service, get_scheduling_service
from ..schemas.appointments.appointment import AppointmentResponse
from ..schemas.common.common import ERROR_RESPONSES
from ..schemas.notes.notes import TextResponse
from ..schemas.patients.patient import (
    DeletePatientResponse,
    PatientCreate,
    PatientResponse,
    PatientUpdate,
    VisitSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"], responses=ERROR_RESPONSES)


def _draft(data, patient_id: Optional[str]) -> PatientDraft:
    return PatientDraft(
        id=patient_id,
        name=data.name,
        type=data.type,
        email=data.email,
        phone=data.phone,
        cpf=data.cpf,
        address=data.address,
        notes=data.notes,
    )


@router.post("/", response_model=PatientResponse, status_code=201)
def create_patient(
    patient_data: PatientCreate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return PatientResponse.from_entity(service.save_patient(_draft(patient_data, patient_data.id)))


@router.get("/", response_model=List[PatientResponse])
def list_patients(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [PatientResponse.from_entity(p) for p in service.list_patients(search)]


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(patient_id: str, service: SchedulingService = Depends(get_scheduling_service)):
    return PatientResponse.from_entity(service.get_patient(patient_id))


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: str,
    patient_data: PatientUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Update a patient; type and name changes are copied onto their appointments."""
    try:
        return PatientResponse.from_entity(service.save_patient(_draft(patient_data, patient_id)))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating patient {patient_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update patient")


@router.delete("/{patient_id}", response_model=DeletePatientResponse)
def delete_patient(patient_id: str, service: SchedulingService = Depends(get_scheduling_service)):
    """Delete a patient and every appointment they have. Cannot be undone."""
    try:
        removed = service.delete_patient(patient_id)
        return DeletePatientResponse(appointments_removed=removed)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting patient {patient_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete patient")


@router.get("/{patient_id}/history", response_model=List[AppointmentResponse])
def get_session_history(patient_id: str, reports: ReportsService = Depends(get_reports_service)):
    return [AppointmentResponse.from_entity(a) for a in reports.session_history(patient_id)]


@router.get("/{patient_id}/summary", response_model=VisitSummaryResponse)
def get_visit_summary(
    patient_id: str,
    today: Optional[date] = None,
    reports: ReportsService = Depends(get_reports_service),
):
    return VisitSummaryResponse.from_entity(reports.visit_summary(patient_id, today))


@router.post("/{patient_id}/reports/{kind}", response_model=TextResponse)
def generate_report(patient_id: str, kind: str, reports: ReportsService = Depends(get_reports_service)):
    return TextResponse(text=reports.generate_report(patient_id, kind))
