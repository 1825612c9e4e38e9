from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from ..application.entities import AppointmentDraft, DeleteMode
from ..application.services.scheduling_service import SchedulingService
from ..dependencies import get_scheduling_service
from ..schemas.common.common import ERROR_RESPONSES
from ..schemas.appointments.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AppointmentUpdate,
    DeleteAppointmentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"], responses=ERROR_RESPONSES)


def _draft(data, appointment_id=None, series_id=None) -> AppointmentDraft:
    return AppointmentDraft(
        id=appointment_id,
        series_id=series_id,
        patient_id=data.patient_id,
        patient_name=data.patient_name,
        date=data.date,
        start_time=data.start_time,
        duration_minutes=data.duration_minutes,
        notes=data.notes,
        recurrence=data.recurrence,
        status=data.status,
    )


@router.post("/", response_model=AppointmentListResponse, status_code=201)
def create_appointment(
    appointment_data: AppointmentCreate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Create an appointment; a recurring one also creates its future occurrences."""
    try:
        created = service.save_appointment(_draft(appointment_data))
        items = [AppointmentResponse.from_entity(a) for a in created]
        return AppointmentListResponse(items=items, total=len(items))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating appointment: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create appointment")


@router.get("/", response_model=AppointmentListResponse)
def list_appointments(service: SchedulingService = Depends(get_scheduling_service)):
    items = [AppointmentResponse.from_entity(a) for a in service.list_appointments()]
    return AppointmentListResponse(items=items, total=len(items))


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return AppointmentResponse.from_entity(service.get_appointment(appointment_id))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: str,
    appointment_data: AppointmentUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Edit a single occurrence. Other members of its series are left alone."""
    try:
        series_id = appointment_data.series_id
        if series_id is None:
            series_id = service.get_appointment(appointment_id).series_id
        updated = service.save_appointment(_draft(appointment_data, appointment_id, series_id))
        return AppointmentResponse.from_entity(updated[0])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update appointment")


@router.put("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: str,
    payload: AppointmentStatusUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return AppointmentResponse.from_entity(service.update_status(appointment_id, payload.status))


@router.delete("/{appointment_id}", response_model=DeleteAppointmentResponse)
def delete_appointment(
    appointment_id: str,
    mode: DeleteMode = Query(DeleteMode.SINGLE),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Delete one occurrence (mode=single) or it and all later ones (mode=series)."""
    try:
        deleted = service.delete_appointment(appointment_id, mode)
        return DeleteAppointmentResponse(mode=mode, deleted=deleted)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete appointment")
