from datetime import date
from fastapi import APIRouter, Depends, Query

from ..application.services import slots
from ..application.services.scheduling_service import SchedulingService
from ..config import settings
from ..dependencies import get_scheduling_service
from ..schemas.appointments.appointment import AppointmentResponse
from ..schemas.calendar.calendar import DayColumn, SlotResponse, WeekResponse

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/slot", response_model=SlotResponse)
def get_slot(
    day: date,
    hour: str = Query(..., pattern=r"^\d{1,2}:\d{2}$", description="Slot label, e.g. 10:00"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    occupants = slots.slot_occupants(day, hour, service.list_appointments())
    return SlotResponse(day=day, hour=hour, appointments=[AppointmentResponse.from_entity(a) for a in occupants])


@router.get("/week", response_model=WeekResponse)
def get_week(
    reference: date,
    service: SchedulingService = Depends(get_scheduling_service),
):
    grid = slots.week_grid(
        reference,
        service.list_appointments(),
        start_hour=settings.CALENDAR_HOURS_START,
        end_hour=settings.CALENDAR_HOURS_END,
        days=settings.CALENDAR_WEEK_DAYS,
    )
    days = [
        DayColumn(
            day=day,
            slots=[
                SlotResponse(day=day, hour=label, appointments=[AppointmentResponse.from_entity(a) for a in occupants])
                for label, occupants in by_hour.items()
            ],
        )
        for day, by_hour in grid.items()
    ]
    hours = slots.hour_labels(settings.CALENDAR_HOURS_START, settings.CALENDAR_HOURS_END)
    return WeekResponse(reference=reference, hours=hours, days=days)
