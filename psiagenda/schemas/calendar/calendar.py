# psiagenda/schemas/calendar/calendar.py
from pydantic import BaseModel
from typing import List
from datetime import date

from ..appointments.appointment import AppointmentResponse

class SlotResponse(BaseModel):
    day: date
    hour: str  # HH:00
    appointments: List[AppointmentResponse]

class DayColumn(BaseModel):
    day: date
    slots: List[SlotResponse]

class WeekResponse(BaseModel):
    reference: date
    hours: List[str]
    days: List[DayColumn]
