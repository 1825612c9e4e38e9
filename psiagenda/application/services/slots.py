from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Union

from ..entities import Appointment

DayLike = Union[date, datetime]


def _as_date(day: DayLike) -> date:
    return day.date() if isinstance(day, datetime) else day


def _hour_of(time_label: str) -> int:
    return int(time_label.split(":")[0])


def slot_occupants(day: DayLike, hour_label: str, appointments: Iterable[Appointment]) -> List[Appointment]:
    """Appointments on ``day`` whose start hour equals the hour of ``hour_label``.

    Minutes are ignored (10:30 sits in the 10:00 slot) and the collection
    order is kept.
    """
    target_day = _as_date(day)
    target_hour = _hour_of(hour_label)
    return [
        a for a in appointments
        if _as_date(a.date) == target_day and _hour_of(a.start_time) == target_hour
    ]


def hour_labels(start_hour: int, end_hour: int) -> List[str]:
    return [f"{hour:02d}:00" for hour in range(start_hour, end_hour + 1)]


def week_days(reference: DayLike, days: int = 6) -> List[date]:
    """``days`` consecutive dates starting on the Monday of ``reference``'s week."""
    ref = _as_date(reference)
    monday = ref - timedelta(days=ref.weekday())
    return [monday + timedelta(days=i) for i in range(days)]


def week_grid(
    reference: DayLike,
    appointments: Iterable[Appointment],
    start_hour: int = 8,
    end_hour: int = 19,
    days: int = 6,
) -> Dict[date, Dict[str, List[Appointment]]]:
    appointments = list(appointments)
    labels = hour_labels(start_hour, end_hour)
    return {
        day: {label: slot_occupants(day, label, appointments) for label in labels}
        for day in week_days(reference, days)
    }
