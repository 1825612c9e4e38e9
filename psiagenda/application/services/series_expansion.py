"""Generation of the future occurrences of a recurring appointment."""
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, List

from dateutil.relativedelta import relativedelta

from ..entities import Appointment, Recurrence, new_id


def occurrence_date(start: date, recurrence: Recurrence, index: int) -> date:
    """Date of the ``index``-th occurrence after ``start`` (index 0 is ``start``).

    Months are counted from ``start`` rather than chained, so a series that
    begins on the 31st clamps to shorter months and returns to the 31st.
    """
    if recurrence == Recurrence.WEEKLY:
        return start + timedelta(days=7 * index)
    if recurrence == Recurrence.BIWEEKLY:
        return start + timedelta(days=14 * index)
    if recurrence == Recurrence.MONTHLY:
        return start + relativedelta(months=index)
    raise ValueError(f"Recurrence {recurrence!r} has no spacing")


def expand(base: Appointment, occurrence_count: int, id_factory: Callable[[], str] = new_id) -> List[Appointment]:
    """Copies of ``base`` for the ``occurrence_count`` occurrences that follow it.

    Each copy gets a fresh id and its own date; everything else, including
    the series id, is shared with ``base``. When ``base`` has no series id a
    new one is generated for the copies, and the caller is expected to put
    it on ``base`` too.
    """
    if base.recurrence == Recurrence.NONE:
        raise ValueError("Cannot expand a non-recurring appointment")
    if occurrence_count < 0:
        raise ValueError("occurrence_count must not be negative")

    series_id = base.series_id or id_factory()
    return [
        replace(
            base,
            id=id_factory(),
            series_id=series_id,
            date=occurrence_date(base.date, base.recurrence, i),
        )
        for i in range(1, occurrence_count + 1)
    ]
