from datetime import date, datetime

from psiagenda.application.entities import Appointment
from psiagenda.application.services.slots import hour_labels, slot_occupants, week_days, week_grid


def appt(id, day, start):
    return Appointment(id=id, patient_id="p1", patient_name="Ana", date=day, start_time=start)


def test_half_hour_start_lands_in_its_hour_slot_only():
    a = appt("a", date(2024, 3, 4), "10:30")
    assert slot_occupants(date(2024, 3, 4), "10:00", [a]) == [a]
    for label in hour_labels(8, 19):
        if label != "10:00":
            assert slot_occupants(date(2024, 3, 4), label, [a]) == []


def test_other_days_do_not_match():
    a = appt("a", date(2024, 3, 4), "10:00")
    assert slot_occupants(date(2024, 3, 5), "10:00", [a]) == []


def test_datetime_day_is_truncated():
    a = appt("a", date(2024, 3, 4), "09:15")
    assert slot_occupants(datetime(2024, 3, 4, 23, 59), "09:00", [a]) == [a]


def test_overlapping_appointments_keep_collection_order():
    first = appt("z", date(2024, 3, 4), "14:45")
    second = appt("a", date(2024, 3, 4), "14:00")
    out = slot_occupants(date(2024, 3, 4), "14:00", [first, second])
    assert [a.id for a in out] == ["z", "a"]


def test_hours_outside_display_range_still_resolve():
    a = appt("a", date(2024, 3, 4), "22:00")
    assert slot_occupants(date(2024, 3, 4), "22:00", [a]) == [a]
    assert slot_occupants(date(2024, 3, 4), "7:00", [appt("b", date(2024, 3, 4), "07:10")])[0].id == "b"


def test_hour_labels():
    labels = hour_labels(8, 19)
    assert labels[0] == "08:00"
    assert labels[-1] == "19:00"
    assert len(labels) == 12


def test_week_starts_on_monday_and_has_six_days():
    days = week_days(date(2024, 3, 6))
    assert days[0] == date(2024, 3, 4)
    assert days[-1] == date(2024, 3, 9)
    assert len(days) == 6


def test_sunday_belongs_to_the_preceding_week():
    assert week_days(date(2024, 3, 10))[0] == date(2024, 3, 4)


def test_week_grid_places_appointments():
    a = appt("a", date(2024, 3, 5), "11:20")
    grid = week_grid(date(2024, 3, 7), [a], start_hour=8, end_hour=19)
    assert list(grid) == week_days(date(2024, 3, 7))
    assert grid[date(2024, 3, 5)]["11:00"] == [a]
    assert sum(len(v) for by_hour in grid.values() for v in by_hour.values()) == 1
