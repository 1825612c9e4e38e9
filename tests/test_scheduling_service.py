from dataclasses import asdict
from datetime import date, datetime
import itertools

import pytest
from fastapi import HTTPException

from psiagenda.application.entities import (
    Appointment,
    AppointmentDraft,
    DeleteMode,
    PatientDraft,
    PatientType,
    Recurrence,
)
from psiagenda.application.services.scheduling_service import SchedulingService
from psiagenda.infrastructure.persistence.memory.unit_of_work import InMemoryUnitOfWork


class FakeAudit:
    def __init__(self):
        self.entries = []

    def log(self, action, entity_id, success=True, details=None):
        self.entries.append((action, entity_id, success, details))


def make_service(total_occurrences=12):
    counter = itertools.count(1)
    return SchedulingService(
        uow=InMemoryUnitOfWork(),
        audit=FakeAudit(),
        total_occurrences=total_occurrences,
        id_factory=lambda: f"id-{next(counter)}",
        clock=lambda: datetime(2024, 1, 1, 9, 0),
    )


def draft(**kw):
    base = dict(patient_name="Mariana Souza", date=date(2024, 1, 1), start_time="10:00")
    base.update(kw)
    return AppointmentDraft(**base)


def test_recurring_creation_makes_twelve_with_one_series():
    svc = make_service()
    created = svc.save_appointment(draft(recurrence=Recurrence.WEEKLY))
    assert len(created) == 12
    assert len({a.id for a in created}) == 12
    series = {a.series_id for a in created}
    assert len(series) == 1 and None not in series
    assert [a.id for a in svc.list_appointments()] == [a.id for a in created]
    assert created[0].date == date(2024, 1, 1)
    assert created[-1].date == date(2024, 3, 18)


def test_series_id_is_not_shared_between_requests():
    svc = make_service(total_occurrences=2)
    first = svc.save_appointment(draft(recurrence=Recurrence.WEEKLY))
    second = svc.save_appointment(draft(recurrence=Recurrence.MONTHLY))
    assert first[0].series_id != second[0].series_id


def test_non_recurring_creation_has_no_series():
    svc = make_service()
    created = svc.save_appointment(draft())
    assert len(created) == 1
    assert created[0].series_id is None
    assert created[0].duration_minutes == 50
    assert created[0].notes == ""


def test_unknown_patient_is_registered_as_private():
    svc = make_service()
    created = svc.save_appointment(draft(patient_id="p-new", patient_name="Carlos Oliveira"))
    patient = svc.get_patient("p-new")
    assert patient.name == "Carlos Oliveira"
    assert patient.type == PatientType.PRIVATE
    assert patient.created_at == datetime(2024, 1, 1, 9, 0)
    assert created[0].patient_type == PatientType.PRIVATE


def test_new_name_without_id_gets_a_fresh_patient():
    svc = make_service()
    created = svc.save_appointment(draft(patient_name="Ana"))
    assert [p.id for p in svc.list_patients()] == [created[0].patient_id]


def test_existing_patient_supplies_type_and_name():
    svc = make_service()
    p = svc.save_patient(PatientDraft(name="Carlos Oliveira", type=PatientType.INSURANCE))
    created = svc.save_appointment(draft(patient_id=p.id, patient_name=None))
    assert created[0].patient_type == PatientType.INSURANCE
    assert created[0].patient_name == "Carlos Oliveira"
    assert len(svc.list_patients()) == 1


@pytest.mark.parametrize("missing", [
    dict(patient_name=None),
    dict(date=None),
    dict(start_time=None),
])
def test_missing_required_fields_write_nothing(missing):
    svc = make_service()
    with pytest.raises(HTTPException) as exc:
        svc.save_appointment(draft(**missing))
    assert exc.value.status_code == 400
    assert svc.list_appointments() == []
    assert svc.list_patients() == []


def test_bad_start_time_and_duration_are_rejected():
    svc = make_service()
    with pytest.raises(HTTPException):
        svc.save_appointment(draft(start_time="10h"))
    with pytest.raises(HTTPException):
        svc.save_appointment(draft(duration_minutes=0))
    assert svc.list_appointments() == []


def test_unknown_recurrence_value_is_rejected():
    svc = make_service()
    with pytest.raises(HTTPException) as exc:
        svc.save_appointment(draft(recurrence="daily"))
    assert exc.value.status_code == 400


def test_edit_replaces_only_that_instance():
    svc = make_service(total_occurrences=3)
    created = svc.save_appointment(draft(recurrence=Recurrence.WEEKLY))
    target = created[1]
    edited = svc.save_appointment(draft(
        id=target.id,
        series_id=target.series_id,
        patient_id=target.patient_id,
        date=target.date,
        start_time="15:30",
        notes="Remarcado",
        recurrence=Recurrence.MONTHLY,
    ))
    assert len(edited) == 1
    rows = svc.list_appointments()
    assert [a.id for a in rows] == [a.id for a in created]
    assert rows[1].start_time == "15:30"
    assert rows[1].recurrence == Recurrence.MONTHLY
    assert rows[0].start_time == "10:00" and rows[2].start_time == "10:00"
    assert rows[0].recurrence == Recurrence.WEEKLY


def test_edit_is_idempotent():
    svc = make_service()
    original = svc.save_appointment(draft())[0]
    edit = draft(id=original.id, patient_id=original.patient_id, notes="Queixa de insônia")
    first = svc.save_appointment(edit)[0]
    second = svc.save_appointment(edit)[0]
    assert len(svc.list_appointments()) == 1
    assert asdict(first) == asdict(second) == asdict(svc.get_appointment(original.id))
    assert second.notes == "Queixa de insônia"


def test_edit_of_unknown_id_writes_nothing():
    svc = make_service()
    with pytest.raises(HTTPException) as exc:
        svc.save_appointment(draft(id="missing", patient_id="ghost", patient_name="Ghost"))
    assert exc.value.status_code == 404
    assert svc.list_patients() == []


def test_series_delete_keeps_earlier_occurrences():
    svc = make_service(total_occurrences=3)
    jan1, jan8, jan15 = svc.save_appointment(draft(recurrence=Recurrence.WEEKLY))
    removed = svc.delete_appointment(jan8.id, DeleteMode.SERIES)
    assert removed == 2
    remaining = svc.list_appointments()
    assert [a.id for a in remaining] == [jan1.id]
    assert asdict(remaining[0]) == asdict(jan1)


def test_series_delete_removes_same_dated_sibling():
    svc = make_service()
    svc.uow.appointments.add_many([
        Appointment(id="a", series_id="s", patient_id="p", patient_name="P", date=date(2024, 1, 8), start_time="10:00", recurrence=Recurrence.WEEKLY),
        Appointment(id="b", series_id="s", patient_id="p", patient_name="P", date=date(2024, 1, 8), start_time="16:00", recurrence=Recurrence.WEEKLY),
        Appointment(id="c", series_id="s", patient_id="p", patient_name="P", date=date(2024, 1, 1), start_time="10:00", recurrence=Recurrence.WEEKLY),
    ])
    assert svc.delete_appointment("a", "series") == 2
    assert [a.id for a in svc.list_appointments()] == ["c"]


def test_series_delete_leaves_other_series_alone():
    svc = make_service(total_occurrences=3)
    mine = svc.save_appointment(draft(recurrence=Recurrence.WEEKLY))
    other = svc.save_appointment(draft(patient_name="Outro", recurrence=Recurrence.WEEKLY))
    svc.delete_appointment(mine[0].id, DeleteMode.SERIES)
    assert [a.id for a in svc.list_appointments()] == [a.id for a in other]


def test_single_delete_never_cascades():
    svc = make_service(total_occurrences=3)
    created = svc.save_appointment(draft(recurrence=Recurrence.WEEKLY))
    assert svc.delete_appointment(created[1].id, DeleteMode.SINGLE) == 1
    assert [a.id for a in svc.list_appointments()] == [created[0].id, created[2].id]


def test_series_delete_falls_back_to_single():
    svc = make_service()
    lone = svc.save_appointment(draft())[0]
    keep = svc.save_appointment(draft(start_time="11:00"))[0]
    assert svc.delete_appointment(lone.id, DeleteMode.SERIES) == 1
    assert [a.id for a in svc.list_appointments()] == [keep.id]
    assert svc.delete_appointment("does-not-exist", DeleteMode.SERIES) == 0


def test_patient_cascade_delete():
    svc = make_service(total_occurrences=3)
    target = svc.save_patient(PatientDraft(name="Mariana Souza"))
    other = svc.save_patient(PatientDraft(name="Carlos Oliveira"))
    svc.save_appointment(draft(patient_id=target.id, recurrence=Recurrence.WEEKLY))
    svc.save_appointment(draft(patient_id=other.id))
    svc.save_appointment(draft(patient_id=other.id, start_time="14:00"))

    assert svc.delete_patient(target.id) == 3
    remaining = svc.list_appointments()
    assert len(remaining) == 2
    assert {a.patient_id for a in remaining} == {other.id}
    assert [p.id for p in svc.list_patients()] == [other.id]
    assert svc.audit.entries[-1][:3] == ("patient.delete", target.id, True)


def test_failed_cascade_rolls_back(monkeypatch):
    svc = make_service()
    p = svc.save_patient(PatientDraft(name="Mariana Souza"))
    svc.save_appointment(draft(patient_id=p.id))

    def boom(patient_id):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(svc.uow.appointments, "delete_for_patient", boom)
    with pytest.raises(RuntimeError):
        svc.delete_patient(p.id)
    assert svc.get_patient(p.id).name == "Mariana Souza"
    assert len(svc.list_appointments()) == 1


def test_type_change_propagates_to_that_patients_appointments_only():
    svc = make_service(total_occurrences=2)
    mariana = svc.save_patient(PatientDraft(name="Mariana Souza"))
    carlos = svc.save_patient(PatientDraft(name="Carlos Oliveira"))
    svc.save_appointment(draft(patient_id=mariana.id, recurrence=Recurrence.BIWEEKLY))
    svc.save_appointment(draft(patient_id=carlos.id))

    svc.save_patient(PatientDraft(id=mariana.id, name="Mariana S. Souza", type=PatientType.INSURANCE))

    by_patient = {}
    for a in svc.list_appointments():
        by_patient.setdefault(a.patient_id, []).append(a)
    assert [a.patient_type for a in by_patient[mariana.id]] == [PatientType.INSURANCE] * 2
    assert [a.patient_name for a in by_patient[mariana.id]] == ["Mariana S. Souza"] * 2
    assert by_patient[carlos.id][0].patient_type == PatientType.PRIVATE
    assert by_patient[carlos.id][0].patient_name == "Carlos Oliveira"


def test_patient_update_keeps_created_at():
    counter = itertools.count(1)
    clock_values = iter([datetime(2024, 1, 1), datetime(2024, 6, 1)])
    svc = SchedulingService(uow=InMemoryUnitOfWork(), id_factory=lambda: f"id-{next(counter)}", clock=lambda: next(clock_values))
    created = svc.save_patient(PatientDraft(name="Ana"))
    updated = svc.save_patient(PatientDraft(id=created.id, name="Ana Paula", phone="(11) 99999-1111"))
    assert updated.created_at == datetime(2024, 1, 1)
    assert svc.get_patient(created.id).phone == "(11) 99999-1111"


def test_patient_name_required():
    svc = make_service()
    with pytest.raises(HTTPException):
        svc.save_patient(PatientDraft(name="   "))
    assert svc.list_patients() == []


def test_list_patients_search_is_case_insensitive():
    svc = make_service()
    svc.save_patient(PatientDraft(name="Mariana Souza"))
    svc.save_patient(PatientDraft(name="Carlos Oliveira"))
    assert [p.name for p in svc.list_patients("souza")] == ["Mariana Souza"]
    assert len(svc.list_patients()) == 2


def test_update_status():
    svc = make_service()
    a = svc.save_appointment(draft())[0]
    assert svc.update_status(a.id, "no_show").status.value == "no_show"
    with pytest.raises(HTTPException):
        svc.update_status(a.id, "postponed")
    with pytest.raises(HTTPException):
        svc.update_status("missing", "completed")
