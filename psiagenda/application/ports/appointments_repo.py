from typing import Iterable, List, Optional, Protocol

from ..entities import Appointment, PatientType


class AppointmentsRepository(Protocol):
    """Appointment collection, kept in insertion order."""

    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        ...

    def list_all(self) -> List[Appointment]:
        ...

    def list_for_patient(self, patient_id: str) -> List[Appointment]:
        ...

    def list_in_series(self, series_id: str) -> List[Appointment]:
        ...

    def add_many(self, appointments: Iterable[Appointment]) -> None:
        ...

    def replace(self, appointment: Appointment) -> None:
        ...

    def delete_ids(self, appointment_ids: Iterable[str]) -> int:
        ...

    def delete_for_patient(self, patient_id: str) -> int:
        ...

    def sync_patient(self, patient_id: str, patient_name: str, patient_type: PatientType) -> int:
        ...
