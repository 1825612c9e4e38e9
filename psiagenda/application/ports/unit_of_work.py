from typing import Protocol

from .appointments_repo import AppointmentsRepository
from .patients_repo import PatientsRepository


class UnitOfWork(Protocol):
    """One writer at a time; commit on clean exit, roll back on exception.

    Entering is re-entrant, only the outermost block commits.
    """
    patients: PatientsRepository
    appointments: AppointmentsRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...
