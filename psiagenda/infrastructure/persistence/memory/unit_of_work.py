import logging
import threading

from ....application.ports.unit_of_work import UnitOfWork
from .repositories import InMemoryAppointmentsRepository, InMemoryPatientsRepository

logger = logging.getLogger(__name__)


class InMemoryUnitOfWork(UnitOfWork):
    """Process-local store. A failed block restores the snapshot taken on entry."""

    def __init__(self) -> None:
        self.patients = InMemoryPatientsRepository()
        self.appointments = InMemoryAppointmentsRepository()
        self._lock = threading.RLock()
        self._depth = 0
        self._snapshot = None

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._lock.acquire()
        if self._depth == 0:
            self._snapshot = (self.patients.snapshot(), self.appointments.snapshot())
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self._depth -= 1
            if self._depth == 0:
                if exc_type is not None:
                    logger.warning(f"Rolling back in-memory transaction after {exc_type.__name__}")
                    patients, appointments = self._snapshot
                    self.patients.restore(patients)
                    self.appointments.restore(appointments)
                self._snapshot = None
        finally:
            self._lock.release()
