import logging
import threading

from sqlalchemy.engine import Engine
from sqlmodel import Session

from ....application.ports.unit_of_work import UnitOfWork
from .repositories.appointments_repository_sql import SqlAppointmentsRepository
from .repositories.patients_repository_sql import SqlPatientsRepository

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):
    """One session per outermost block, committed or rolled back as a whole."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._lock = threading.RLock()
        self._depth = 0
        self.session = None
        self.patients = None
        self.appointments = None

    def __enter__(self) -> "SqlUnitOfWork":
        self._lock.acquire()
        if self._depth == 0:
            self.session = Session(self._engine, expire_on_commit=False)
            self.patients = SqlPatientsRepository(self.session)
            self.appointments = SqlAppointmentsRepository(self.session)
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self._depth -= 1
            if self._depth == 0:
                try:
                    if exc_type is None:
                        self.session.commit()
                    else:
                        logger.warning(f"Rolling back transaction after {exc_type.__name__}")
                        self.session.rollback()
                finally:
                    self.session.close()
                    self.session = None
        finally:
            self._lock.release()
