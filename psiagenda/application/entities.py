from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
import uuid


class Recurrence(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class PatientType(str, Enum):
    PRIVATE = "private"
    INSURANCE = "insurance"


class DeleteMode(str, Enum):
    SINGLE = "single"
    SERIES = "series"


class ReportKind(str, Enum):
    TECHNICAL = "technical"
    SUPERVISION = "supervision"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(eq=False)
class Patient:
    id: str
    name: str
    type: PatientType = PatientType.PRIVATE
    created_at: datetime = field(default_factory=utc_now)
    email: Optional[str] = None
    phone: Optional[str] = None
    cpf: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Patient) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(eq=False)
class Appointment:
    id: str
    patient_id: str
    patient_name: str
    date: date
    start_time: str  # "HH:MM"
    duration_minutes: int = 50
    notes: str = ""
    recurrence: Recurrence = Recurrence.NONE
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    patient_type: PatientType = PatientType.PRIVATE
    series_id: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Appointment) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class AppointmentDraft:
    """Write shape for save_appointment.

    The patient is chosen explicitly: ``patient_id`` points at a stored
    patient, ``patient_name`` alone asks for a new one. A ``patient_id`` that
    is not stored yet is materialised with ``patient_name``.
    """
    date: Optional[date] = None
    start_time: Optional[str] = None
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    id: Optional[str] = None
    series_id: Optional[str] = None
    duration_minutes: Optional[int] = None
    notes: str = ""
    recurrence: Recurrence = Recurrence.NONE
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


@dataclass
class PatientDraft:
    name: Optional[str] = None
    id: Optional[str] = None
    type: PatientType = PatientType.PRIVATE
    email: Optional[str] = None
    phone: Optional[str] = None
    cpf: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class VisitSummary:
    patient_id: str
    total_appointments: int
    last_visit: Optional[date] = None
    next_visit: Optional[date] = None
