from functools import lru_cache
from typing import Optional
import logging

from fastapi import Depends

from .config import settings
from .application.ports.ai_provider import AIProvider
from .application.ports.unit_of_work import UnitOfWork
from .application.services.clinical_text_service import ClinicalTextService
from .application.services.reports_service import ReportsService
from .application.services.scheduling_service import SchedulingService
from .infrastructure.audit.std_logger import StdAuditLogger
from .infrastructure.persistence.memory.unit_of_work import InMemoryUnitOfWork

logger = logging.getLogger(__name__)


@lru_cache()
def get_unit_of_work() -> UnitOfWork:
    if settings.uses_sql_storage:
        from .database import engine
        from .infrastructure.persistence.sqlalchemy.unit_of_work_sql import SqlUnitOfWork
        logger.info("Using SQL storage backend")
        return SqlUnitOfWork(engine)
    logger.info("Using in-memory storage backend")
    return InMemoryUnitOfWork()


@lru_cache()
def get_ai_provider() -> Optional[AIProvider]:
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not configured")
        return None
    try:
        from .infrastructure.ai.gemini_provider import GeminiProvider
        return GeminiProvider(api_key=settings.GEMINI_API_KEY, default_model=settings.GEMINI_MODEL)
    except Exception as e:
        logger.error(f"Error initializing Gemini AI: {e}")
        return None


def get_scheduling_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> SchedulingService:
    return SchedulingService(
        uow=uow,
        audit=StdAuditLogger(),
        total_occurrences=settings.SERIES_TOTAL_OCCURRENCES,
        default_duration_minutes=settings.DEFAULT_DURATION_MINUTES,
    )


def get_text_service(provider: Optional[AIProvider] = Depends(get_ai_provider)) -> ClinicalTextService:
    return ClinicalTextService(
        provider=provider,
        practitioner_name=settings.PRACTITIONER_NAME,
        practitioner_registration=settings.PRACTITIONER_REGISTRATION,
        notes_model=settings.GEMINI_MODEL,
        report_model=settings.GEMINI_REPORT_MODEL,
    )


def get_reports_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    text: ClinicalTextService = Depends(get_text_service),
) -> ReportsService:
    return ReportsService(uow=uow, text=text)
