# psiagenda/config.py
import os
from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra='ignore')

    # Application Settings
    APP_NAME: str = "PsiAgenda API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Storage: "memory" keeps everything in process, "sql" uses DATABASE_URL
    STORAGE_BACKEND: str = os.environ.get("STORAGE_BACKEND", "memory")
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite:///./psiagenda.db")

    # CORS Settings
    ALLOWED_ORIGINS: str = os.environ.get("ALLOWED_ORIGINS", "*")

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # AI Settings
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_REPORT_MODEL: str = os.environ.get("GEMINI_REPORT_MODEL", "gemini-2.5-pro")

    # Practitioner signature used in generated reports
    PRACTITIONER_NAME: str = "Arthur Castilho"
    PRACTITIONER_REGISTRATION: str = "CRP 01/24909"

    # Calendar
    CALENDAR_HOURS_START: int = 8
    CALENDAR_HOURS_END: int = 19
    CALENDAR_WEEK_DAYS: int = 6  # Monday to Saturday

    # Scheduling
    SERIES_TOTAL_OCCURRENCES: int = Field(default=12, ge=1)  # base appointment included
    DEFAULT_DURATION_MINUTES: int = Field(default=50, gt=0)

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def uses_sql_storage(self) -> bool:
        return self.STORAGE_BACKEND.strip().lower() == "sql"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings: Settings = get_settings()
