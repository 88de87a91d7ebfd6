# oncoliving/core/settings.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PROJECT_NAME: str = "oncoliving-checkin"
    VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite:///oncoliving.db"

    # shared key for the x-api-key header (set by the gateway in front of us)
    API_KEY: str = "change-me"

    # IANA zone that defines "today" for the one-response-per-day rule.
    # None means the process local time.
    CHECKIN_TIMEZONE: Optional[str] = None

    HISTORY_DEFAULT_LIMIT: int = 30
    HISTORY_MAX_LIMIT: int = 365

    LOG_LEVEL: str = "INFO"
    ALLOW_ALL_CORS: bool = False
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    DEBUG: bool = False
    FASTAPI_ROOT_PATH: str = ""
    BUILD_TAG: str = "dev"

    def today(self) -> date:
        """Current calendar date in the check-in timezone."""
        if self.CHECKIN_TIMEZONE:
            return datetime.now(ZoneInfo(self.CHECKIN_TIMEZONE)).date()
        return date.today()


settings = Settings()
