from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./deptpilot.db"

    # Window that new student worker blocks must fall inside
    SCHEDULE_DAY_START: str = "08:00"
    SCHEDULE_DAY_END: str = "17:00"

    # Current semester; unset means statuses are evaluated against today
    SEMESTER_START_DATE: Optional[str] = None
    SEMESTER_END_DATE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
