from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "rostering"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Any SQLAlchemy URL; SQLite is used for local runs and tests
    DATABASE_URL: str = "sqlite:///./rostering.db"
    SQL_ECHO: bool = False

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"
    LOG_SQL: bool = False

    # Employee list import
    IMPORT_MAX_ROWS: int = 5000
    DEFAULT_CONTRACT_NAME: str = "Default Contract"

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("IMPORT_MAX_ROWS")
    @classmethod
    def positive_import_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("IMPORT_MAX_ROWS must be at least 1")
        return v


settings = Settings()
