from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="INFO")
    json_format: bool = Field(default=False)
    format: str = Field(default="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    file_path: Optional[str] = Field(default=None)
    max_bytes: int = Field(default=10 * 1024 * 1024)
    backup_count: int = Field(default=5)

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")


class PersistenceSettings(BaseSettings):
    """Settings for the simulated backend persistence gateway."""

    delay_seconds: float = Field(default=1.0, ge=0)
    failure_rate: float = Field(default=0.1, ge=0, le=1)
    seed: Optional[int] = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="PERSIST_", extra="ignore")


class SpreadsheetSettings(BaseSettings):
    """Spreadsheet import/export settings."""

    max_file_size: int = 10 * 1024 * 1024  # 10MB in bytes
    max_reported_errors: int = Field(default=3, ge=1)

    model_config = SettingsConfigDict(env_prefix="SPREADSHEET_", extra="ignore")


class Settings(BaseSettings):
    PROJECT_NAME: str = Field(default="Fleet Admin")
    VERSION: str = Field(default="0.1.0")
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    API_PREFIX: str = Field(default="/api/v1")
    BACKEND_CORS_ORIGINS: List[str] = Field(default=["*"])
    SEED_DEMO_DATA: bool = Field(default=True)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    persistence: PersistenceSettings = Field(default_factory=PersistenceSettings)
    spreadsheet: SpreadsheetSettings = Field(default_factory=SpreadsheetSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
