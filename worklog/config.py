"""Application configuration via environment variables."""

import json
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: str = '["http://localhost:3000"]'

    # "today" for snapshot ratios is resolved in this zone
    TIMEZONE: str = "Asia/Tokyo"

    # Work-hour arithmetic
    STANDARD_HOURS_PER_DAY: float = 7.5
    WEEKLY_REPORT_COLUMNS: int = 36

    # Rate limiting (slowapi)
    RATE_LIMIT_DEFAULT: str = "60/minute"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string into a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
