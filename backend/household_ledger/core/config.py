"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union
from household_ledger.models.policy import ZeroIncomePolicy, RoundingPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Household Ledger"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./household_ledger.db"
    DB_ECHO: bool = False
    DB_ISOLATION_LEVEL: str = "SERIALIZABLE"  # Settlement recompute relies on this (or the advisory lock on PostgreSQL)

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Settlement defaults, used when a household has no policy row
    DEFAULT_ZERO_INCOME_POLICY: ZeroIncomePolicy = ZeroIncomePolicy.EXCLUDE
    DEFAULT_ROUNDING_POLICY: RoundingPolicy = RoundingPolicy.ROUND

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
