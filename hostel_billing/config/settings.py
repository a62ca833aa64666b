"""
Environment configuration for the hostel billing engine.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Application configuration
    APP_NAME: str = Field(default="Hostel Billing Engine", alias="PROJECT_NAME")
    API_VERSION: str = Field(default="v1", alias="PROJECT_VERSION")
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = Field(default=["*"], alias="BACKEND_CORS_ORIGINS")

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hostel_billing.db"
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_ECHO: bool = False
    DB_CONNECT_ARGS: Dict[str, Any] = {}

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE: Optional[str] = None
    ENABLE_STRUCTURED_LOGGING: bool = True
    LOG_SQL_QUERIES: bool = False

    # Billing rules
    CURRENCY: str = "INR"
    SETTLEMENT_TOLERANCE: Decimal = Decimal("0.01")
    RATE_CHANGE_TOLERANCE: Decimal = Decimal("0.01")
    BILLING_SYSTEM_ACTOR: str = "checkout_settlement_system"
    DEFAULT_PAYMENT_METHOD: str = "CASH"
    ENABLE_BILLING_NOTIFICATIONS: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in {"json", "text"}:
            raise ValueError(f"Invalid log format: {v}")
        return fmt

    @field_validator("SETTLEMENT_TOLERANCE", "RATE_CHANGE_TOLERANCE")
    @classmethod
    def validate_tolerance(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Tolerance must be positive")
        return v

    def get_database_url(self) -> str:
        return self.DATABASE_URL

    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
