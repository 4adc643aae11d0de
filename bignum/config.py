"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="BIGNUM_",
    )

    # Application
    app_name: str = "bignum"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_socket_timeout: float = 5.0

    # Numeric context (decimal128 with truncating rounding)
    decimal_precision: int = Field(default=34, ge=1)
    decimal_rounding: str = "ROUND_DOWN"
    decimal_emax: int = 6144
    decimal_emin: int = -6143
    max_value_length: int = Field(default=4096, ge=1)

    # Optimistic transactions
    max_watch_retries: int = Field(default=32, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
