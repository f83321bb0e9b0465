import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using an absolute path for the local SQLite fallback.

    SQLite is only meant for local development and the CLI. Set DATABASE_URL
    to a PostgreSQL connection string for anything shared.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "focusramp.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.debug(f"Using local SQLite database: {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    snapshot_key_prefix: str = Field(
        default="focusRamp:activeSession:",
        validation_alias="SNAPSHOT_KEY_PREFIX",
        description="Key prefix for the per-user active session snapshot slot",
    )
    default_starting_minutes: int = Field(
        default=10,
        ge=1,
        validation_alias="DEFAULT_STARTING_MINUTES",
        description="Starting daily minutes when a plan request omits it",
    )
    max_training_dates: int = Field(
        default=1000,
        ge=1,
        validation_alias="MAX_TRAINING_DATES",
        description="Safety cap on dates emitted by the training date enumerator",
    )
    day_batch_size: int = Field(
        default=500,
        ge=1,
        validation_alias="DAY_BATCH_SIZE",
        description="Number of training days written per persistence batch",
    )
    tick_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        validation_alias="TICK_INTERVAL_SECONDS",
        description="Nominal interval between timer ticks in the CLI runner",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, value: str) -> str:
        """Warn when the Redis URL does not use a redis scheme."""
        if value and not value.startswith(("redis://", "rediss://", "unix://")):
            logger.warning(f"REDIS_URL should start with redis://, rediss:// or unix://, but got: {value}")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
