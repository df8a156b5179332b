"""Application settings.

Hey future me - everything tunable lives here and comes from environment
variables (prefix ``PLAYREIGN_``, nested with ``__``) or a ``.env`` file:

    PLAYREIGN_LOG_LEVEL=DEBUG
    PLAYREIGN_TIMELINE__DISPLAY_CUTOFF=2010-01-01
    PLAYREIGN_OBSERVABILITY__LOG_JSON_FORMAT=true

Call ``get_settings()`` instead of building Settings yourself - it is cached,
so the environment is read once per process. Tests that tweak the env must
call ``get_settings.cache_clear()``.
"""

from datetime import date
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseModel):
    """Logging output settings."""

    log_json_format: bool = Field(
        default=False, description="Emit JSON logs (production) instead of plain text"
    )
    slow_operation_ms: int = Field(
        default=500, ge=0, description="Timeline builds slower than this log a warning"
    )


class TimelineSettings(BaseModel):
    """Settings for the top played timelines."""

    display_cutoff: date = Field(
        default=date(2005, 2, 14),
        description="Reigns that ended before this date are hidden from the timeline",
    )
    podium_size: int = Field(
        default=3, ge=1, description="How many places a podium snapshot tracks"
    )


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYREIGN_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "playreign"
    log_level: str = "INFO"
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    timeline: TimelineSettings = Field(default_factory=TimelineSettings)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
