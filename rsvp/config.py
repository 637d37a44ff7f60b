"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Embedded invite database configuration."""

    path: Path = Path("/data/rsvp.db")

    # Seconds to wait for the file's exclusive lock before giving up
    lock_timeout: float = Field(default=1.0, gt=0)

    # Seconds a request waits for the store's single connection
    pool_timeout: float = Field(default=30.0, gt=0)

    @property
    def url(self) -> str:
        """SQLAlchemy URL for the database file."""
        return f"sqlite+aiosqlite:///{self.path}"


class RateLimitSettings(BaseModel):
    """Per-client token bucket configuration for the public API."""

    enabled: bool = True

    # Steady-state refill rate (tokens per second)
    rps: float = Field(default=1.0, gt=0)

    # Bucket capacity
    burst: int = Field(default=10, ge=1)

    # Buckets not touched for this many seconds are evicted
    idle_ttl: float = 180.0
    sweep_interval: float = 60.0

    # Use the first X-Forwarded-For entry as the client address
    trust_forwarded_for: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested values use ``__``:

        PORT=8080
        ADMIN_PORT=9090
        DATABASE__PATH=/data/rsvp.db
        SEED_FILE=/data/seed.json
        RATE_LIMIT__RPS=1
        RATE_LIMIT__BURST=10
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DATABASE__PATH syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 8080
    admin_port: int = 9090

    # Initial dataset; empty means seeding is disabled
    seed_file: Path | None = None

    database: DatabaseSettings = DatabaseSettings()
    rate_limit: RateLimitSettings = RateLimitSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @field_validator("seed_file", mode="before")
    @classmethod
    def empty_seed_file_disables_seeding(cls, v: object) -> object:
        """``SEED_FILE=""`` means no seed file, not the current directory."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
