"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cross-field rules (storage backend, moderation
threshold, office hours) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have development defaults; production deployments set
    DATABASE_URL (postgresql+asyncpg://...) and SECRET_KEY.
    """

    # App
    app_name: str = "campus-events"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: any SQLAlchemy async URL (asyncpg in production, aiosqlite for dev/tests)
    database_url: str = "sqlite+aiosqlite:///./campus_events.db"
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py; ignored for SQLite)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Security (identity tokens are issued by the auth collaborator; we only verify)
    secret_key: SecretStr = SecretStr("change-me")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    admin_role: str = "admin"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Image storage
    storage_backend: str = "local"
    storage_root: str = "./storage/event-images"
    storage_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_image_bytes: int = 5 * 1024 * 1024  # 5MB

    # Moderation: active events with this many reports move to under_review.
    report_threshold: int = 3
    # Public discovery shows under_review events (with a pending badge) when True.
    public_include_under_review: bool = True

    # Listing
    default_page_size: int = 12
    max_page_size: int = 100

    # Calendar: day/week/month bounds and office hours are evaluated in this zone.
    campus_timezone: str = "UTC"
    office_hours_start: int = 8
    office_hours_end: int = 18
    max_event_lead_days: int = 14

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_storage_and_moderation(self) -> "Settings":
        """Validate storage backend, moderation threshold, and office-hour bounds."""
        if self.storage_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when storage_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        if self.report_threshold < 1:
            raise ValueError("REPORT_THRESHOLD must be at least 1")
        if not 0 <= self.office_hours_start < self.office_hours_end <= 24:
            raise ValueError(
                "Office hours must satisfy 0 <= OFFICE_HOURS_START < OFFICE_HOURS_END <= 24"
            )
        if self.default_page_size < 1 or self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
