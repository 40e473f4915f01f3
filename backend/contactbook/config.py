"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Loaded once per process: get_settings() is cached (lru_cache), no hot reload
    - Credentials only come from the environment / .env (DATABASE_URL)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - duplicate_status_code defaults to 200: existing clients expect an
      informational 200 for a duplicate mobile or name; 409 is opt-in
    - expose_internal_errors defaults to True for the same compatibility reason
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"  # nosec B104
    port: int = 9000

    # Database
    database_url: str = (
        "postgresql+asyncpg://contacts:contacts@db:5432/contacts"
    )
    database_name: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Store behaviour
    store_timeout_seconds: float = 10.0
    store_connect_max_retries: int = 3
    store_connect_base_delay_ms: int = 500
    store_connect_max_delay_ms: int = 10_000

    # Domain policy
    duplicate_status_code: int = 200
    enforce_group_reference: bool = False
    expose_internal_errors: bool = True

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_database_url(self) -> str:
        """database_url with database_name substituted when one is configured."""
        if not self.database_name:
            return self.database_url
        url = make_url(self.database_url).set(database=self.database_name)
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
