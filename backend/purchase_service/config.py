"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - resolved_database_url always carries the asyncpg driver for PostgreSQL URLs

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Environment-specific URLs (DATABASE_URL_DEVELOP / DATABASE_URL_PRODUCTION)
      take precedence over DATABASE_URL when the matching ENVIRONMENT is active
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TREASURY_RATES_URL = (
    "https://api.fiscaldata.treasury.gov/services/api/fiscal_service/"
    "v1/accounting/od/rates_of_exchange"
)


def _to_asyncpg_url(url: str) -> str:
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return url.replace(prefix, "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: str = "development"

    # Database
    database_url: str = (
        "postgresql+asyncpg://purchases:purchases@db:5432/purchases"
    )
    database_url_develop: str | None = None
    database_url_production: str | None = None
    database_pool_size: int = 20
    database_max_overflow: int = 10

    @field_validator(
        "database_url", "database_url_develop", "database_url_production",
        mode="before",
    )
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out postgres:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            return _to_asyncpg_url(v.strip())
        return v

    # Treasury rates of exchange
    treasury_rates_base_url: str = TREASURY_RATES_URL
    treasury_rates_timeout_seconds: int = 10
    treasury_rates_user_agent: str = "purchase-service/1.0"
    treasury_rates_cache_ttl_seconds: int = 300

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_database_url(self) -> str:
        """Database URL for the active environment, falling back to DATABASE_URL."""
        specific = {
            "develop": self.database_url_develop,
            "production": self.database_url_production,
        }.get(self.environment.strip().lower())
        return specific or self.database_url


@lru_cache
def get_settings() -> Settings:
    return Settings()
