"""Settings: verifies database URL normalization and environment selection."""

from purchase_service.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    settings = Settings(_env_file=None, database_url="postgres://u:p@h:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@h:5432/db"


def test_environment_specific_url_wins():
    settings = Settings(
        _env_file=None,
        environment="production",
        database_url="postgresql://u:p@h/default",
        database_url_production="postgresql://u:p@h/prod",
    )
    assert settings.resolved_database_url == "postgresql+asyncpg://u:p@h/prod"


def test_falls_back_to_database_url():
    settings = Settings(
        _env_file=None, environment="develop", database_url="postgresql://u:p@h/default",
    )
    assert settings.resolved_database_url == "postgresql+asyncpg://u:p@h/default"


def test_treasury_defaults():
    settings = Settings(_env_file=None)
    assert settings.treasury_rates_timeout_seconds == 10
    assert settings.treasury_rates_cache_ttl_seconds == 300
