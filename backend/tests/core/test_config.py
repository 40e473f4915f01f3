"""Settings - verifies URL normalisation and compatibility defaults."""

from contactbook.config import Settings


def test_bare_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_database_name_overrides_url_database():
    settings = Settings(
        database_url="postgresql+asyncpg://u:p@host:5432/db",
        database_name="contacts_prod",
    )
    assert settings.resolved_database_url == (
        "postgresql+asyncpg://u:p@host:5432/contacts_prod"
    )


def test_without_database_name_url_is_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///x.db", database_name=None)
    assert settings.resolved_database_url == "sqlite+aiosqlite:///x.db"


def test_compatibility_defaults():
    settings = Settings()
    assert settings.port == 9000
    assert settings.duplicate_status_code == 200
    assert settings.enforce_group_reference is False
    assert settings.expose_internal_errors is True
