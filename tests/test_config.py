"""Tests for environment configuration.

Run with: pytest tests/test_config.py -v
"""

from lotto_room.config import DEFAULT_SQLITE_URL, get_config, resolve_database_url


class TestResolveDatabaseUrl:
    """Tests for resolve_database_url."""

    def test_explicit_url_wins(self):
        """DATABASE_URL is used as is."""
        env = {"DATABASE_URL": "sqlite:///tmp/x.db", "PGHOST": "db", "PGUSER": "u", "PGDATABASE": "d"}
        assert resolve_database_url(env) == "sqlite:///tmp/x.db"

    def test_postgres_from_pg_vars(self):
        """PG* variables assemble a psycopg2 URL."""
        env = {"PGHOST": "db", "PGUSER": "lotto", "PGPASSWORD": "pw", "PGDATABASE": "rooms", "PGPORT": "6543"}

        url = resolve_database_url(env)

        assert url.startswith("postgresql+psycopg2://lotto:pw@db:6543/rooms")
        assert "sslmode=prefer" in url

    def test_bad_port_falls_back_to_default(self):
        """A non-numeric PGPORT uses 5432."""
        env = {"PGHOST": "db", "PGUSER": "lotto", "PGDATABASE": "rooms", "PGPORT": "abc"}
        assert ":5432/" in resolve_database_url(env)

    def test_sqlite_fallback(self):
        """Incomplete PG settings fall back to the local sqlite file."""
        assert resolve_database_url({"PGHOST": "db"}) == DEFAULT_SQLITE_URL


class TestGetConfig:
    """Tests for get_config."""

    def test_testing_env(self, monkeypatch):
        """APP_ENV=testing selects the in-memory configuration."""
        monkeypatch.setenv("APP_ENV", "testing")
        config = get_config()
        assert config.TESTING is True
        assert config.STORE_BACKEND == "memory"

    def test_unknown_env_is_development(self, monkeypatch):
        """Unknown APP_ENV values fall back to development."""
        monkeypatch.setenv("APP_ENV", "staging")
        assert get_config().DEBUG is True
