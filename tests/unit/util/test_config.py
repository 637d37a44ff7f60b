"""Unit tests for settings loading."""

from pathlib import Path

from rsvp.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "ADMIN_PORT", "DATABASE__PATH", "SEED_FILE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.admin_port == 9090
        assert settings.seed_file is None
        assert settings.rate_limit.rps == 1.0
        assert settings.rate_limit.burst == 10
        assert settings.rate_limit.idle_ttl == 180.0

    def test_nested_environment_overrides(self, monkeypatch, tmp_path):
        # Arrange
        monkeypatch.setenv("DATABASE__PATH", str(tmp_path / "invites.db"))
        monkeypatch.setenv("DATABASE__LOCK_TIMEOUT", "0.5")
        monkeypatch.setenv("RATE_LIMIT__BURST", "3")
        monkeypatch.setenv("SEED_FILE", "/data/seed.json")

        # Act
        settings = Settings(_env_file=None)

        # Assert
        assert settings.database.path == tmp_path / "invites.db"
        assert settings.database.lock_timeout == 0.5
        assert settings.database.url == f"sqlite+aiosqlite:///{tmp_path / 'invites.db'}"
        assert settings.rate_limit.burst == 3
        assert settings.seed_file == Path("/data/seed.json")

    def test_empty_seed_file_disables_seeding(self, monkeypatch):
        monkeypatch.setenv("SEED_FILE", "")

        settings = Settings(_env_file=None)

        assert settings.seed_file is None
