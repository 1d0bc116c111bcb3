"""
Tests for environment configuration
"""
import pytest
from pydantic import ValidationError

from app.config import Settings
from app.database import Database
from app.models.shop import Shop


@pytest.mark.unit
class TestSettings:

    def test_missing_database_url_is_fatal(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_database_url_is_fatal(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./data/shops.db")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("GEOCODER_TIMEOUT", "2.5")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///./data/shops.db"
        assert settings.PORT == 8080
        assert settings.GEOCODER_TIMEOUT == 2.5
        assert settings.GEOCODER_URL == "https://nominatim.openstreetmap.org/reverse"


@pytest.mark.unit
class TestDatabaseHandle:

    def test_connect_and_close(self):
        database = Database("sqlite:///:memory:")

        database.connect()
        session = database.session()
        try:
            assert session.query(Shop).count() == 0
        finally:
            session.close()
        database.close()

        with pytest.raises(RuntimeError):
            database.session()

    def test_session_before_connect_fails(self):
        with pytest.raises(RuntimeError):
            Database("sqlite:///:memory:").session()
