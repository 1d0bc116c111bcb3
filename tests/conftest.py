"""
Pytest configuration - shared fixtures
"""
import sys
import os
import tempfile
from typing import Generator, List, Tuple

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "shop-api-test-uploads"))
os.environ.setdefault("RATE_LIMIT", "1000/minute")

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

from app.database import Base
from app.models.shop import Shop, UNKNOWN_LOCATION
from app.repositories.shop_repository import SqlShopRepository
from app.services.asset_store import AssetStore
from app.services.geocoding_service import GeocodingService
from app.services.shop_service import ShopService


class StubGeocoder:
    """Geocoder double recording every lookup."""

    def __init__(self, place_name: str = "London, UK"):
        self.place_name = place_name
        self.calls: List[Tuple[str, str]] = []

    async def resolve_place_name(self, latitude: str, longitude: str) -> str:
        self.calls.append((latitude, longitude))
        return self.place_name


class FakeUpload:
    """Minimal stand-in for fastapi.UploadFile."""

    def __init__(self, filename: str, content: bytes = b"fake image content"):
        self.filename = filename
        self.content = content

    async def read(self) -> bytes:
        return self.content


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Alias for test_db for clarity"""
    return test_db


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def asset_store(upload_dir) -> AssetStore:
    return AssetStore(upload_dir=str(upload_dir), url_prefix="/uploads")


@pytest.fixture
def stub_geocoder() -> StubGeocoder:
    return StubGeocoder()


@pytest.fixture
def repository(test_db) -> SqlShopRepository:
    return SqlShopRepository(test_db)


@pytest.fixture
def shop_service(repository, asset_store, stub_geocoder) -> ShopService:
    return ShopService(repository, asset_store, stub_geocoder)


@pytest.fixture
def mock_geocoder():
    """Build a GeocodingService answering through an httpx.MockTransport."""

    def _factory(handler, timeout: float = 1.0) -> GeocodingService:
        return GeocodingService(
            url="https://geocoder.test/reverse",
            timeout=timeout,
            user_agent="shop-api-tests/1.0",
            transport=httpx.MockTransport(handler),
        )

    return _factory


@pytest.fixture
def shop_form() -> dict:
    """Valid form fields for create and update"""
    return {
        "ownerName": "Jane Doe",
        "contactNumber": "+44 20 7946 0958",
        "shopNumber": "12B",
        "address": "221B Baker Street",
        "description": "Corner bakery",
        "latitude": "51.5074",
        "longitude": "-0.1278",
    }


@pytest.fixture
def populated_db(test_db):
    """Database with one stored shop"""
    shop = Shop(
        external_id="0b6f5c1e-3c1a-4c7e-9d55-9a3f4f2b7e10",
        owner_name="Jane Doe",
        contact_number="+44 20 7946 0958",
        shop_number="12B",
        address="221B Baker Street",
        description="Corner bakery",
        photo="",
        timestamp="2024-12-07 14:30:00",
        location={
            "latitude": "51.5074",
            "longitude": "-0.1278",
            "placeName": UNKNOWN_LOCATION,
        },
    )
    test_db.add(shop)
    test_db.commit()
    return test_db


@pytest.fixture
def fake_upload():
    return FakeUpload
