"""
Shared API dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.repositories.shop_repository import SqlShopRepository
from app.services.asset_store import AssetStore
from app.services.geocoding_service import GeocodingService
from app.services.shop_service import ShopService


def get_asset_store() -> AssetStore:
    return AssetStore()


def get_geocoder() -> GeocodingService:
    return GeocodingService()


def get_shop_service(
    db: Session = Depends(get_db),
    assets: AssetStore = Depends(get_asset_store),
    geocoder: GeocodingService = Depends(get_geocoder),
) -> ShopService:
    """
    Build a ShopService for the current request.
    """
    return ShopService(SqlShopRepository(db), assets, geocoder)
