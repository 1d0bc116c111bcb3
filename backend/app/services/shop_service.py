"""
Shop lifecycle service.

Orchestrates validation, reverse geocoding, photo storage and persistence for
create/read/update/delete of shop records. The service holds no state between
requests.
"""

import uuid
import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional

from fastapi import UploadFile

from app.core.errors import (
    AssetStoreError,
    DependencyFailure,
    ShopConflictError,
    ShopNotFoundError,
)
from app.models.shop import Shop
from app.repositories.shop_repository import ShopRepository
from app.schemas import ShopPayload, location_document
from app.services.asset_store import AssetStore
from app.services.geocoding_service import GeocodingService

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def current_timestamp() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def new_external_id() -> str:
    return str(uuid.uuid4())


class ShopService:
    def __init__(
        self,
        repository: ShopRepository,
        assets: AssetStore,
        geocoder: GeocodingService,
    ):
        self.repository = repository
        self.assets = assets
        self.geocoder = geocoder

    def list_shops(self) -> List[Shop]:
        return self.repository.find_all()

    def get_shop(self, external_id: str) -> Shop:
        shop = self.repository.find_by_id(external_id)
        if shop is None:
            raise ShopNotFoundError(external_id)
        return shop

    async def create_shop(
        self, fields: Mapping[str, Any], photo: Optional[UploadFile] = None
    ) -> Shop:
        """
        Create a shop from form fields and an optional photo.

        The place name is resolved before anything is written. If the record
        cannot be stored, the photo written for it is removed again.
        """
        payload = ShopPayload.from_form(fields)

        place_name = await self.geocoder.resolve_place_name(
            payload.latitude, payload.longitude
        )

        shop = Shop(
            external_id=new_external_id(),
            owner_name=payload.owner_name,
            contact_number=payload.contact_number,
            shop_number=payload.shop_number,
            address=payload.address,
            description=payload.description,
            location=location_document(payload, place_name),
        )

        staged = await self.assets.stage(photo)
        shop.photo = self.assets.finalize(staged)
        shop.timestamp = current_timestamp()

        try:
            self.repository.create(shop)
        except (DependencyFailure, ShopConflictError):
            self._discard(shop.photo)
            raise

        logger.info(f"Created shop {shop.external_id} ({shop.location['placeName']})")
        return shop

    async def update_shop(
        self,
        external_id: str,
        fields: Mapping[str, Any],
        photo: Optional[UploadFile] = None,
    ) -> Shop:
        """
        Replace every mutable field of a shop, and its photo when a new one is sent.

        The new photo is written and the record stored before the old photo is
        deleted, so the record never points at a missing file.
        """
        payload = ShopPayload.from_form(fields)

        shop = self.repository.find_by_id(external_id)
        if shop is None:
            raise ShopNotFoundError(external_id)

        place_name = await self.geocoder.resolve_place_name(
            payload.latitude, payload.longitude
        )

        previous_photo = shop.photo or ""
        shop.owner_name = payload.owner_name
        shop.contact_number = payload.contact_number
        shop.shop_number = payload.shop_number
        shop.address = payload.address
        shop.description = payload.description
        shop.location = location_document(payload, place_name)
        shop.timestamp = current_timestamp()

        staged = await self.assets.stage(photo)
        if staged is not None:
            shop.photo = self.assets.finalize(staged)

        try:
            shop = self.repository.replace(external_id, shop)
        except (DependencyFailure, ShopNotFoundError):
            if staged is not None:
                self._discard(self.assets.finalize(staged))
            raise

        if staged is not None and previous_photo and previous_photo != shop.photo:
            try:
                self.assets.remove(previous_photo)
            except AssetStoreError as e:
                # The record already points at the new photo; the old file is orphaned
                logger.error(
                    f"Shop {external_id} updated but old photo {previous_photo} "
                    f"could not be removed: {e}",
                    exc_info=True,
                )

        logger.info(f"Updated shop {external_id}")
        return shop

    def delete_shop(self, external_id: str) -> dict:
        shop = self.repository.find_by_id(external_id)
        if shop is None:
            raise ShopNotFoundError(external_id)

        # The record stays when its photo cannot be removed
        self.assets.remove(shop.photo or "")
        self.repository.delete_by_id(external_id)

        logger.info(f"Deleted shop {external_id}")
        return {"message": "Shop deleted"}

    def _discard(self, reference: str) -> None:
        try:
            self.assets.remove(reference)
        except AssetStoreError as e:
            logger.error(f"Could not clean up photo {reference}: {e}")
