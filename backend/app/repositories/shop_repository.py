"""
Persistence boundary for shop documents, keyed by external id.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import RepositoryError, ShopConflictError, ShopNotFoundError
from app.models.shop import Shop

logger = logging.getLogger(__name__)

# Fields copied by replace(); the internal key and external_id never change
REPLACEABLE_FIELDS = (
    "owner_name",
    "contact_number",
    "shop_number",
    "address",
    "description",
    "photo",
    "timestamp",
    "location",
)


class ShopRepository(ABC):
    """Abstract shop store."""

    @abstractmethod
    def create(self, shop: Shop) -> Shop: ...

    @abstractmethod
    def find_all(self) -> List[Shop]: ...

    @abstractmethod
    def find_by_id(self, external_id: str) -> Optional[Shop]: ...

    @abstractmethod
    def replace(self, external_id: str, shop: Shop) -> Shop: ...

    @abstractmethod
    def delete_by_id(self, external_id: str) -> None: ...


class SqlShopRepository(ShopRepository):
    """ShopRepository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, shop: Shop) -> Shop:
        try:
            self.db.add(shop)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.find_by_id(shop.external_id) is not None:
                raise ShopConflictError(shop.external_id) from e
            raise RepositoryError(f"Failed to insert shop {shop.external_id}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to insert shop {shop.external_id}") from e
        return shop

    def find_all(self) -> List[Shop]:
        try:
            return self.db.query(Shop).order_by(Shop.id).all()
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to query shops") from e

    def find_by_id(self, external_id: str) -> Optional[Shop]:
        try:
            return self.db.query(Shop).filter(Shop.external_id == external_id).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to query shop {external_id}") from e

    def replace(self, external_id: str, shop: Shop) -> Shop:
        stored = self.find_by_id(external_id)
        if stored is None:
            raise ShopNotFoundError(external_id)

        if stored is not shop:
            for field in REPLACEABLE_FIELDS:
                setattr(stored, field, getattr(shop, field))
        # JSON columns are not mutation-tracked
        stored.location = dict(shop.location)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to replace shop {external_id}") from e
        return stored

    def delete_by_id(self, external_id: str) -> None:
        try:
            deleted = (
                self.db.query(Shop)
                .filter(Shop.external_id == external_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to delete shop {external_id}") from e

        if not deleted:
            raise ShopNotFoundError(external_id)
