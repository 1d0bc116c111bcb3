"""
Error taxonomy shared by the shop services and routers.
"""

from typing import Iterable


class ShopError(Exception):
    """Base class for shop lifecycle errors."""


class ShopValidationError(ShopError):
    """Required form fields are missing or empty."""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Missing required fields: {', '.join(self.missing)}")


class ShopNotFoundError(ShopError):
    """No shop exists for the given external id."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(f"Shop {external_id} not found")


class ShopConflictError(ShopError):
    """A shop with the same external id already exists."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(f"Shop {external_id} already exists")


class DependencyFailure(ShopError):
    """The store or the filesystem failed."""


class RepositoryError(DependencyFailure):
    pass


class AssetStoreError(DependencyFailure):
    pass
