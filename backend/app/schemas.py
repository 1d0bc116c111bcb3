from typing import Any, Dict, List, Mapping
from pydantic import BaseModel, Field, ValidationError, field_validator

from app.core.errors import ShopValidationError
from app.models.shop import UNKNOWN_LOCATION


# --- Shop requests ---
class ShopPayload(BaseModel):
    """Form fields accepted by create and update."""

    owner_name: str = Field(..., alias="ownerName", min_length=1)
    contact_number: str = Field(..., alias="contactNumber", min_length=1)
    shop_number: str = Field(..., alias="shopNumber", min_length=1)
    address: str = Field(..., alias="address", min_length=1)
    description: str = Field(..., alias="description", min_length=1)
    latitude: str = Field(..., alias="latitude", min_length=1)
    longitude: str = Field(..., alias="longitude", min_length=1)

    class Config:
        populate_by_name = True

    @field_validator("*")
    @classmethod
    def not_blank(cls, value: str) -> str:
        # Stored as sent; only whitespace-only values are rejected
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_form(cls, fields: Mapping[str, Any]) -> "ShopPayload":
        """Validate raw form fields, raising ShopValidationError on absent or empty ones."""
        try:
            return cls.model_validate(dict(fields))
        except ValidationError as e:
            missing = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
            raise ShopValidationError(missing) from e


# --- Shop responses ---
class LocationResponse(BaseModel):
    latitude: str
    longitude: str
    placeName: str = UNKNOWN_LOCATION


class ShopResponse(BaseModel):
    id: str = Field(..., validation_alias="external_id")
    ownerName: str = Field(..., validation_alias="owner_name")
    contactNumber: str = Field(..., validation_alias="contact_number")
    shopNumber: str = Field(..., validation_alias="shop_number")
    address: str
    description: str
    photo: str = ""
    timestamp: str
    location: LocationResponse

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    fields: List[str] = []


def location_document(payload: ShopPayload, place_name: str) -> Dict[str, str]:
    return {
        "latitude": payload.latitude,
        "longitude": payload.longitude,
        "placeName": place_name,
    }
