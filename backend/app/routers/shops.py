"""
Shop API endpoints: list, retrieve, create, update and delete.
"""

import logging
from typing import List, Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    status,
)

from app.config import settings
from app.core.errors import (
    DependencyFailure,
    ShopConflictError,
    ShopNotFoundError,
    ShopValidationError,
)
from app.core.limiter import limiter
from app.dependencies import get_shop_service
from app.schemas import ErrorResponse, MessageResponse, ShopResponse
from app.services.shop_service import ShopService

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Shop not found"

error_responses = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def shop_form(
    owner_name: Optional[str] = Form(None, alias="ownerName"),
    contact_number: Optional[str] = Form(None, alias="contactNumber"),
    shop_number: Optional[str] = Form(None, alias="shopNumber"),
    address: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    latitude: Optional[str] = Form(None),
    longitude: Optional[str] = Form(None),
) -> dict:
    """Collect the shop form fields; presence is checked by the service."""
    fields = {
        "ownerName": owner_name,
        "contactNumber": contact_number,
        "shopNumber": shop_number,
        "address": address,
        "description": description,
        "latitude": latitude,
        "longitude": longitude,
    }
    return {key: value for key, value in fields.items() if value is not None}


def bad_request(exc: ShopValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": str(exc), "fields": exc.missing},
    )


@router.get("", response_model=List[ShopResponse], responses=error_responses)
async def list_shops(service: ShopService = Depends(get_shop_service)):
    """List all shops."""
    try:
        return service.list_shops()
    except DependencyFailure as e:
        logger.error(f"Failed to fetch shops: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch shops")


@router.get("/{shop_id}", response_model=ShopResponse, responses=error_responses)
async def get_shop(shop_id: str, service: ShopService = Depends(get_shop_service)):
    """Get a single shop by its id."""
    try:
        return service.get_shop(shop_id)
    except ShopNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except DependencyFailure as e:
        logger.error(f"Failed to fetch shop {shop_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch shop")


@router.post(
    "",
    response_model=ShopResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses,
)
@limiter.limit(settings.RATE_LIMIT)
async def create_shop(
    request: Request,
    fields: dict = Depends(shop_form),
    photo: Optional[UploadFile] = File(None),
    service: ShopService = Depends(get_shop_service),
):
    """
    Create a shop. The place name is resolved from latitude/longitude.
    """
    try:
        return await service.create_shop(fields, photo)
    except ShopValidationError as e:
        raise bad_request(e)
    except ShopConflictError as e:
        logger.error(f"Failed to create shop: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Shop already exists")
    except DependencyFailure as e:
        logger.error(f"Failed to create shop: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create shop")


@router.put("/{shop_id}", response_model=ShopResponse, responses=error_responses)
@limiter.limit(settings.RATE_LIMIT)
async def update_shop(
    request: Request,
    shop_id: str,
    fields: dict = Depends(shop_form),
    photo: Optional[UploadFile] = File(None),
    service: ShopService = Depends(get_shop_service),
):
    """
    Replace a shop's fields; a new photo supersedes the old one.
    """
    try:
        return await service.update_shop(shop_id, fields, photo)
    except ShopValidationError as e:
        raise bad_request(e)
    except ShopNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except DependencyFailure as e:
        logger.error(f"Failed to update shop {shop_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update shop")


@router.delete("/{shop_id}", response_model=MessageResponse, responses=error_responses)
@limiter.limit(settings.RATE_LIMIT)
async def delete_shop(
    request: Request,
    shop_id: str,
    service: ShopService = Depends(get_shop_service),
):
    """Delete a shop and its photo."""
    try:
        return service.delete_shop(shop_id)
    except ShopNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except DependencyFailure as e:
        logger.error(f"Failed to delete shop {shop_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete shop")
