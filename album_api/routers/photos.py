"""
Photos router for photo management.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from album_api.database import get_db
from album_api.exceptions import AppError, Forbidden, NotFound
from album_api.mongo import get_users_collection
from album_api.schemas.photo import PhotoCreated, PhotoLinks, PhotoResponse
from album_api.services.credential_store import CredentialStore
from album_api.services.ownership import OwnershipService
from album_api.services.photo import PhotoService
from album_api.services.resource_store import ResourceStore
from album_api.utils.prometheus_metrics import photo_operations_total
from album_api.utils.validation import parse_resource_id

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.post(
    "",
    response_model=PhotoCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new photo",
)
async def create_photo(
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    users=Depends(get_users_collection),
) -> PhotoCreated:
    """
    Create a new photo.

    - **userid**, **albumid**, **data**: required
    - **caption**: optional
    """
    resources = ResourceStore(db)
    ownership = OwnershipService(resources, CredentialStore(users))
    photo_service = PhotoService(resources, ownership)
    try:
        photo = await photo_service.create_photo(payload)
    except AppError:
        photo_operations_total.labels(operation="create", result="failure").inc()
        raise
    photo_operations_total.labels(operation="create", result="success").inc()
    return PhotoCreated(
        id=photo["id"],
        links={
            "photo": f"/photos/{photo['id']}",
            "album": f"/albums/{photo['albumid']}",
        },
    )


@router.get(
    "/{photo_id}",
    response_model=PhotoResponse,
    summary="Get photo",
)
async def get_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
) -> PhotoResponse:
    parsed_id = parse_resource_id(photo_id)
    if parsed_id is None:
        raise NotFound()
    photo = await PhotoService(ResourceStore(db)).get_photo(parsed_id)
    if photo is None:
        raise NotFound()
    return PhotoResponse.model_validate(photo)


@router.put(
    "/{photo_id}",
    response_model=PhotoLinks,
    summary="Replace photo",
)
async def replace_photo(
    photo_id: str,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> PhotoLinks:
    """
    Replace a photo's caption and data.

    The body must repeat the photo's current **albumid** and **userid**;
    changing either is rejected with 403.
    """
    photo_service = PhotoService(ResourceStore(db))
    parsed_id = parse_resource_id(photo_id)
    try:
        fields = await photo_service.replace_photo(parsed_id, payload)
    except Forbidden:
        photo_operations_total.labels(operation="update", result="forbidden").inc()
        raise
    except AppError:
        photo_operations_total.labels(operation="update", result="failure").inc()
        raise
    if fields is None:
        raise NotFound()
    photo_operations_total.labels(operation="update", result="success").inc()
    return PhotoLinks(
        links={
            "photo": f"/photos/{parsed_id}",
            "album": f"/albums/{fields['albumid']}",
        },
    )
