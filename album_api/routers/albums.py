"""
Albums router for album management.
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from album_api.database import get_db
from album_api.exceptions import AppError, NotFound
from album_api.mongo import get_users_collection
from album_api.schemas.album import AlbumCreated, AlbumDetail, AlbumLinks, AlbumPage
from album_api.services.album import AlbumService
from album_api.services.credential_store import CredentialStore
from album_api.services.ownership import OwnershipService
from album_api.services.resource_store import ResourceStore
from album_api.utils.pagination import parse_page
from album_api.utils.prometheus_metrics import album_operations_total
from album_api.utils.validation import parse_resource_id

router = APIRouter(prefix="/albums", tags=["Albums"])


def _album_id_or_404(raw: str) -> int:
    album_id = parse_resource_id(raw)
    if album_id is None:
        raise NotFound()
    return album_id


@router.get(
    "",
    response_model=AlbumPage,
    summary="List albums (paginated)",
)
async def get_albums(
    page: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> AlbumPage:
    """
    Return a page of albums ordered by id.

    - **page**: Page number; out-of-range values are clamped
    """
    album_service = AlbumService(ResourceStore(db))
    return await album_service.get_albums_page(parse_page(page))


@router.post(
    "",
    response_model=AlbumCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new album",
)
async def create_album(
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    users=Depends(get_users_collection),
) -> AlbumCreated:
    """
    Create a new album.

    - **ownerid**, **name**, **date**: required
    - **email**: optional
    """
    resources = ResourceStore(db)
    ownership = OwnershipService(resources, CredentialStore(users))
    album_service = AlbumService(resources, ownership)
    try:
        album_id = await album_service.create_album(payload)
    except AppError:
        album_operations_total.labels(operation="create", result="failure").inc()
        raise
    album_operations_total.labels(operation="create", result="success").inc()
    return AlbumCreated(id=album_id, links={"album": f"/albums/{album_id}"})


@router.get(
    "/{album_id}",
    response_model=AlbumDetail,
    summary="Get album with reviews and photos",
)
async def get_album(
    album_id: str,
    db: AsyncSession = Depends(get_db),
) -> AlbumDetail:
    album_service = AlbumService(ResourceStore(db))
    album = await album_service.get_album_detail(_album_id_or_404(album_id))
    if album is None:
        raise NotFound()
    return album


@router.put(
    "/{album_id}",
    response_model=AlbumLinks,
    summary="Replace album",
)
async def replace_album(
    album_id: str,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    users=Depends(get_users_collection),
) -> AlbumLinks:
    """
    Replace every field of an album. Omitted optional fields are cleared.
    """
    resources = ResourceStore(db)
    album_service = AlbumService(resources, OwnershipService(resources, CredentialStore(users)))
    parsed_id = parse_resource_id(album_id)
    try:
        updated = await album_service.replace_album(parsed_id, payload)
    except AppError:
        album_operations_total.labels(operation="update", result="failure").inc()
        raise
    if not updated:
        raise NotFound()
    album_operations_total.labels(operation="update", result="success").inc()
    return AlbumLinks(links={"album": f"/albums/{parsed_id}"})


@router.delete(
    "/{album_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete album",
)
async def delete_album(
    album_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    album_service = AlbumService(ResourceStore(db))
    deleted = await album_service.delete_album(_album_id_or_404(album_id))
    if not deleted:
        raise NotFound()
    album_operations_total.labels(operation="delete", result="success").inc()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
