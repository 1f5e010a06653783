"""
Album service: listing, creation, composite detail read, replacement, deletion.
"""
from typing import Any, Dict, Optional

from album_api.config import get_settings
from album_api.exceptions import InvalidInput
from album_api.models.album import Album
from album_api.schemas.album import AlbumDetail, AlbumPage, AlbumResponse
from album_api.schemas.photo import PhotoResponse
from album_api.schemas.review import ReviewResponse
from album_api.services.ownership import OwnershipService
from album_api.services.resource_store import ResourceStore
from album_api.utils.logger import log_info
from album_api.utils.pagination import paginate
from album_api.utils.validation import ALBUM_FIELDS, extract_valid_fields, validate_against_schema

settings = get_settings()

INVALID_ALBUM = "Request body is not a valid album object."


def prepare_album_fields(payload: Any) -> Dict[str, Any]:
    """
    Validate and project an album body.

    Raises:
        InvalidInput: If a required field is missing
    """
    if not validate_against_schema(payload, ALBUM_FIELDS):
        raise InvalidInput(INVALID_ALBUM)
    fields = extract_valid_fields(payload, ALBUM_FIELDS)
    # PUT 은 전체 교체이므로 선택 필드가 없으면 NULL 로 덮어씀
    fields.setdefault("email", None)
    for key in ("ownerid", "name", "date"):
        fields[key] = str(fields[key])
    if fields["email"] is not None:
        fields["email"] = str(fields["email"])
    return fields


class AlbumService:
    """
    Service for handling album operations.
    """

    def __init__(self, resources: ResourceStore, ownership: Optional[OwnershipService] = None):
        self.resources = resources
        self.ownership = ownership

    async def get_albums_page(self, requested_page: int) -> AlbumPage:
        """
        Return one page of all albums ordered by id.

        Args:
            requested_page: Page asked for; clamped into the valid range
        """
        total_count = await self.resources.count(Album)
        window = paginate(requested_page, total_count, settings.albums_page_size)
        albums = await self.resources.get_page(Album, window.offset, window.page_size)
        return AlbumPage(
            albums=[AlbumResponse.model_validate(a) for a in albums],
            pageNumber=window.page_number,
            totalPages=window.total_pages,
            pageSize=window.page_size,
            totalCount=window.total_count,
            links=window.links,
        )

    async def create_album(self, payload: Any) -> int:
        """
        Insert an album and record it on its owner's document.

        Returns:
            The new album id
        """
        fields = prepare_album_fields(payload)
        album_id = await self.resources.insert(Album, fields)
        log_info("Album created", event="album", album_id=album_id, owner_id=fields["ownerid"])
        if self.ownership is not None:
            await self.ownership.attach_resource("album", album_id, fields["ownerid"])
        return album_id

    async def get_album_detail(self, album_id: int) -> Optional[AlbumDetail]:
        """
        Fetch an album, then its reviews, then its photos.

        Each step runs only after the previous one resolved; a missing
        album stops the chain and yields None.
        """
        album = await self.resources.get_by_id(Album, album_id)
        if album is None:
            return None

        reviews = await self.resources.get_reviews_by_album(album_id)
        photos = await self.resources.get_photos_by_album(album_id)

        return AlbumDetail(
            **AlbumResponse.model_validate(album).model_dump(),
            reviews=[ReviewResponse.model_validate(r) for r in reviews],
            photos=[PhotoResponse.model_validate(p) for p in photos],
        )

    async def replace_album(self, album_id: Optional[int], payload: Any) -> bool:
        """
        Overwrite every album field. Returns False if the album does not exist.
        The body is validated before the id is looked at.

        A changed ``ownerid`` is recorded on the new owner's document. The
        id is not removed from the previous owner's ``albums`` list.
        """
        fields = prepare_album_fields(payload)
        if album_id is None:
            return False
        existing = await self.resources.get_by_id(Album, album_id)
        if existing is None:
            return False
        previous_owner = existing.ownerid

        updated = await self.resources.update_by_id(Album, album_id, fields)
        if updated and self.ownership is not None and fields["ownerid"] != previous_owner:
            await self.ownership.attach_resource("album", album_id, fields["ownerid"])
        return updated

    async def delete_album(self, album_id: int) -> bool:
        """Delete an album. Returns False if it does not exist."""
        deleted = await self.resources.delete_by_id(Album, album_id)
        if deleted:
            log_info("Album deleted", event="album", album_id=album_id)
        return deleted
