"""
Photo service: creation, read, replacement with ownership guard.
"""
from typing import Any, Dict, Optional

from album_api.exceptions import Forbidden, InvalidInput
from album_api.models.photo import Photo
from album_api.services.ownership import OwnershipService
from album_api.services.resource_store import ResourceStore
from album_api.utils.logger import log_info, log_warning
from album_api.utils.validation import (
    PHOTO_FIELDS,
    extract_valid_fields,
    fits_db_int,
    validate_against_schema,
)

INVALID_PHOTO = "Request body is not a valid photo object."
OWNERSHIP_MISMATCH = "Updated photo must have the same albumid and userid"


def prepare_photo_fields(payload: Any) -> Dict[str, Any]:
    """
    Validate and project a photo body, normalizing ``albumid`` to int.

    Raises:
        InvalidInput: If a required field is missing or malformed
    """
    if not validate_against_schema(payload, PHOTO_FIELDS):
        raise InvalidInput(INVALID_PHOTO)
    fields = extract_valid_fields(payload, PHOTO_FIELDS)

    albumid = fields["albumid"]
    if isinstance(albumid, bool):
        raise InvalidInput(INVALID_PHOTO)
    try:
        fields["albumid"] = int(albumid)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(INVALID_PHOTO)
    if not fits_db_int(fields["albumid"]):
        raise InvalidInput(INVALID_PHOTO)

    if not isinstance(fields["data"], str):
        raise InvalidInput(INVALID_PHOTO)

    fields["userid"] = str(fields["userid"])
    fields.setdefault("caption", None)
    if fields["caption"] is not None:
        fields["caption"] = str(fields["caption"])
    return fields


class PhotoService:
    """
    Service for handling photo operations.
    """

    def __init__(self, resources: ResourceStore, ownership: Optional[OwnershipService] = None):
        self.resources = resources
        self.ownership = ownership

    async def create_photo(self, payload: Any) -> Dict[str, Any]:
        """
        Insert a photo and record it on its owner's document.

        Returns:
            The stored fields plus the new ``id``
        """
        fields = prepare_photo_fields(payload)
        photo_id = await self.resources.insert(Photo, fields)
        log_info("Photo created", event="photo", photo_id=photo_id, album_id=fields["albumid"])
        if self.ownership is not None:
            await self.ownership.attach_resource("photo", photo_id, fields["userid"])
        return {**fields, "id": photo_id}

    async def get_photo(self, photo_id: int) -> Optional[Photo]:
        return await self.resources.get_by_id(Photo, photo_id)

    async def replace_photo(self, photo_id: Optional[int], payload: Any) -> Optional[Dict[str, Any]]:
        """
        Replace a photo's fields while keeping its album and owner.

        Returns:
            The applied fields, or None if the photo does not exist

        Raises:
            InvalidInput: If the body is incomplete
            Forbidden: If ``albumid`` or ``userid`` differ from the stored photo
        """
        fields = prepare_photo_fields(payload)

        if photo_id is None:
            return None
        existing = await self.resources.get_by_id(Photo, photo_id)
        if existing is None:
            return None

        if fields["albumid"] != existing.albumid or fields["userid"] != existing.userid:
            log_warning(
                "Photo update rejected",
                event="photo",
                photo_id=photo_id,
                reason="ownership_mismatch",
            )
            raise Forbidden(OWNERSHIP_MISMATCH)

        updated = await self.resources.update_by_id(Photo, photo_id, fields)
        if not updated:
            # 조회와 갱신 사이에 삭제된 경우
            return None
        return fields
