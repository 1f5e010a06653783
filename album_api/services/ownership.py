"""
Ownership coordination between the credential store (user documents and
their ``albums``/``photos`` reference arrays) and the relational store
(rows carrying ``ownerid``/``userid``).

The two stores are written independently. A resource is inserted into
the relational store first and its id appended to the owner's document
second; if the second write fails the row stays, without an owner
reference, and the failure is logged and counted only.
"""
from typing import List, Optional

from album_api.exceptions import Conflict, StoreFailure
from album_api.models.album import Album
from album_api.models.photo import Photo
from album_api.services.credential_store import REFERENCE_FIELDS, CredentialStore
from album_api.services.resource_store import ResourceStore
from album_api.utils.logger import log_info, log_warning
from album_api.utils.prometheus_metrics import ownership_attach_failures_total
from album_api.utils.security import hash_password


class OwnershipService:
    """
    Keeps user reference lists in step with owned relational rows.
    """

    def __init__(self, resources: Optional[ResourceStore], credentials: CredentialStore):
        self.resources = resources
        self.credentials = credentials

    async def register_user(self, user_id: str, email: str, password: str) -> str:
        """
        Create a user document with empty reference lists.

        Args:
            user_id: Requested unique user identifier
            email: Contact email
            password: Plain text password (only its hash is stored)

        Returns:
            The new document id

        Raises:
            Conflict: If ``user_id`` is already registered
        """
        existing = await self.credentials.get_user(user_id)
        if existing:
            log_warning("Registration failed", event="auth", user_id=user_id, reason="user_exists")
            raise Conflict()

        document = {
            "userID": user_id,
            "email": email,
            "password": hash_password(password),
            "albums": [],
            "photos": [],
        }
        inserted_id = await self.credentials.insert_user(document)
        log_info("Registration", event="auth", user_id=user_id)
        return inserted_id

    async def attach_resource(self, kind: str, resource_id: int, owner_id: str) -> bool:
        """
        Record ``resource_id`` on the owner's document. Best-effort.

        Args:
            kind: "album" or "photo"
            resource_id: Id of the relational row just inserted
            owner_id: userID of the owner

        Returns:
            True if the reference was recorded
        """
        if kind not in REFERENCE_FIELDS:
            raise ValueError(f"Unknown resource kind: {kind}")

        try:
            attached = await self.credentials.push_reference(owner_id, kind, resource_id)
        except StoreFailure:
            attached = False

        if not attached:
            ownership_attach_failures_total.labels(kind=kind).inc()
            log_warning(
                "Owner reference not recorded",
                event="ownership",
                kind=kind,
                resource_id=resource_id,
                owner_id=owner_id,
            )
        return attached

    async def list_owned_albums(self, owner_id: str) -> List[Album]:
        """Albums whose ``ownerid`` is ``owner_id``. Empty if none; the user is not checked."""
        return await self.resources.get_albums_by_owner(owner_id)

    async def list_owned_photos(self, owner_id: str) -> List[Photo]:
        """Photos whose ``userid`` is ``owner_id``. Empty if none; the user is not checked."""
        return await self.resources.get_photos_by_user(owner_id)
