"""
Services package.
Contains business logic and the two store adapters.
"""
from album_api.services.resource_store import ResourceStore
from album_api.services.credential_store import CredentialStore
from album_api.services.auth import AuthService
from album_api.services.ownership import OwnershipService
from album_api.services.album import AlbumService
from album_api.services.photo import PhotoService

__all__ = [
    "ResourceStore",
    "CredentialStore",
    "AuthService",
    "OwnershipService",
    "AlbumService",
    "PhotoService",
]
