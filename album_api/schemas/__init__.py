"""
Pydantic schemas package.
All schemas are exported here for easy import.
"""
from album_api.schemas.user import (
    UserResponse,
    UserCreated,
    Token,
    TokenPayload,
)
from album_api.schemas.photo import (
    PhotoResponse,
    PhotoCreated,
    PhotoLinks,
    PhotoList,
)
from album_api.schemas.review import ReviewResponse
from album_api.schemas.album import (
    AlbumResponse,
    AlbumDetail,
    AlbumPage,
    AlbumCreated,
    AlbumLinks,
    AlbumList,
)

__all__ = [
    # User schemas
    "UserResponse",
    "UserCreated",
    "Token",
    "TokenPayload",
    # Photo schemas
    "PhotoResponse",
    "PhotoCreated",
    "PhotoLinks",
    "PhotoList",
    # Review schemas
    "ReviewResponse",
    # Album schemas
    "AlbumResponse",
    "AlbumDetail",
    "AlbumPage",
    "AlbumCreated",
    "AlbumLinks",
    "AlbumList",
]
