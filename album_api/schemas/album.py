"""
Album-related Pydantic schemas for responses.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from album_api.schemas.photo import PhotoResponse
from album_api.schemas.review import ReviewResponse


class AlbumResponse(BaseModel):
    """Schema for a stored album."""

    id: int
    ownerid: str
    name: str
    date: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AlbumDetail(AlbumResponse):
    """Album with its reviews and photos."""

    reviews: List[ReviewResponse] = []
    photos: List[PhotoResponse] = []


class AlbumPage(BaseModel):
    """One page of the album listing with navigation links."""

    albums: List[AlbumResponse]
    pageNumber: int
    totalPages: int
    pageSize: int
    totalCount: int
    links: Dict[str, str]


class AlbumCreated(BaseModel):
    id: int
    links: Dict[str, str]


class AlbumLinks(BaseModel):
    links: Dict[str, str]


class AlbumList(BaseModel):
    albums: List[AlbumResponse]
