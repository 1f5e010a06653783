"""
Photo-related Pydantic schemas for responses.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class PhotoResponse(BaseModel):
    """Schema for a stored photo."""

    id: int
    userid: str
    albumid: int
    caption: Optional[str] = None
    data: str

    model_config = ConfigDict(from_attributes=True)


class PhotoCreated(BaseModel):
    id: int
    links: Dict[str, str]


class PhotoLinks(BaseModel):
    links: Dict[str, str]


class PhotoList(BaseModel):
    photos: List[PhotoResponse]
