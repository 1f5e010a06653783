"""
Review-related Pydantic schemas for responses.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ReviewResponse(BaseModel):
    id: int
    userid: str
    albumid: int
    rating: int
    review: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
