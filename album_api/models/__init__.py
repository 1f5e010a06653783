"""
Database models package.
All models are exported here for easy import.
"""
from album_api.models.album import Album
from album_api.models.photo import Photo
from album_api.models.review import Review

__all__ = ["Album", "Photo", "Review"]
