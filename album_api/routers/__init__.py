"""
API routers package.
"""
from album_api.routers.albums import router as albums_router
from album_api.routers.photos import router as photos_router
from album_api.routers.users import router as users_router
from album_api.routers.health import router as health_router

__all__ = ["albums_router", "photos_router", "users_router", "health_router"]
