"""
Relational resource store: albums, photos and reviews.

Each method is a single statement. Mutations commit immediately so the
affected-row count a caller sees is the one the store applied. Any
SQLAlchemy failure is logged and re-raised as ``StoreFailure`` carrying a
generic message.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from album_api.database import Base
from album_api.exceptions import StoreFailure
from album_api.models.album import Album
from album_api.models.photo import Photo
from album_api.models.review import Review
from album_api.utils.logger import log_error
from album_api.utils.prometheus_metrics import db_errors_total

ModelT = TypeVar("ModelT", bound=Base)


class ResourceStore:
    """
    Thin access layer over the relational tables.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str, message: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            db_errors_total.labels(store="sql").inc()
            log_error(
                "Relational store call failed",
                event="db",
                operation=operation,
                error_type=type(e).__name__,
                error_message=str(e)[:200],
            )
            await self.db.rollback()
            raise StoreFailure(message) from e

    # ============== Generic ==============

    async def count(self, model: Type[ModelT]) -> int:
        async with self._guard("count", "Error fetching list.  Please try again later."):
            result = await self.db.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    async def get_page(self, model: Type[ModelT], offset: int, limit: int) -> List[ModelT]:
        """Rows ``[offset, offset + limit)`` in ascending ``id`` order."""
        async with self._guard("get_page", "Error fetching list.  Please try again later."):
            result = await self.db.execute(
                select(model).order_by(model.id).offset(offset).limit(limit)
            )
            return list(result.scalars().all())

    async def get_by_id(self, model: Type[ModelT], row_id: int) -> Optional[ModelT]:
        async with self._guard("get_by_id", "Unable to fetch resource.  Please try again later."):
            result = await self.db.execute(select(model).where(model.id == row_id))
            return result.scalar_one_or_none()

    async def find_by(self, model: Type[ModelT], column: str, value: Any) -> List[ModelT]:
        """All rows whose ``column`` equals ``value``, ordered by ``id``."""
        async with self._guard("find_by", "Unable to fetch resources.  Please try again later."):
            result = await self.db.execute(
                select(model)
                .where(getattr(model, column) == value)
                .order_by(model.id)
            )
            return list(result.scalars().all())

    async def insert(self, model: Type[ModelT], values: Dict[str, Any]) -> int:
        """Insert a row and return its new id. Any client-supplied id is ignored."""
        values = {k: v for k, v in values.items() if k != "id"}
        async with self._guard("insert", "Error inserting into DB.  Please try again later."):
            row = model(**values)
            self.db.add(row)
            await self.db.flush()
            row_id = row.id
            await self.db.commit()
            return row_id

    async def update_by_id(self, model: Type[ModelT], row_id: int, values: Dict[str, Any]) -> bool:
        """Overwrite columns of one row. Returns False when no row matched."""
        values = {k: v for k, v in values.items() if k != "id"}
        async with self._guard("update", "Unable to update resource.  Please try again later."):
            result = await self.db.execute(
                update(model)
                .where(model.id == row_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            return result.rowcount > 0

    async def delete_by_id(self, model: Type[ModelT], row_id: int) -> bool:
        """Delete one row. Returns False when no row matched."""
        async with self._guard("delete", "Unable to delete resource.  Please try again later."):
            result = await self.db.execute(
                delete(model)
                .where(model.id == row_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            return result.rowcount > 0

    # ============== Typed helpers ==============

    async def get_albums_by_owner(self, owner_id: str) -> List[Album]:
        return await self.find_by(Album, "ownerid", owner_id)

    async def get_photos_by_user(self, user_id: str) -> List[Photo]:
        return await self.find_by(Photo, "userid", user_id)

    async def get_photos_by_album(self, album_id: int) -> List[Photo]:
        return await self.find_by(Photo, "albumid", album_id)

    async def get_reviews_by_album(self, album_id: int) -> List[Review]:
        return await self.find_by(Review, "albumid", album_id)
