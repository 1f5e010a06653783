"""
Photo model. ``data`` is stored as an opaque string; decoding it is not
this service's concern.
"""
from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from album_api.database import Base


class Photo(Base):
    """Photo belonging to an album and owned by a user."""

    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    userid: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    albumid: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    caption: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, albumid={self.albumid})>"
