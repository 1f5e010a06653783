"""
Review model. Reviews are read as part of an album's detail view.
"""
from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from album_api.database import Base


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    userid: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    albumid: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    review: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, albumid={self.albumid})>"
