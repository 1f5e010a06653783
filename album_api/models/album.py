"""
Album model. Owner identity lives in the credential store, so ``ownerid``
is a plain column rather than a foreign key.
"""
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from album_api.database import Base


class Album(Base):
    """Album owned by a user (``ownerid`` -> users.userID)."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ownerid: Mapped[str] = mapped_column(String(255), index=True, nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str] = mapped_column(String(64), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Album(id={self.id}, ownerid={self.ownerid})>"
