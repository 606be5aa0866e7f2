"""Favorite domain model — one row per entry of a user's favorite list."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class FavoriteKind(str, enum.Enum):
    VIDEO = "video"
    AUDIO = "audio"
    PLAYLIST = "playlist"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (
        # membership is unique per list per user; inserts rely on this
        UniqueConstraint("user_id", "kind", "content_id", name="uq_favorites_user_kind_content"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    kind = Column(String(20), nullable=False)
    content_id = Column(String(1000), nullable=False)
    label = Column(String(500), nullable=True)
    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="favorites")

    def __repr__(self):
        return f"<Favorite {self.kind}:{self.content_id}>"
