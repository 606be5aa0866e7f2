"""
SQLAlchemy Implementation of Favorite Repository.

Add and remove are single statements: the unique constraint on
(user_id, kind, content_id) decides membership on insert, so two concurrent
adds of the same entry cannot both succeed.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.models.favorite import Favorite, FavoriteKind
from app.domain.repositories.favorite_repository import FavoriteRepository


class SQLAlchemyFavoriteRepository(FavoriteRepository):
    """Favorite repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, user_id: str, kind: FavoriteKind, content_id: str, label: Optional[str] = None) -> Optional[Favorite]:
        favorite = Favorite(user_id=user_id, kind=kind.value, content_id=content_id, label=label)
        self.db.add(favorite)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(favorite)
        return favorite

    def remove(self, user_id: str, kind: FavoriteKind, content_id: str) -> int:
        result = self.db.execute(
            delete(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.kind == kind.value,
                Favorite.content_id == content_id,
            )
        )
        self.db.commit()
        return result.rowcount or 0

    def contains(self, user_id: str, kind: FavoriteKind, content_id: str) -> bool:
        row = self.db.execute(
            select(Favorite.id).where(
                Favorite.user_id == user_id,
                Favorite.kind == kind.value,
                Favorite.content_id == content_id,
            )
        ).first()
        return row is not None

    def list_for_user(self, user_id: str, kind: FavoriteKind) -> List[Favorite]:
        return list(
            self.db.execute(
                select(Favorite)
                .where(Favorite.user_id == user_id, Favorite.kind == kind.value)
                .order_by(Favorite.added_at.asc(), Favorite.id.asc())
            ).scalars()
        )
