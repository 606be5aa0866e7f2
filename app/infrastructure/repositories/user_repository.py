"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def exists(self, user_id: str) -> bool:
        return self.db.execute(select(User.id).where(User.id == user_id)).first() is not None

    def add(self, obj_in: Any) -> Optional[User]:
        # the unique index on email settles concurrent signups
        try:
            return self.create(obj_in)
        except IntegrityError:
            self.db.rollback()
            return None
