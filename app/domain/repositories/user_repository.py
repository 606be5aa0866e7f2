"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import Any, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Exact (case-sensitive) email lookup."""
        ...

    def exists(self, user_id: str) -> bool:
        """Check whether a user with this ID exists."""
        ...

    def add(self, obj_in: Any) -> Optional[User]:
        """Insert a user; return None if the email is already taken."""
        ...
