"""
Favorite Repository Interface.
Membership operations on a user's favorite lists.
"""

from typing import List, Optional, Protocol

from app.domain.models.favorite import Favorite, FavoriteKind


class FavoriteRepository(Protocol):
    """Interface for favorite-list operations. Content IDs arrive normalized."""

    def add(self, user_id: str, kind: FavoriteKind, content_id: str, label: Optional[str] = None) -> Optional[Favorite]:
        """Insert an entry; return None if it is already in the list."""
        ...

    def remove(self, user_id: str, kind: FavoriteKind, content_id: str) -> int:
        """Delete matching entries and return how many were removed."""
        ...

    def contains(self, user_id: str, kind: FavoriteKind, content_id: str) -> bool:
        """Membership check."""
        ...

    def list_for_user(self, user_id: str, kind: FavoriteKind) -> List[Favorite]:
        """Entries of one list, oldest first."""
        ...
