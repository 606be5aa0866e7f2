"""Favorites service — video, audio and playlist favorite lists."""

import re
from typing import Any, List, Optional

import structlog

from app.application.services.catalog_service import get_yoga_videos
from app.core.exceptions import ConflictException, EntityNotFoundException, InvalidInputException
from app.domain.models.favorite import Favorite, FavoriteKind
from app.domain.repositories.favorite_repository import FavoriteRepository
from app.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)

USER_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
SCHEME_HOST_PATTERN = re.compile(r"^https?://[^/]+")

ALREADY_PRESENT = {
    FavoriteKind.VIDEO: "Video already in favorites",
    FavoriteKind.AUDIO: "Audio already in favorites",
    FavoriteKind.PLAYLIST: "Playlist is already in favorites.",
}


def normalize_content_id(content_id: str) -> str:
    """'https://host/path' and '/path' name the same content."""
    return SCHEME_HOST_PATTERN.sub("", content_id)


def validate_user_id(user_id: Optional[str]) -> str:
    if not isinstance(user_id, str) or not USER_ID_PATTERN.match(user_id):
        raise InvalidInputException("Invalid or missing userId")
    return user_id


def _require_content_id(content_id: Optional[str]) -> str:
    if not isinstance(content_id, str) or not content_id:
        raise InvalidInputException("Invalid or missing contentId")
    return normalize_content_id(content_id)


def _require_user(users: UserRepository, user_id: str) -> None:
    if not users.exists(user_id):
        raise EntityNotFoundException("User not found")


def add_favorite(
    users: UserRepository,
    favorites: FavoriteRepository,
    kind: FavoriteKind,
    user_id: Optional[str],
    content_id: Optional[str],
    label: Optional[str] = None,
) -> Favorite:
    user_id = validate_user_id(user_id)
    content_id = _require_content_id(content_id)
    _require_user(users, user_id)

    favorite = favorites.add(user_id, kind, content_id, label)
    if favorite is None:
        raise ConflictException(ALREADY_PRESENT[kind])

    logger.info("Favorite added", user_id=user_id, kind=kind.value, content_id=content_id)
    return favorite


def remove_favorite(
    users: UserRepository,
    favorites: FavoriteRepository,
    kind: FavoriteKind,
    user_id: Optional[str],
    content_id: Optional[str],
) -> None:
    """Removing something that is not in the list is not an error."""
    user_id = validate_user_id(user_id)
    content_id = _require_content_id(content_id)
    _require_user(users, user_id)

    removed = favorites.remove(user_id, kind, content_id)
    logger.info("Favorite removed", user_id=user_id, kind=kind.value, content_id=content_id, removed=removed)


def is_favorite(
    users: UserRepository,
    favorites: FavoriteRepository,
    kind: FavoriteKind,
    user_id: Optional[str],
    content_id: Optional[str],
) -> bool:
    """Only a bad or unknown user is an error; no content id is simply not a favorite."""
    user_id = validate_user_id(user_id)
    _require_user(users, user_id)
    if not isinstance(content_id, str) or not content_id:
        return False
    return favorites.contains(user_id, kind, normalize_content_id(content_id))


def list_favorites(
    users: UserRepository,
    favorites: FavoriteRepository,
    kind: FavoriteKind,
    user_id: str,
) -> List[Favorite]:
    _require_user(users, user_id)
    return favorites.list_for_user(user_id, kind)


def list_resolved_videos(
    users: UserRepository,
    favorites: FavoriteRepository,
    user_id: str,
) -> List[dict[str, Any]]:
    """Catalog entries for the user's favorite videos, in catalog order.

    Favorites that match no catalog video are dropped.
    """
    favorite_ids = {
        normalize_content_id(f.content_id)
        for f in list_favorites(users, favorites, FavoriteKind.VIDEO, user_id)
    }
    if not favorite_ids:
        return []

    return [
        video
        for video in get_yoga_videos()
        if normalize_content_id(video.get("videoUrl", "")) in favorite_ids
    ]
