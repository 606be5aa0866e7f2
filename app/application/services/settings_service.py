"""Settings service — the practice schedule stored on the user record."""

from typing import Any, Optional

from app.core.exceptions import EntityNotFoundException, InvalidInputException
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.settings import SettingsRead


def _get_user(repo: UserRepository, user_id: str) -> User:
    user = repo.get_by_id(user_id)
    if not user:
        raise EntityNotFoundException("User not found.")
    return user


def _validate(time: Optional[str], days: Any) -> None:
    if not time or not isinstance(days, list):
        raise InvalidInputException("Time and days are required.")


def get_settings_for_user(repo: UserRepository, user_id: str) -> SettingsRead:
    user = _get_user(repo, user_id)
    return SettingsRead(
        time=user.time or "",
        days=list(user.days or []),
        has_completed_settings=bool(user.has_completed_settings),
    )


def create_settings(repo: UserRepository, user_id: str, time: Optional[str], days: Any) -> User:
    """First save of the schedule; marks onboarding as complete."""
    _validate(time, days)
    user = _get_user(repo, user_id)
    return repo.update(user, {"time": time, "days": list(days), "has_completed_settings": True})


def update_settings(repo: UserRepository, user_id: str, time: Optional[str], days: Any) -> User:
    _validate(time, days)
    user = _get_user(repo, user_id)
    return repo.update(user, {"time": time, "days": list(days)})
