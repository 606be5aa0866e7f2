"""Settings API routes — the user's practice schedule."""

from fastapi import APIRouter, Depends, status

from app.application.services.settings_service import (
    create_settings,
    get_settings_for_user,
    update_settings,
)
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.settings import (
    SettingsCompletion,
    SettingsCreated,
    SettingsPayload,
    SettingsRead,
    SettingsUpdated,
)
from app.interfaces.api.deps import get_current_user_id
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("", response_model=SettingsRead)
def read_settings(
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repository),
):
    return get_settings_for_user(repo, user_id)


@router.post("", response_model=SettingsCreated, status_code=status.HTTP_201_CREATED)
def save_settings(
    body: SettingsPayload,
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repository),
):
    user = create_settings(repo, user_id, body.time, body.days)
    return SettingsCreated(
        time=user.time,
        days=user.days,
        user=SettingsCompletion(has_completed_settings=user.has_completed_settings),
    )


@router.put("", response_model=SettingsUpdated)
def change_settings(
    body: SettingsPayload,
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repository),
):
    user = update_settings(repo, user_id, body.time, body.days)
    return SettingsUpdated(time=user.time, days=user.days)
