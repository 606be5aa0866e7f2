"""Favorites API routes — video and audio favorite lists."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.application.services.favorites_service import (
    add_favorite,
    is_favorite,
    list_favorites,
    list_resolved_videos,
    remove_favorite,
)
from app.domain.models.favorite import FavoriteKind
from app.domain.repositories.favorite_repository import FavoriteRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import MessageResponse
from app.domain.schemas.favorite import FavoriteRead, FavoriteRequest, FavoriteStatus
from app.interfaces.api.deps import get_current_user_id
from app.interfaces.deps import get_favorite_repository, get_user_repository

router = APIRouter(prefix="/api", tags=["Favorites"])


# Video

@router.post("/favorites/video/add", response_model=MessageResponse)
def add_video(
    body: FavoriteRequest,
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    add_favorite(users, favorites, FavoriteKind.VIDEO, body.user_id, body.content_id)
    return MessageResponse(message="Video added to favorites")


@router.post("/favorites/video/remove", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_video(
    body: FavoriteRequest,
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    remove_favorite(users, favorites, FavoriteKind.VIDEO, body.user_id, body.content_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/favoritevideos", response_model=FavoriteStatus)
def video_status(
    user_id: Optional[str] = Query(None, alias="userId"),
    content_id: Optional[str] = Query(None, alias="contentId"),
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    return FavoriteStatus(is_favorite=is_favorite(users, favorites, FavoriteKind.VIDEO, user_id, content_id))


@router.get("/favorites")
def my_favorite_videos(
    user_id: str = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    """Catalog entries of the logged-in user's favorite videos."""
    return list_resolved_videos(users, favorites, user_id)


# Audio

@router.post("/favorites/audio/add", response_model=MessageResponse)
def add_audio(
    body: FavoriteRequest,
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    add_favorite(users, favorites, FavoriteKind.AUDIO, body.user_id, body.content_id)
    return MessageResponse(message="Audio added to favorites")


@router.post("/favorites/audio/remove", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_audio(
    body: FavoriteRequest,
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    remove_favorite(users, favorites, FavoriteKind.AUDIO, body.user_id, body.content_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/favorites/audio/status", response_model=FavoriteStatus)
def audio_status(
    user_id: Optional[str] = Query(None, alias="userId"),
    content_id: Optional[str] = Query(None, alias="contentId"),
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    return FavoriteStatus(is_favorite=is_favorite(users, favorites, FavoriteKind.AUDIO, user_id, content_id))


@router.get("/favorites/audio", response_model=list[FavoriteRead])
def my_favorite_audio(
    user_id: str = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    return [FavoriteRead.model_validate(f) for f in list_favorites(users, favorites, FavoriteKind.AUDIO, user_id)]
