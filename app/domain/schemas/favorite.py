"""Pydantic schemas for favorite lists."""

from datetime import datetime
from typing import Optional

from app.domain.schemas.auth import CamelModel


class FavoriteRequest(CamelModel):
    user_id: Optional[str] = None
    content_id: Optional[str] = None


class PlaylistFavoriteRequest(FavoriteRequest):
    playlist_name: Optional[str] = None


class FavoriteStatus(CamelModel):
    is_favorite: bool


class FavoriteRead(CamelModel):
    content_id: str
    added_at: datetime
    label: Optional[str] = None


class PlaylistFavoriteRead(CamelModel):
    content_id: str
    playlist_name: Optional[str] = None
    added_at: datetime


class PlaylistFavoriteCreated(CamelModel):
    message: str = "Playlist added to favorites successfully."
    favorite: PlaylistFavoriteRead


class FavoritePlaylistDetails(CamelModel):
    id: str
    name: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    uri: Optional[str] = None
    tracks: Optional[dict] = None
    added_at: datetime
