"""Spotify API routes — token exchange, playlist proxy and playlist favorites."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool

from app.application.services.favorites_service import (
    add_favorite,
    is_favorite,
    list_favorites,
    remove_favorite,
    validate_user_id,
)
from app.application.services.spotify_service import (
    exchange_authorization_code,
    get_favorite_playlist_details,
    get_playlist_tracks,
    pick_random_meditation_audio,
    search_playlists,
)
from app.core.exceptions import InvalidInputException
from app.domain.models.favorite import FavoriteKind
from app.domain.repositories.favorite_repository import FavoriteRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import MessageResponse
from app.domain.schemas.favorite import (
    FavoritePlaylistDetails,
    FavoriteStatus,
    PlaylistFavoriteCreated,
    PlaylistFavoriteRead,
    PlaylistFavoriteRequest,
)
from app.domain.schemas.spotify import (
    RandomAudio,
    SpotifyAccess,
    TokenExchangeRequest,
    TokenExchangeResponse,
)
from app.infrastructure.spotify_api import SpotifyAPIClient
from app.interfaces.api.deps import require_spotify_access
from app.interfaces.deps import get_favorite_repository, get_spotify_client, get_user_repository

router = APIRouter(prefix="/api", tags=["Spotify"])


@router.post("/spotify/token", response_model=TokenExchangeResponse)
async def spotify_token(
    body: TokenExchangeRequest,
    client: SpotifyAPIClient = Depends(get_spotify_client),
):
    return await exchange_authorization_code(client, body.code, body.redirect_uri)


@router.get("/spotify/playlists")
async def spotify_playlists(
    q: Optional[str] = None,
    access: SpotifyAccess = Depends(require_spotify_access),
    client: SpotifyAPIClient = Depends(get_spotify_client),
):
    return {"playlists": await search_playlists(client, access.access_token, q)}


@router.get("/spotify/playlists/{playlist_id}/tracks")
async def spotify_playlist_tracks(
    playlist_id: str,
    access: SpotifyAccess = Depends(require_spotify_access),
    client: SpotifyAPIClient = Depends(get_spotify_client),
):
    return await get_playlist_tracks(client, access.access_token, playlist_id)


@router.get("/playlists/meditation/random-audio", response_model=RandomAudio)
async def random_meditation_audio(
    access: SpotifyAccess = Depends(require_spotify_access),
    client: SpotifyAPIClient = Depends(get_spotify_client),
):
    return await pick_random_meditation_audio(client, access.access_token)


# Playlist favorites

@router.get("/user/spotify-favorites/details", response_model=list[FavoritePlaylistDetails])
async def favorite_playlist_details(
    user_id: Optional[str] = Query(None, alias="userId"),
    access: SpotifyAccess = Depends(require_spotify_access),
    client: SpotifyAPIClient = Depends(get_spotify_client),
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    user_id = validate_user_id(user_id)
    # ORM calls block
    entries = await run_in_threadpool(list_favorites, users, favorites, FavoriteKind.PLAYLIST, user_id)
    return await get_favorite_playlist_details(client, access.access_token, entries)


@router.post(
    "/user/spotify-favorites/add",
    response_model=PlaylistFavoriteCreated,
    status_code=status.HTTP_201_CREATED,
)
def add_playlist_favorite(
    body: PlaylistFavoriteRequest,
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    if not isinstance(body.playlist_name, str):
        raise InvalidInputException("Invalid input: userId, contentId, and playlistName must be strings.")

    favorite = add_favorite(
        users, favorites, FavoriteKind.PLAYLIST, body.user_id, body.content_id, label=body.playlist_name
    )
    return PlaylistFavoriteCreated(
        favorite=PlaylistFavoriteRead(
            content_id=favorite.content_id,
            playlist_name=favorite.label,
            added_at=favorite.added_at,
        )
    )


@router.post("/user/spotify-favorites/remove", response_model=MessageResponse)
def remove_playlist_favorite(
    body: PlaylistFavoriteRequest,
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    remove_favorite(users, favorites, FavoriteKind.PLAYLIST, body.user_id, body.content_id)
    return MessageResponse(message="Playlist removed from favorites.")


@router.get("/user/spotify-favorites/status", response_model=FavoriteStatus)
def playlist_favorite_status(
    user_id: Optional[str] = Query(None, alias="userId"),
    content_id: Optional[str] = Query(None, alias="contentId"),
    users: UserRepository = Depends(get_user_repository),
    favorites: FavoriteRepository = Depends(get_favorite_repository),
):
    return FavoriteStatus(is_favorite=is_favorite(users, favorites, FavoriteKind.PLAYLIST, user_id, content_id))
