"""Spotify service — token exchange and playlist proxy operations."""

import asyncio
import random
from typing import Any, List, Optional

import structlog

from app.application.services.spotify_token_service import now_ms
from app.core.exceptions import EntityNotFoundException, InvalidInputException, UpstreamServiceException
from app.domain.models.favorite import Favorite
from app.domain.schemas.favorite import FavoritePlaylistDetails
from app.domain.schemas.spotify import (
    RandomAudio,
    RandomAudioPlaylist,
    RandomAudioTrack,
    TokenExchangeResponse,
)
from app.infrastructure.spotify_api import SpotifyAPIClient

logger = structlog.get_logger(__name__)

DEFAULT_PLAYLIST_QUERY = "meditation"
PLAYLIST_SEARCH_LIMIT = 10
RANDOM_AUDIO_SEARCH_LIMIT = 20


async def exchange_authorization_code(
    client: SpotifyAPIClient, code: Optional[str], redirect_uri: Optional[str]
) -> TokenExchangeResponse:
    if not code or not redirect_uri:
        raise InvalidInputException("Code and Redirect URI are required")

    grant = await client.exchange_code(code, redirect_uri)
    return TokenExchangeResponse(
        access_token=grant.access_token,
        refresh_token=grant.refresh_token,
        expires_in=grant.expires_in,
        token_expiration=now_ms() + grant.expires_in * 1000,
    )


async def search_playlists(client: SpotifyAPIClient, access_token: str, query: Optional[str]) -> List[dict]:
    return await client.search_playlists(access_token, query or DEFAULT_PLAYLIST_QUERY, limit=PLAYLIST_SEARCH_LIMIT)


async def get_playlist_tracks(client: SpotifyAPIClient, access_token: str, playlist_id: str) -> Any:
    return await client.get_playlist_tracks(access_token, playlist_id)


async def pick_random_meditation_audio(
    client: SpotifyAPIClient, access_token: str, rng: Optional[random.Random] = None
) -> RandomAudio:
    """A random track from a random meditation playlist."""
    rng = rng or random.Random()

    # search results may contain null entries for unavailable playlists
    playlists = [
        p
        for p in await client.search_playlists(access_token, DEFAULT_PLAYLIST_QUERY, limit=RANDOM_AUDIO_SEARCH_LIMIT)
        if p and p.get("id")
    ]
    if not playlists:
        raise EntityNotFoundException("No meditation playlists found")

    playlist = rng.choice(playlists)
    tracks_page = await client.get_playlist_tracks(access_token, playlist["id"])
    items = [
        item for item in (tracks_page.get("items") or [])
        if item and item.get("track") and item["track"].get("uri")
    ]
    if not items:
        logger.warning("No tracks found in the playlist", playlist_id=playlist["id"])
        raise EntityNotFoundException("No tracks found in the playlist")

    track = rng.choice(items)["track"]
    return RandomAudio(
        playlist=RandomAudioPlaylist(name=playlist.get("name"), uri=playlist.get("uri")),
        track=RandomAudioTrack(
            name=track.get("name"),
            uri=track["uri"],
            artist=", ".join(a.get("name", "") for a in track.get("artists") or []),
            album=(track.get("album") or {}).get("name"),
        ),
    )


async def _playlist_details(
    client: SpotifyAPIClient, access_token: str, favorite: Favorite
) -> Optional[FavoritePlaylistDetails]:
    try:
        data = await client.get_playlist(access_token, favorite.content_id)
    except UpstreamServiceException as e:
        logger.warning("Error fetching playlist details", playlist_id=favorite.content_id, kind=e.kind)
        return None

    images = data.get("images") or []
    return FavoritePlaylistDetails(
        id=data.get("id") or favorite.content_id,
        name=data.get("name"),
        image=images[0].get("url") if images else None,
        description=data.get("description"),
        uri=data.get("uri"),
        tracks=data.get("tracks"),
        added_at=favorite.added_at,
    )


async def get_favorite_playlist_details(
    client: SpotifyAPIClient,
    access_token: str,
    entries: List[Favorite],
) -> List[FavoritePlaylistDetails]:
    """Spotify details for each favorite playlist entry; failed lookups are dropped."""
    results = await asyncio.gather(*(_playlist_details(client, access_token, f) for f in entries))
    return [r for r in results if r is not None]
