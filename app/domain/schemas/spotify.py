"""Pydantic schemas for the Spotify integration."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from app.domain.schemas.auth import CamelModel


class TokenExchangeRequest(CamelModel):
    code: Optional[str] = None
    redirect_uri: Optional[str] = None


class TokenExchangeResponse(BaseModel):
    # Spotify's own snake_case field names are kept on the wire
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: int
    token_expiration: int


class TokenGrant(BaseModel):
    """Token endpoint answer, for both the code and the refresh grant."""

    access_token: str
    expires_in: int = 3600
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class SpotifyAccess:
    """Bearer token a Spotify-calling handler may use for this request."""

    access_token: str
    expires_at_ms: int = 0
    refreshed: bool = False


class RandomAudioPlaylist(BaseModel):
    name: Optional[str] = None
    uri: Optional[str] = None


class RandomAudioTrack(BaseModel):
    name: Optional[str] = None
    uri: str
    artist: str = ""
    album: Optional[str] = None


class RandomAudio(BaseModel):
    playlist: RandomAudioPlaylist
    track: RandomAudioTrack
