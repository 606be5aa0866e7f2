"""FastAPI dependencies — session cookie auth and the Spotify Token Guard."""

from typing import Optional

from fastapi import Depends, Header, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.services.auth_service import verify_session
from app.application.services.spotify_token_service import (
    EXPIRATION_HEADER,
    NEW_ACCESS_TOKEN_HEADER,
    REFRESH_TOKEN_HEADER,
    TokenRefresher,
    ensure_valid_token,
    parse_expiration,
)
from app.config import get_settings
from app.domain.schemas.auth import SessionIdentity
from app.domain.schemas.spotify import SpotifyAccess
from app.interfaces.deps import get_token_refresher

bearer = HTTPBearer(auto_error=False)


def get_current_identity(request: Request) -> SessionIdentity:
    """Verify the session cookie and attach the identity to the request."""
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    identity = verify_session(token)
    request.state.identity = identity
    return identity


def get_current_user_id(identity: SessionIdentity = Depends(get_current_identity)) -> str:
    return identity.user_id


async def require_spotify_access(
    request: Request,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    refresh_token: Optional[str] = Header(None, alias=REFRESH_TOKEN_HEADER),
    token_expiration: Optional[str] = Header(None, alias=EXPIRATION_HEADER),
    refresher: TokenRefresher = Depends(get_token_refresher),
) -> SpotifyAccess:
    """Token Guard: a usable Spotify bearer token or a 401.

    A token already resolved earlier in the request is reused as is.
    On refresh the new token and expiry are returned to the caller in
    response headers.
    """
    prior: Optional[SpotifyAccess] = getattr(request.state, "spotify_access", None)
    if prior is not None:
        return prior

    access = await ensure_valid_token(
        credentials.credentials if credentials else None,
        parse_expiration(token_expiration),
        refresh_token,
        refresher,
    )

    if access.refreshed:
        response.headers[NEW_ACCESS_TOKEN_HEADER] = access.access_token
        response.headers[EXPIRATION_HEADER] = str(access.expires_at_ms)

    request.state.spotify_access = access
    return access
