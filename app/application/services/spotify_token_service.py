"""Spotify access-token lifecycle (Token Guard).

Decides per request whether the caller's Spotify bearer token can be used as
is, must be refreshed, or must be rejected. Refreshes are coalesced per
refresh token so concurrent requests holding the same expired credentials
trigger a single upstream call and all receive the same new token.
"""

import asyncio
import re
import time
from typing import Dict, Optional

import structlog

from app.core.exceptions import UnauthorizedException, UpstreamServiceException
from app.domain.schemas.spotify import SpotifyAccess
from app.infrastructure.spotify_api import SpotifyAPIClient

logger = structlog.get_logger(__name__)

# Request headers
REFRESH_TOKEN_HEADER = "x-refresh-token"
EXPIRATION_HEADER = "x-token-expiration"
# Response headers, set only when a refresh happened
NEW_ACCESS_TOKEN_HEADER = "x-new-access-token"


def now_ms() -> int:
    return int(time.time() * 1000)


LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def parse_expiration(raw: Optional[str]) -> int:
    """Epoch milliseconds from the leading integer of the header.

    Absent or unparseable means "never expires". Trailing text such as a
    fractional part is ignored; a negative value is simply in the past.
    """
    if not raw:
        return 0
    match = LEADING_INTEGER.match(raw)
    if not match:
        logger.warning("Ignoring unparseable token expiration header", value=raw[:40])
        return 0
    return int(match.group(1))


class TokenRefresher:
    """Single-flight refresh: one in-flight upstream call per refresh token."""

    def __init__(self, client: SpotifyAPIClient):
        self.client = client
        self._inflight: Dict[str, asyncio.Future] = {}

    async def _refresh(self, refresh_token: str) -> SpotifyAccess:
        refreshed = await self.client.refresh_access_token(refresh_token)
        return SpotifyAccess(
            access_token=refreshed.access_token,
            expires_at_ms=now_ms() + refreshed.expires_in * 1000,
            refreshed=True,
        )

    async def refresh(self, refresh_token: str) -> SpotifyAccess:
        task = self._inflight.get(refresh_token)
        if task is None:
            task = asyncio.ensure_future(self._refresh(refresh_token))
            self._inflight[refresh_token] = task
            task.add_done_callback(lambda _: self._inflight.pop(refresh_token, None))
        else:
            logger.debug("Joining in-flight Spotify token refresh")
        # a cancelled waiter must not cancel the refresh the others are awaiting
        return await asyncio.shield(task)

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)


async def ensure_valid_token(
    access_token: Optional[str],
    expires_at_ms: int,
    refresh_token: Optional[str],
    refresher: TokenRefresher,
    current_ms: Optional[int] = None,
) -> SpotifyAccess:
    if not access_token:
        raise UnauthorizedException("Access token is required")

    current_ms = now_ms() if current_ms is None else current_ms
    if not expires_at_ms or current_ms <= expires_at_ms:
        return SpotifyAccess(access_token=access_token, expires_at_ms=expires_at_ms)

    if not refresh_token:
        raise UnauthorizedException("Token has expired and no refresh token available")

    try:
        access = await refresher.refresh(refresh_token)
    except UpstreamServiceException as e:
        logger.warning("Failed to refresh Spotify access token", kind=e.kind, details=e.details)
        raise UnauthorizedException("Failed to refresh access token") from e

    logger.info("Spotify access token refreshed", expires_at_ms=access.expires_at_ms)
    return access
