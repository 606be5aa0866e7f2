"""Spotify Web API / Accounts HTTP client.

Every failure surfaces immediately as an UpstreamServiceException; nothing is
retried.
"""

from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from app.config import Settings, get_settings
from app.core.exceptions import UpstreamServiceException
from app.domain.schemas.spotify import TokenGrant

logger = structlog.get_logger(__name__)


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:500] or None


class SpotifyAPIClient:
    """Thin async wrapper over the Spotify token endpoint and Web API."""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = settings or get_settings()
        self.api_base_url = settings.SPOTIFY_API_BASE_URL.rstrip("/")
        self.token_url = settings.SPOTIFY_TOKEN_URL
        self.client_id = settings.SPOTIFY_CLIENT_ID
        self.client_secret = settings.SPOTIFY_CLIENT_SECRET
        self.market = settings.SPOTIFY_MARKET
        self.timeout = settings.SPOTIFY_TIMEOUT_SECONDS
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _send(self, method: str, url: str, action: str, **kwargs) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            body = _response_body(e.response)
            logger.warning("Spotify returned an error", action=action, status_code=e.response.status_code, body=body)
            raise UpstreamServiceException(
                f"Spotify error while trying to {action}",
                kind=UpstreamServiceException.RESPONSE,
                upstream_status=e.response.status_code,
                upstream_body=body,
            ) from e
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            logger.warning("No response from Spotify", action=action, error=str(e))
            raise UpstreamServiceException(
                "No response from Spotify API",
                kind=UpstreamServiceException.NO_RESPONSE,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("Could not complete Spotify request", action=action, error=str(e))
            raise UpstreamServiceException(
                f"Error during request to Spotify ({action})",
                kind=UpstreamServiceException.REQUEST_SETUP,
            ) from e

    async def _post_token(self, form: dict, action: str) -> TokenGrant:
        form = {**form, "client_id": self.client_id, "client_secret": self.client_secret}
        data = await self._send(
            "POST",
            self.token_url,
            action,
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        try:
            return TokenGrant.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed Spotify token response", action=action, errors=e.error_count())
            raise UpstreamServiceException(
                "Spotify returned a malformed token response",
                kind=UpstreamServiceException.RESPONSE,
            ) from e

    async def exchange_code(self, code: str, redirect_uri: str) -> TokenGrant:
        """Authorization-code grant."""
        return await self._post_token(
            {"grant_type": "authorization_code", "code": code, "redirect_uri": redirect_uri},
            "exchange authorization code",
        )

    async def refresh_access_token(self, refresh_token: str) -> TokenGrant:
        """Refresh-token grant."""
        return await self._post_token(
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
            "refresh access token",
        )

    async def get(self, access_token: str, path: str, params: Optional[dict] = None) -> Any:
        return await self._send(
            "GET",
            f"{self.api_base_url}/{path.lstrip('/')}",
            f"GET {path.split('?')[0]}",
            params=params,
            headers={"Authorization": f"Bearer {access_token}"},
        )

    async def search_playlists(self, access_token: str, query: str, limit: int = 10) -> list:
        data = await self.get(
            access_token,
            "/search",
            params={"q": query, "type": "playlist", "limit": limit, "market": self.market},
        )
        return (data.get("playlists") or {}).get("items") or []

    async def get_playlist(self, access_token: str, playlist_id: str) -> dict:
        return await self.get(access_token, f"/playlists/{playlist_id}")

    async def get_playlist_tracks(self, access_token: str, playlist_id: str) -> dict:
        return await self.get(access_token, f"/playlists/{playlist_id}/tracks")
