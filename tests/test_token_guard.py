import asyncio

import pytest

from app.application.services.spotify_token_service import (
    TokenRefresher,
    ensure_valid_token,
    now_ms,
    parse_expiration,
)
from app.core.exceptions import UnauthorizedException, UpstreamServiceException
from app.domain.schemas.spotify import TokenGrant

PAST = "1000"


class SlowRefreshClient:
    """Counts refresh calls; each one takes a moment to come back."""

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    async def refresh_access_token(self, refresh_token):
        self.calls.append(refresh_token)
        await asyncio.sleep(0.05)
        if self.fail:
            raise UpstreamServiceException("boom", kind=UpstreamServiceException.RESPONSE, upstream_status=400)
        return TokenGrant(access_token=f"new-{refresh_token}-{len(self.calls)}", expires_in=3600)


def test_parse_expiration():
    assert parse_expiration(None) == 0
    assert parse_expiration("") == 0
    assert parse_expiration("garbage") == 0
    assert parse_expiration(" 1700000000000 ") == 1700000000000


def test_unexpired_or_unknown_expiry_passes_through():
    refresher = TokenRefresher(SlowRefreshClient())

    fresh = asyncio.run(ensure_valid_token("tok", 2_000, "r", refresher, current_ms=1_000))
    unknown = asyncio.run(ensure_valid_token("tok", 0, None, refresher, current_ms=1_000))

    assert fresh.access_token == unknown.access_token == "tok"
    assert not fresh.refreshed and not unknown.refreshed
    assert refresher.client.calls == []


def test_expiry_boundary_is_still_valid():
    refresher = TokenRefresher(SlowRefreshClient())

    access = asyncio.run(ensure_valid_token("tok", 1_000, "r", refresher, current_ms=1_000))

    assert access.refreshed is False


def test_missing_access_token_is_401():
    with pytest.raises(UnauthorizedException, match="Access token is required"):
        asyncio.run(ensure_valid_token(None, 0, "r", TokenRefresher(SlowRefreshClient())))


def test_expired_without_refresh_token_is_401():
    with pytest.raises(UnauthorizedException, match="no refresh token"):
        asyncio.run(ensure_valid_token("tok", 1, None, TokenRefresher(SlowRefreshClient()), current_ms=5))


def test_failed_refresh_is_401():
    refresher = TokenRefresher(SlowRefreshClient(fail=True))

    with pytest.raises(UnauthorizedException, match="Failed to refresh access token"):
        asyncio.run(ensure_valid_token("tok", 1, "r", refresher, current_ms=5))
    assert refresher.inflight_count == 0


def test_refresh_sets_new_expiry():
    refresher = TokenRefresher(SlowRefreshClient())
    before = now_ms()

    access = asyncio.run(ensure_valid_token("tok", 1, "r", refresher, current_ms=5))

    assert access.refreshed is True
    assert access.access_token == "new-r-1"
    assert access.expires_at_ms >= before + 3600 * 1000


def test_concurrent_refreshes_share_one_upstream_call():
    client = SlowRefreshClient()
    refresher = TokenRefresher(client)

    async def run():
        return await asyncio.gather(
            *(ensure_valid_token("tok", 1, "same-refresh", refresher, current_ms=5) for _ in range(5))
        )

    results = asyncio.run(run())

    assert client.calls == ["same-refresh"]
    assert {r.access_token for r in results} == {"new-same-refresh-1"}
    assert refresher.inflight_count == 0


def test_different_refresh_tokens_refresh_independently():
    client = SlowRefreshClient()
    refresher = TokenRefresher(client)

    async def run():
        return await asyncio.gather(
            ensure_valid_token("a", 1, "r-a", refresher, current_ms=5),
            ensure_valid_token("b", 1, "r-b", refresher, current_ms=5),
        )

    asyncio.run(run())

    assert sorted(client.calls) == ["r-a", "r-b"]


def test_refresh_after_completion_calls_upstream_again():
    client = SlowRefreshClient()
    refresher = TokenRefresher(client)

    asyncio.run(ensure_valid_token("tok", 1, "r", refresher, current_ms=5))
    asyncio.run(ensure_valid_token("tok", 1, "r", refresher, current_ms=5))

    assert client.calls == ["r", "r"]


# Over HTTP

def test_valid_token_is_used_as_is(client, spotify):
    response = client.get("/api/spotify/playlists", headers={"Authorization": "Bearer live-token"})

    assert response.status_code == 200
    assert "x-new-access-token" not in response.headers
    assert spotify.bearer_tokens() == ["Bearer live-token"]
    assert spotify.token_calls == []


def test_expired_token_is_refreshed_and_returned_in_headers(client, spotify):
    response = client.get(
        "/api/spotify/playlists",
        headers={
            "Authorization": "Bearer stale-token",
            "x-token-expiration": PAST,
            "x-refresh-token": "refresh-1",
        },
    )

    assert response.status_code == 200
    assert response.headers["x-new-access-token"] == "refreshed-access"
    assert int(response.headers["x-token-expiration"]) > now_ms()
    assert spotify.bearer_tokens() == ["Bearer refreshed-access"]
    assert spotify.token_calls[0]["grant_type"] == "refresh_token"
    assert spotify.token_calls[0]["refresh_token"] == "refresh-1"


def test_refresh_headers_are_exposed_to_browsers(client):
    response = client.get(
        "/api/spotify/playlists",
        headers={
            "Origin": "http://localhost:5173",
            "Authorization": "Bearer stale-token",
            "x-token-expiration": PAST,
            "x-refresh-token": "refresh-1",
        },
    )

    exposed = response.headers.get("access-control-expose-headers", "").lower()
    assert "x-new-access-token" in exposed
    assert "x-token-expiration" in exposed


def test_expired_token_without_refresh_token_is_401(client, spotify):
    response = client.get(
        "/api/spotify/playlists",
        headers={"Authorization": "Bearer stale-token", "x-token-expiration": PAST},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Token has expired and no refresh token available"
    assert spotify.requests == []


def test_refresh_failure_is_401(client, spotify):
    spotify.fail_token = True

    response = client.get(
        "/api/spotify/playlists",
        headers={
            "Authorization": "Bearer stale-token",
            "x-token-expiration": PAST,
            "x-refresh-token": "revoked",
        },
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Failed to refresh access token"


def test_missing_bearer_token_is_401(client):
    response = client.get("/api/playlists/meditation/random-audio")

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Access token is required"


def test_parse_expiration_reads_leading_integer():
    assert parse_expiration("1000.5") == 1000
    assert parse_expiration("1700000000000ms") == 1700000000000
    assert parse_expiration("-5") == -5


def test_negative_expiry_counts_as_expired():
    refresher = TokenRefresher(SlowRefreshClient())

    access = asyncio.run(ensure_valid_token("tok", parse_expiration("-1"), "r", refresher, current_ms=5))

    assert access.refreshed is True
    assert refresher.client.calls == ["r"]


def test_fractional_expiry_header_still_triggers_refresh(client, spotify):
    response = client.get(
        "/api/spotify/playlists",
        headers={
            "Authorization": "Bearer stale-token",
            "x-token-expiration": "1000.5",
            "x-refresh-token": "refresh-1",
        },
    )

    assert response.status_code == 200
    assert response.headers["x-new-access-token"] == "refreshed-access"
    assert spotify.bearer_tokens() == ["Bearer refreshed-access"]
