import os
from urllib.parse import parse_qs

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SPOTIFY_CLIENT_ID", "test-client-id")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.application.services.spotify_token_service import TokenRefresher
from app.config import get_settings
from app.infrastructure.database import Base, get_db
from app.infrastructure.spotify_api import SpotifyAPIClient
from app.interfaces.deps import get_spotify_client, get_token_refresher
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class FakeSpotify:
    """Just enough of accounts.spotify.com and api.spotify.com/v1."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_calls: list[dict] = []
        self.fail_token = False
        self.token_body = None
        self.fail_paths: set[str] = set()
        self.playlists = [
            {"id": "pl1", "name": "Calm Mind", "uri": "spotify:playlist:pl1"},
            None,
            {"id": "pl2", "name": "Deep Focus", "uri": "spotify:playlist:pl2"},
        ]
        self.tracks = {
            "pl1": [
                {
                    "track": {
                        "name": "Ocean",
                        "uri": "spotify:track:t1",
                        "artists": [{"name": "Ana"}, {"name": "Ben"}],
                        "album": {"name": "Waves"},
                    }
                }
            ],
            "pl2": [
                {
                    "track": {
                        "name": "Forest",
                        "uri": "spotify:track:t2",
                        "artists": [{"name": "Cleo"}],
                        "album": {"name": "Trees"},
                    }
                }
            ],
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.url.host == "accounts.spotify.com":
            form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            self.token_calls.append(form)
            if self.fail_token:
                return httpx.Response(400, json={"error": "invalid_grant"})
            if self.token_body is not None:
                return httpx.Response(200, json=self.token_body)
            if form.get("grant_type") == "authorization_code":
                return httpx.Response(
                    200,
                    json={"access_token": "access-1", "refresh_token": "refresh-1", "expires_in": 3600},
                )
            return httpx.Response(200, json={"access_token": "refreshed-access", "expires_in": 3600})

        if path in self.fail_paths:
            return httpx.Response(404, json={"error": {"status": 404, "message": "Not found"}})

        if path == "/v1/search":
            return httpx.Response(200, json={"playlists": {"items": self.playlists}})

        if path.startswith("/v1/playlists/") and path.endswith("/tracks"):
            playlist_id = path.split("/")[3]
            return httpx.Response(200, json={"items": self.tracks.get(playlist_id, [])})

        if path.startswith("/v1/playlists/"):
            playlist_id = path.split("/")[3]
            return httpx.Response(
                200,
                json={
                    "id": playlist_id,
                    "name": f"Playlist {playlist_id}",
                    "images": [{"url": f"https://img/{playlist_id}.jpg"}],
                    "description": "desc",
                    "uri": f"spotify:playlist:{playlist_id}",
                    "tracks": {"total": 3},
                },
            )

        return httpx.Response(500, content=b"unexpected")

    def bearer_tokens(self) -> list[str]:
        return [
            r.headers.get("authorization")
            for r in self.requests
            if r.url.host != "accounts.spotify.com"
        ]


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def spotify():
    return FakeSpotify()


@pytest.fixture
def spotify_client(spotify):
    return SpotifyAPIClient(get_settings(), transport=httpx.MockTransport(spotify.handler))


@pytest.fixture
def client(db_session, spotify_client):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    refresher = TokenRefresher(spotify_client)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_spotify_client] = lambda: spotify_client
    app.dependency_overrides[get_token_refresher] = lambda: refresher

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    def _register(email="maya@example.com", password="s3cret!", name="Maya", surname="Lind"):
        response = client.post(
            "/api/signup",
            json={"name": name, "surname": surname, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"email": email, "password": password}

    return _register


@pytest.fixture
def logged_in(client, register):
    """Registers and logs in a user; the client keeps the session cookie."""
    creds = register()
    response = client.post("/api/login", json=creds)
    assert response.status_code == 200, response.text
    return response.json()["user"]
