"""Silentmoon Backend — Configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./silentmoon.db"

    # Session (JWT in an HTTP-only cookie)
    SECRET_KEY: str = Field(min_length=1)
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60
    SESSION_COOKIE_NAME: str = "token"
    SESSION_COOKIE_MAX_AGE_SECONDS: int = 24 * 60 * 60

    # Spotify
    SPOTIFY_CLIENT_ID: str = Field(min_length=1)
    SPOTIFY_CLIENT_SECRET: str = Field(min_length=1)
    SPOTIFY_API_BASE_URL: str = "https://api.spotify.com/v1"
    SPOTIFY_TOKEN_URL: str = "https://accounts.spotify.com/api/token"
    SPOTIFY_MARKET: str = "DE"
    SPOTIFY_TIMEOUT_SECONDS: float = 15.0

    # Bundled catalog files (videos.json, meditate.json)
    DATA_DIR: str = ""

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
