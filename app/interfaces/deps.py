"""
API Dependencies.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.spotify_token_service import TokenRefresher
from app.domain.models.user import User
from app.domain.repositories.favorite_repository import FavoriteRepository
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.database import get_db
from app.infrastructure.repositories.favorite_repository import SQLAlchemyFavoriteRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.infrastructure.spotify_api import SpotifyAPIClient


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_favorite_repository(db: Session = Depends(get_db)) -> FavoriteRepository:
    """Get favorite repository instance."""
    return SQLAlchemyFavoriteRepository(db)


@lru_cache
def get_spotify_client() -> SpotifyAPIClient:
    return SpotifyAPIClient()


@lru_cache
def get_token_refresher() -> TokenRefresher:
    """One per process; owns the in-flight refresh table."""
    return TokenRefresher(get_spotify_client())
