"""Auth service — registration, login and session token verification."""

from typing import Optional

import structlog

from app.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    ForbiddenException,
    InvalidInputException,
    UnauthorizedException,
)
from app.core.security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import SessionIdentity

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def register_user(
    repo: UserRepository,
    name: Optional[str],
    surname: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> User:
    if not name or not surname or not email or not password:
        raise InvalidInputException("Each input field must be filled out.")

    if repo.get_by_email(email):
        raise ConflictException("Choose another email.")

    user = repo.add(
        {
            "name": name,
            "surname": surname,
            "email": email,
            "password_hash": hash_password(password),
        }
    )
    if user is None:
        raise ConflictException("Choose another email.")
    logger.info("User registered", user_id=user.id)
    return user


def authenticate_user(repo: UserRepository, email: Optional[str], password: Optional[str]) -> User:
    """Same error for an unknown email and a wrong password."""
    if not email or not password:
        raise InvalidInputException("Email and password are required")

    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedException(INVALID_CREDENTIALS)
    return user


def login(repo: UserRepository, email: Optional[str], password: Optional[str]) -> tuple[User, str]:
    user = authenticate_user(repo, email, password)
    token = create_session_token(user.id)
    logger.info("User logged in", user_id=user.id)
    return user, token


def verify_session(token: Optional[str]) -> SessionIdentity:
    """Missing token -> 401, bad signature or expired -> 403."""
    if not token:
        raise UnauthorizedException("Access denied")

    payload = decode_session_token(token)
    if not payload or not isinstance(payload.get("id"), str):
        raise ForbiddenException("Invalid token")

    return SessionIdentity(user_id=payload["id"])


def get_user_name(repo: UserRepository, user_id: str) -> str:
    user = repo.get_by_id(user_id)
    if not user:
        raise EntityNotFoundException("User not found.")
    return user.name
