from datetime import timedelta

import pytest

from app.application.services.auth_service import verify_session
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.core.security import create_session_token, hash_password, verify_password


def test_session_token_round_trips_to_user_id():
    token = create_session_token("a" * 24)

    assert verify_session(token).user_id == "a" * 24


def test_missing_token_is_unauthorized():
    with pytest.raises(UnauthorizedException):
        verify_session(None)


def test_garbage_and_expired_tokens_are_forbidden():
    with pytest.raises(ForbiddenException):
        verify_session("not-a-jwt")
    with pytest.raises(ForbiddenException):
        verify_session(create_session_token("b" * 24, expires_delta=timedelta(seconds=-1)))


def test_identity_is_read_only():
    identity = verify_session(create_session_token("c" * 24))

    with pytest.raises(AttributeError):
        identity.user_id = "d" * 24


def test_password_hash_is_salted_and_verifies():
    first = hash_password("correct horse")
    second = hash_password("correct horse")

    assert first != second
    assert "correct horse" not in first
    assert verify_password("correct horse", first)
    assert not verify_password("wrong", first)
