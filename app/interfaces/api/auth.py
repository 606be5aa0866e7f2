"""Auth API routes — signup, login, logout, protected."""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from app.application.services.auth_service import get_user_name, login, register_user
from app.config import Settings, get_settings
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProtectedResponse,
    SignupRequest,
    UserSummary,
)
from app.interfaces.api.deps import get_current_user_id
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api", tags=["Auth"])


def session_cookie_params(settings: Settings) -> dict:
    return {
        "key": settings.SESSION_COOKIE_NAME,
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
        "path": "/",
    }


@router.post("/signup", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, repo: UserRepository = Depends(get_user_repository)):
    register_user(repo, body.name, body.surname, body.email, body.password)
    return "Successfully registered!"


@router.post("/login", response_model=LoginResponse)
def login_route(
    body: LoginRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    user, token = login(repo, body.email, body.password)
    response.set_cookie(
        value=token,
        max_age=settings.SESSION_COOKIE_MAX_AGE_SECONDS,
        **session_cookie_params(settings),
    )
    return LoginResponse(user=UserSummary.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    response.delete_cookie(**session_cookie_params(settings))
    return MessageResponse(message="Logout successful")


@router.get("/protected", response_model=ProtectedResponse)
def protected(
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repository),
):
    return ProtectedResponse(user_name=get_user_name(repo, user_id))
