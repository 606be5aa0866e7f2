"""Pydantic schemas for User and Auth."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class SessionIdentity:
    """Who the verified session cookie belongs to. Set once per request."""

    user_id: str


class CamelModel(BaseModel):
    """Wire format is camelCase; Python side stays snake_case."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


class SignupRequest(CamelModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    has_completed_settings: bool = False


class LoginResponse(CamelModel):
    message: str = "Login successful"
    user: UserSummary


class MessageResponse(CamelModel):
    message: str


class ProtectedResponse(CamelModel):
    message: str = "You are authenticated"
    user_name: str
