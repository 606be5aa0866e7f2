"""Pydantic schemas for the practice schedule settings."""

from typing import Optional

from app.domain.schemas.auth import CamelModel


class SettingsPayload(CamelModel):
    time: Optional[str] = None
    days: Optional[list[int]] = None


class SettingsRead(CamelModel):
    time: str = ""
    days: list[int] = []
    has_completed_settings: bool = False


class SettingsCompletion(CamelModel):
    has_completed_settings: bool


class SettingsCreated(CamelModel):
    message: str = "Settings successfully saved."
    time: str
    days: list[int]
    user: SettingsCompletion


class SettingsUpdated(CamelModel):
    message: str = "Settings successfully updated."
    time: str
    days: list[int]
