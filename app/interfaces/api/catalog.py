"""Catalog API routes — bundled yoga and meditation content."""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from app.application.services.catalog_service import get_meditations, get_yoga_videos

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.post("/", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
def welcome():
    return "Welcome to Silentmoon!"


@router.get("/yoga")
def yoga_videos():
    return get_yoga_videos()


@router.get("/meditation")
def meditation():
    return get_meditations()
