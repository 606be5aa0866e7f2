"""Catalog service — bundled yoga and meditation listings."""

import json
from pathlib import Path
from typing import Any, List

import structlog

from app.config import get_settings
from app.core.exceptions import AppError

logger = structlog.get_logger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

YOGA_VIDEOS_FILE = "videos.json"
MEDITATION_FILE = "meditate.json"


class CatalogUnavailableException(AppError):
    """A bundled catalog file is missing or not valid JSON."""


def data_dir() -> Path:
    configured = get_settings().DATA_DIR
    return Path(configured) if configured else DEFAULT_DATA_DIR


def load_catalog(filename: str, error_message: str) -> List[dict[str, Any]]:
    path = data_dir() / filename
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except OSError as e:
        logger.error("Error reading catalog file", file=str(path), error=str(e))
        raise CatalogUnavailableException(error_message) from e
    except json.JSONDecodeError as e:
        logger.error("Error processing catalog file", file=str(path), error=str(e))
        raise CatalogUnavailableException(error_message) from e


def get_yoga_videos() -> List[dict[str, Any]]:
    return load_catalog(YOGA_VIDEOS_FILE, "Error retrieving Yoga videos.")


def get_meditations() -> List[dict[str, Any]]:
    return load_catalog(MEDITATION_FILE, "Error retrieving meditations.")
