"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    firebase_project_id: str
    firestore_database: str = "(default)"
    firestore_emulator_host: Optional[str] = None
    site_base_url: str = "https://myfellowpet.com"
    default_latitude: float = 12.9716
    default_longitude: float = 77.5946
    listing_limit: int = 10
    port: int = 8080


def _parse_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    firebase_project_id = os.getenv("FIREBASE_PROJECT_ID", "")
    firestore_database = os.getenv("FIRESTORE_DATABASE") or "(default)"
    firestore_emulator_host = os.getenv("FIRESTORE_EMULATOR_HOST") or None
    site_base_url = (os.getenv("SITE_BASE_URL") or "https://myfellowpet.com").rstrip("/")
    default_latitude = _parse_number("DEFAULT_LATITUDE", "12.9716", float)
    default_longitude = _parse_number("DEFAULT_LONGITUDE", "77.5946", float)
    listing_limit = _parse_number("LISTING_LIMIT", "10", int)
    port = _parse_number("PORT", "8080", int)

    if not firebase_project_id:
        logger.warning("FIREBASE_PROJECT_ID is not set; Firestore requests will fail.")
    if listing_limit <= 0:
        raise ConfigError("LISTING_LIMIT must be positive")

    return Settings(
        firebase_project_id=firebase_project_id,
        firestore_database=firestore_database,
        firestore_emulator_host=firestore_emulator_host,
        site_base_url=site_base_url,
        default_latitude=default_latitude,
        default_longitude=default_longitude,
        listing_limit=listing_limit,
        port=port,
    )
