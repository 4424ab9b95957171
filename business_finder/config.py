"""
Configuration management for Business Finder.
Loads from environment variables (and an optional .env file) with sensible defaults.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from dotenv import load_dotenv

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
LOG_DIR = PROJECT_ROOT / "logs"
ENV_FILE = PROJECT_ROOT / ".env"

# Provider tokens are not valid immediately after they are issued
PAGE_DELAY_SECONDS = 5.0

# Falmouth, Cornwall
DEFAULT_LATITUDE = 50.152573
DEFAULT_LONGITUDE = -5.066270
DEFAULT_RADIUS_METERS = 50000


def _env_number(name: str, default, cast: Callable):
    """Read a numeric env var, returning None if it is set but malformed."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return None


@dataclass
class PlacesConfig:
    """Google Places web service configuration."""
    api_key: str = field(default_factory=lambda: os.environ.get("GOOGLE_PLACES_API_KEY", ""))
    api_base_url: str = "https://maps.googleapis.com/maps/api/place"
    request_timeout_seconds: int = 30
    page_delay_seconds: float = PAGE_DELAY_SECONDS


@dataclass
class NotionConfig:
    """Notion API configuration."""
    api_key: str = field(default_factory=lambda: os.environ.get("NOTION_API_KEY", ""))
    database_id: str = field(default_factory=lambda: os.environ.get("NOTION_DATABASE_ID", ""))
    # Only needed when the database has to be created
    page_id: str = field(default_factory=lambda: os.environ.get("NOTION_PAGE_ID", ""))
    api_base_url: str = "https://api.notion.com/v1"
    api_version: str = "2022-06-28"
    database_title: str = "Businesses"
    request_timeout_seconds: int = 30


@dataclass
class SearchConfig:
    """Where to search and which categories to search for."""
    # None means the environment value could not be parsed
    latitude: Optional[float] = field(
        default_factory=lambda: _env_number("SEARCH_LATITUDE", DEFAULT_LATITUDE, float)
    )
    longitude: Optional[float] = field(
        default_factory=lambda: _env_number("SEARCH_LONGITUDE", DEFAULT_LONGITUDE, float)
    )
    radius_meters: Optional[int] = field(
        default_factory=lambda: _env_number("SEARCH_RADIUS_METERS", DEFAULT_RADIUS_METERS, int)
    )

    # Places API type tags, searched in this order
    place_types: List[str] = field(default_factory=lambda: [
        "art_gallery",
        "bakery",
        "bank",
        "bar",
        "beauty_salon",
        "bicycle_store",
        "book_store",
        "bowling_alley",
        "cafe",
        "campground",
        "clothing_store",
        "convenience_store",
        "department_store",
        "electrician",
        "electronics_store",
        "florist",
        "funeral_home",
        "gym",
        "hair_care",
        "home_goods_store",
        "jewelry_store",
        "laundry",
        "library",
        "liquor_store",
        "locksmith",
        "lodging",
        "meal_delivery",
        "meal_takeaway",
        "movie_rental",
        "moving_company",
        "museum",
        "night_club",
        "painter",
        "pet_store",
        "physiotherapist",
        "plumber",
        "restaurant",
        "roofing_contractor",
        "rv_park",
        "shoe_store",
        "shopping_mall",
        "spa",
        "storage",
        "store",
        "supermarket",
        "travel_agency",
        "veterinary_care",
    ])

    @property
    def location(self) -> str:
        """Center point formatted as the Places API expects it."""
        return f"{self.latitude},{self.longitude}"


@dataclass
class Config:
    """Main configuration container."""
    places: PlacesConfig = field(default_factory=PlacesConfig)
    notion: NotionConfig = field(default_factory=NotionConfig)
    search: SearchConfig = field(default_factory=SearchConfig)


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from the environment.

    Values from the .env file fill in anything the process environment
    does not already define.
    """
    load_dotenv(env_file or ENV_FILE, override=False)
    return Config()


def validate_config(config: Config) -> List[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if not config.places.api_key:
        errors.append("GOOGLE_PLACES_API_KEY environment variable not set")
    if not config.notion.api_key:
        errors.append("NOTION_API_KEY environment variable not set")
    if not config.notion.database_id:
        errors.append("NOTION_DATABASE_ID environment variable not set")

    search_values = (
        ("SEARCH_LATITUDE", config.search.latitude),
        ("SEARCH_LONGITUDE", config.search.longitude),
        ("SEARCH_RADIUS_METERS", config.search.radius_meters),
    )
    for name, value in search_values:
        if value is None:
            errors.append(f"{name} environment variable is not a valid number")

    return errors
