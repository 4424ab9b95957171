"""
Mapping from Places API results to business records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

HAS_WEBSITE = "Has Website"
NO_WEBSITE = "No Website"

URGENCY_HIGH = "High"
URGENCY_MEDIUM = "Medium"
URGENCY_LOW = "Low"

NOT_CONTACTED = "Not Contacted"
CONTACTED = "Contacted"

DEFAULT_TYPE = "Other"

# Address is appended as-is
MAP_SEARCH_PREFIX = "https://www.google.com/maps/search/?api=1&query="


@dataclass
class Business:
    """A business as it is stored in the Notion database."""
    name: str
    address: str
    place_id: str  # Google Place ID - dedupe key
    types: List[str] = field(default_factory=lambda: [DEFAULT_TYPE])
    website_status: str = NO_WEBSITE
    urgency: str = URGENCY_HIGH
    contacted: str = NOT_CONTACTED
    url: str = ""


def map_search_url(address: str) -> str:
    return MAP_SEARCH_PREFIX + address


def urgency_for(website_status: str) -> str:
    """Businesses without a website are the ones worth calling first."""
    if website_status == HAS_WEBSITE:
        return URGENCY_MEDIUM
    return URGENCY_HIGH


def build_business(place: Dict[str, Any], details: Dict[str, Any]) -> Business:
    """
    Combine a nearby-search result and its detail lookup into a Business.

    The address prefers the details' formatted_address; nearby search
    results usually only carry a shorter "vicinity".
    """
    address = (
        details.get("formatted_address")
        or place.get("formatted_address")
        or place.get("vicinity")
        or ""
    )
    website = details.get("website") or ""
    website_status = HAS_WEBSITE if website else NO_WEBSITE

    return Business(
        name=place.get("name", ""),
        address=address,
        place_id=place.get("place_id", ""),
        types=list(place.get("types") or [DEFAULT_TYPE]),
        website_status=website_status,
        urgency=urgency_for(website_status),
        contacted=NOT_CONTACTED,
        url=website or map_search_url(address),
    )
