"""
Shared pytest fixtures for Business Finder tests.
"""

from unittest.mock import Mock

import pytest
import requests

from business_finder.config import (
    Config,
    PlacesConfig,
    NotionConfig,
    SearchConfig,
)
from business_finder.notion import NotionClient
from business_finder.places import PlacesClient


@pytest.fixture
def places_config() -> PlacesConfig:
    """Places configuration with a fake key."""
    return PlacesConfig(api_key="test_places_key")


@pytest.fixture
def notion_config() -> NotionConfig:
    """Notion configuration with fake credentials."""
    return NotionConfig(
        api_key="test_notion_key",
        database_id="db_configured",
        page_id="page_parent",
    )


@pytest.fixture
def search_config() -> SearchConfig:
    """Small search around a fixed point."""
    return SearchConfig(
        latitude=50.152573,
        longitude=-5.066270,
        radius_meters=1000,
        place_types=["bakery", "cafe"],
    )


@pytest.fixture
def mock_config(places_config, notion_config, search_config) -> Config:
    """Full configuration for tests."""
    return Config(
        places=places_config,
        notion=notion_config,
        search=search_config,
    )


@pytest.fixture
def places_client(places_config, search_config) -> PlacesClient:
    return PlacesClient(places_config, search_config)


@pytest.fixture
def notion_client(notion_config) -> NotionClient:
    return NotionClient(notion_config)


@pytest.fixture
def sample_place() -> dict:
    """A nearby search result as returned by the Places API."""
    return {
        "place_id": "ChIJ_test_bakery",
        "name": "Harbour Bakery",
        "vicinity": "12 Arwenack St, Falmouth",
        "types": ["bakery", "food", "store"],
    }


@pytest.fixture
def sample_details_with_website() -> dict:
    return {
        "formatted_address": "12 Arwenack St, Falmouth TR11 3JA, UK",
        "website": "https://harbourbakery.example",
    }


@pytest.fixture
def sample_details_without_website() -> dict:
    return {
        "formatted_address": "12 Arwenack St, Falmouth TR11 3JA, UK",
    }


def _make_response(json_data=None, status_code: int = 200) -> Mock:
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = json_data if json_data is not None else {}
    response.text = str(json_data)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _make_response
