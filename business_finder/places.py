"""
Google Places web service client for Business Finder.
Nearby search with token pagination, plus per-place detail lookups.
"""

import time
from typing import Dict, Any, Iterator, Optional

import requests
from requests.exceptions import RequestException

from .config import PlacesConfig, SearchConfig
from .logging_setup import get_logger

logger = get_logger("places")

# Statuses the API uses for a successful call
OK_STATUSES = ("OK", "ZERO_RESULTS")

DETAIL_FIELDS = "website,formatted_address"


class PlacesError(Exception):
    """Google Places API error."""
    pass


class PlacesClient:
    """
    Google Places API client.

    Searches a fixed circle (from SearchConfig) one place type at a time.
    Nothing is retried: a failed call raises PlacesError and the caller
    decides whether to move on.
    """

    def __init__(self, config: PlacesConfig, search: SearchConfig = None):
        self.config = config
        self.search = search or SearchConfig()
        self.session = requests.Session()

    def _request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Call a Places JSON endpoint and check the response status."""
        url = f"{self.config.api_base_url}/{endpoint}/json"
        params = {**params, "key": self.config.api_key}

        try:
            resp = self.session.get(
                url,
                params=params,
                timeout=self.config.request_timeout_seconds,
            )
            resp.raise_for_status()
            data = resp.json()
        except (RequestException, ValueError) as e:
            raise PlacesError(f"{endpoint} request failed: {e}") from e

        status = data.get("status", "UNKNOWN_ERROR")
        if status not in OK_STATUSES:
            message = data.get("error_message", "no error message")
            raise PlacesError(f"{endpoint} returned {status}: {message}")

        return data

    def nearby_search(self, place_type: str, page_token: Optional[str] = None) -> Dict[str, Any]:
        """Fetch one page of nearby search results for a place type."""
        params = {
            "location": self.search.location,
            "radius": self.search.radius_meters,
            "type": place_type,
        }
        if page_token:
            params["pagetoken"] = page_token

        return self._request("nearbysearch", params)

    def iter_pages(self, place_type: str) -> Iterator[Dict[str, Any]]:
        """
        Yield result pages for a place type until no continuation token is returned.

        The next page is requested only after page_delay_seconds, since a
        freshly issued token is rejected with INVALID_REQUEST.
        PlacesError from any page fetch propagates to the caller.
        """
        page_token = None
        page_count = 0

        while True:
            page_count += 1
            logger.info(f"Fetching page {page_count} for {place_type}")

            page = self.nearby_search(place_type, page_token)
            logger.info(f"Found {len(page.get('results', []))} results on page {page_count}")
            yield page

            page_token = page.get("next_page_token")
            if not page_token:
                logger.info(f"No more pages for {place_type}")
                break

            logger.debug(f"Waiting {self.config.page_delay_seconds}s before next page")
            time.sleep(self.config.page_delay_seconds)

    def iter_places(self, place_type: str) -> Iterator[Dict[str, Any]]:
        """Yield every place summary across all result pages."""
        for page in self.iter_pages(place_type):
            yield from page.get("results", [])

    def place_details(self, place_id: str) -> Dict[str, Any]:
        """Look up extended fields (website, formatted address) for a place."""
        data = self._request("details", {
            "place_id": place_id,
            "fields": DETAIL_FIELDS,
        })
        return data.get("result", {})
