"""
Notion API integration for Business Finder.
Makes sure the target database exists and adds one page per business.

Pages are only ever created here - existing pages are never updated or
archived, so edits made in Notion (e.g. the Contacted column) are kept.
"""

from typing import Dict, Any, List

import requests
from requests.exceptions import RequestException

from .config import NotionConfig
from .logging_setup import get_logger
from .records import (
    Business,
    HAS_WEBSITE,
    NO_WEBSITE,
    URGENCY_HIGH,
    URGENCY_MEDIUM,
    URGENCY_LOW,
    NOT_CONTACTED,
    CONTACTED,
)

logger = get_logger("notion")


def _options(*names: str) -> Dict[str, Any]:
    return {"options": [{"name": name} for name in names]}


DATABASE_SCHEMA = {
    "Name": {"title": {}},
    "Address": {"rich_text": {}},
    "PlaceID": {"rich_text": {}},
    # Notion adds any other type tag as a new option on first use
    "Type": {"multi_select": _options("Restaurant", "Shop", "Business")},
    "WebsiteStatus": {"select": _options(HAS_WEBSITE, NO_WEBSITE)},
    "Urgency": {"select": _options(URGENCY_HIGH, URGENCY_MEDIUM, URGENCY_LOW)},
    "Contacted": {"select": _options(NOT_CONTACTED, CONTACTED)},
    "URL": {"url": {}},
}


class NotionError(Exception):
    """Notion API error."""
    pass


def _text(content: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def business_to_properties(business: Business) -> Dict[str, Any]:
    """Build the page property payload for a business."""
    return {
        "Name": {"title": _text(business.name)},
        "Address": {"rich_text": _text(business.address)},
        "PlaceID": {"rich_text": _text(business.place_id)},
        "Type": {"multi_select": [{"name": t} for t in business.types]},
        "WebsiteStatus": {"select": {"name": business.website_status}},
        "Urgency": {"select": {"name": business.urgency}},
        "Contacted": {"select": {"name": business.contacted}},
        "URL": {"url": business.url},
    }


class NotionClient:
    """
    Notion API client for the businesses database.

    database_id starts as the configured ID and is replaced by the new
    database's ID when create_database() runs.
    """

    def __init__(self, config: NotionConfig):
        self.config = config
        self.database_id = config.database_id
        self.page_id = config.page_id
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {config.api_key}",
            "Notion-Version": config.api_version,
            "Content-Type": "application/json",
        })

    def _request(
        self,
        method: str,
        endpoint: str,
        payload: Dict[str, Any] = None,
    ) -> Dict[str, Any]:
        """Make authenticated request to the Notion API."""
        url = f"{self.config.api_base_url}/{endpoint}"

        try:
            if method.upper() == "GET":
                resp = self.session.get(url, timeout=self.config.request_timeout_seconds)
            else:
                resp = self.session.post(
                    url,
                    json=payload or {},
                    timeout=self.config.request_timeout_seconds,
                )
        except RequestException as e:
            raise NotionError(f"{method} {endpoint} failed: {e}") from e

        if not resp.ok:
            # Notion error bodies carry a human-readable "message"
            try:
                message = resp.json().get("message", resp.text)
            except ValueError:
                message = resp.text
            raise NotionError(f"{method} {endpoint} returned {resp.status_code}: {message}")

        try:
            return resp.json()
        except ValueError as e:
            raise NotionError(f"{method} {endpoint} returned invalid JSON: {e}") from e

    def database_exists(self) -> bool:
        """Any error while fetching the database counts as 'does not exist'."""
        try:
            self._request("GET", f"databases/{self.database_id}")
            return True
        except NotionError as e:
            logger.info(f"Database {self.database_id} not available: {e}")
            return False

    def create_database(self) -> Dict[str, Any]:
        """
        Create the businesses database under the configured parent page.

        Adopts the new database's ID for all later calls.
        """
        if not self.page_id:
            raise NotionError("NOTION_PAGE_ID is required to create the database")

        data = self._request("POST", "databases", {
            "parent": {"type": "page_id", "page_id": self.page_id},
            "title": _text(self.config.database_title),
            "properties": DATABASE_SCHEMA,
            "is_inline": False,
        })

        if not data.get("id"):
            raise NotionError("Database create response did not include an id")

        self.database_id = data["id"]
        logger.info(f"Created database {self.database_id}")
        return data

    def business_exists(self, place_id: str) -> bool:
        """Check whether a page with this PlaceID is already in the database."""
        data = self._request("POST", f"databases/{self.database_id}/query", {
            "filter": {
                "property": "PlaceID",
                "rich_text": {"equals": place_id},
            },
            "page_size": 1,
        })
        return len(data.get("results", [])) > 0

    def insert_business(self, business: Business) -> bool:
        """
        Add a page for the business unless its PlaceID is already stored.

        Returns True if a page was created, False if it was a duplicate.
        Raises NotionError if the query or create call fails.
        """
        if self.business_exists(business.place_id):
            logger.info(f"Business with PlaceID {business.place_id} already exists, skipping")
            return False

        self._request("POST", "pages", {
            "parent": {"database_id": self.database_id},
            "properties": business_to_properties(business),
        })
        return True
