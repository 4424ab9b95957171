"""Business Finder: Google Places search results synced into a Notion database."""

__version__ = "0.1.0"
