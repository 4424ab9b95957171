#!/usr/bin/env python3
"""
Orchestrator for Business Finder.
Searches each place type around the configured point and records every
business in Notion.

Fatal: bad configuration, or the database cannot be created.
Everything else (a page fetch, a detail lookup, an insert) is logged and
the run moves on.
"""

from __future__ import annotations

import sys
import argparse
from typing import Optional, List

from .config import load_config, validate_config, Config
from .logging_setup import setup_logging, RunContext, get_logger
from .places import PlacesClient, PlacesError
from .notion import NotionClient, NotionError
from .records import build_business

logger = get_logger("orchestrator")


def ensure_database(notion: NotionClient):
    """Create the database if it is missing. Exits the process on failure."""
    if notion.database_exists():
        return

    logger.info("Database does not exist, creating it...")
    try:
        notion.create_database()
    except NotionError as e:
        logger.error(f"Failed to create Notion database: {e}")
        sys.exit(1)


def process_place(
    place: dict,
    places: PlacesClient,
    notion: NotionClient,
    run_ctx: RunContext,
    dry_run: bool = False,
):
    """
    Look up details for one place, map it and insert it.
    Failures are logged and counted, never raised.
    """
    name = place.get("name", "<unnamed>")

    try:
        details = places.place_details(place.get("place_id", ""))
    except PlacesError as e:
        logger.error(f"Failed to get place details for {name}: {e}")
        run_ctx.increment("errors")
        return

    business = build_business(place, details)

    if dry_run:
        logger.info(
            f"[dry-run] Would insert: {business.name} | {business.address} | "
            f"{business.website_status} | {business.urgency}"
        )
        return

    try:
        inserted = notion.insert_business(business)
    except NotionError as e:
        logger.error(f"Failed to insert {business.name} into Notion: {e}")
        run_ctx.increment("errors")
        return

    if not inserted:
        run_ctx.increment("duplicates_skipped")
        return

    run_ctx.increment("businesses_inserted")
    logger.info(
        f"Inserted: {business.name} | {business.address} | "
        f"Types: {business.types} | {business.website_status} | Urgency: {business.urgency}"
    )


def search_place_type(
    place_type: str,
    places: PlacesClient,
    notion: NotionClient,
    run_ctx: RunContext,
    dry_run: bool = False,
):
    """Walk every result page for one place type."""
    logger.info(f"Searching for places of type: {place_type}")
    run_ctx.increment("categories_attempted")

    try:
        for page in places.iter_pages(place_type):
            results = page.get("results", [])
            run_ctx.increment("pages_fetched")
            run_ctx.increment("places_found", len(results))

            for place in results:
                process_place(place, places, notion, run_ctx, dry_run=dry_run)
    except PlacesError as e:
        # Later pages for this type are abandoned
        logger.error(f"Failed to perform nearby search for {place_type}: {e}")
        run_ctx.increment("errors")
        return

    run_ctx.increment("categories_succeeded")


def run(
    config: Config = None,
    place_types: Optional[List[str]] = None,
    dry_run: bool = False,
    places_client: PlacesClient = None,
    notion_client: NotionClient = None,
) -> dict:
    """
    Main entry point for a full search-and-sync run.

    Args:
        config: Configuration (loads from env if not provided)
        place_types: Restrict the search to these types (defaults to config)
        dry_run: Skip database creation and inserts, only log
        places_client: Pre-built Places client (mainly for tests)
        notion_client: Pre-built Notion client (mainly for tests)

    Returns:
        Run statistics.
    """
    if config is None:
        config = load_config()

    errors = validate_config(config)
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        logger.error("Cannot proceed with invalid configuration")
        sys.exit(1)

    places = places_client if places_client is not None else PlacesClient(config.places, config.search)
    notion = notion_client if notion_client is not None else NotionClient(config.notion)

    if dry_run:
        logger.info("=== DRY-RUN MODE: Nothing will be written to Notion ===")
    else:
        ensure_database(notion)

    with RunContext(logger) as run_ctx:
        for place_type in place_types or config.search.place_types:
            search_place_type(place_type, places, notion, run_ctx, dry_run=dry_run)

    return run_ctx.stats


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Find local businesses with Google Places and record them in Notion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m business_finder                       Full run
  python -m business_finder --place-type bakery   Only search bakeries
  python -m business_finder --dry-run             Search but don't write to Notion
  python -m business_finder --validate            Check configuration
        """
    )

    parser.add_argument(
        "--place-type",
        action="append",
        dest="place_types",
        metavar="TYPE",
        help="Place type to search (repeatable, defaults to the built-in list)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Search and map businesses without writing to Notion",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    args = parser.parse_args()

    setup_logging()
    config = load_config()

    if args.validate:
        errors = validate_config(config)
        if errors:
            print("Configuration errors:")
            for error in errors:
                print(f"  - {error}")
            sys.exit(1)
        else:
            print("Configuration valid")
            return

    run(
        config=config,
        place_types=args.place_types,
        dry_run=args.dry_run,
    )


if __name__ == "__main__":
    main()
