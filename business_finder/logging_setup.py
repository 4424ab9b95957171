"""
Logging for Business Finder: stderr plus a rotating file under logs/.
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone

from .config import LOG_DIR

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s.%(funcName)s: %(message)s"
LOG_FILE_NAME = "business-finder.log"


def setup_logging(
    name: str = "business_finder",
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Attach a rotating file handler and a stderr handler to the package logger.

    Safe to call more than once; handlers are only added the first time.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [
        logging.handlers.RotatingFileHandler(
            filename=LOG_DIR / LOG_FILE_NAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ),
        logging.StreamHandler(sys.stderr),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(module_name: str) -> logging.Logger:
    return logging.getLogger(f"business_finder.{module_name}")


class RunContext:
    """
    Tracks one search-and-sync run: an id for log correlation, timing,
    and counters for categories, pages, places, inserts, duplicates and errors.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.started_at = None
        self.run_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        self.stats = dict.fromkeys((
            "categories_attempted",
            "categories_succeeded",
            "pages_fetched",
            "places_found",
            "businesses_inserted",
            "duplicates_skipped",
            "errors",
        ), 0)

    def __enter__(self):
        self.started_at = datetime.now(timezone.utc)
        self.logger.info(f"=== Run started: {self.run_id} ===")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = datetime.now(timezone.utc) - self.started_at
        if exc_type:
            self.logger.error(f"Run {self.run_id} aborted by {exc_type.__name__}: {exc_val}")
        self.logger.info(f"=== Run completed: {self.run_id} | Elapsed: {elapsed} | Stats: {self.stats} ===")
        return False

    def increment(self, stat: str, amount: int = 1):
        """Add to a counter; names that are not tracked are ignored."""
        if stat in self.stats:
            self.stats[stat] += amount
