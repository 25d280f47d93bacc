"""Crawl outcome data model."""
from typing import NamedTuple


class CrawlOutcome(NamedTuple):
    """Result of one traversal loop.

    Lets the session controller pick the terminal event and log a summary.
    """
    pages_processed: int
    """Number of addresses that began processing (one `progress` event each)"""

    matches: int
    """Number of `result` events emitted"""

    stopped: bool
    """True if the loop exited because cancellation was requested"""
