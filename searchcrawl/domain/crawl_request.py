from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from searchcrawl.exceptions import CrawlValidationError

ALLOWED_SCHEMES = ("http", "https")


def is_valid_start_address(address) -> bool:
    """True for an absolute http(s) URI with a host."""
    if not isinstance(address, str) or not address.strip():
        return False
    try:
        parsed = urlparse(address.strip())
        # Accessing .port validates the netloc (raises on e.g. ":abc").
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.hostname)


@dataclass(frozen=True)
class CrawlRequest:
    """Read-only input of one crawl: where to start and what to look for."""

    start_address: str
    keyword: str

    def validate(self) -> None:
        if not is_valid_start_address(self.start_address):
            raise CrawlValidationError("a valid http(s) start URL is required")
        if not isinstance(self.keyword, str) or not self.keyword.strip():
            raise CrawlValidationError("a non-empty keyword is required")
