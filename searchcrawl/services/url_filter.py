import logging
from typing import Iterable, List, Optional
from urllib.parse import urldefrag, urljoin, urlparse

from searchcrawl.config import DEFAULT_IGNORED_EXTENSIONS
from searchcrawl.domain.crawl_request import ALLOWED_SCHEMES

logger = logging.getLogger(__name__)


def resolve(link: Optional[str], base_address: str) -> Optional[str]:
    """Resolve `link` against `base_address`; None if the result is not an absolute URI."""
    if link is None or not link.strip():
        return None
    try:
        joined, _ = urldefrag(urljoin(base_address, link.strip()))
        parsed = urlparse(joined)
        parsed.port
    except ValueError:
        logger.debug("Could not resolve %r against %s", link, base_address)
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return joined


def is_crawlable(address: str, ignored_extensions: Iterable[str] = DEFAULT_IGNORED_EXTENSIONS) -> bool:
    try:
        parsed = urlparse(address)
    except ValueError:
        return False
    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return False
    last_segment = (parsed.path or "").rsplit("/", 1)[-1].lower()
    return not any(last_segment.endswith(ext) for ext in ignored_extensions)


class UrlFilter:
    """Resolves discovered links and keeps only crawlable document addresses."""

    def __init__(self, ignored_extensions: Iterable[str] = DEFAULT_IGNORED_EXTENSIONS):
        self.ignored_extensions = frozenset(ext.lower() for ext in ignored_extensions)

    def resolve(self, link: Optional[str], base_address: str) -> Optional[str]:
        return resolve(link, base_address)

    def is_crawlable(self, address: str) -> bool:
        return is_crawlable(address, self.ignored_extensions)

    def expand(self, links: Iterable[str], base_address: str) -> List[str]:
        """Resolve and filter `links`, de-duplicated in discovery order."""
        seen = set()
        addresses = []
        for link in links:
            address = self.resolve(link, base_address)
            if address is None:
                continue
            if not self.is_crawlable(address):
                logger.debug("Skipping (not crawlable) %s", address)
                continue
            if address in seen:
                continue
            seen.add(address)
            addresses.append(address)
        return addresses
