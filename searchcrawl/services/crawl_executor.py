import logging
from typing import Optional

from searchcrawl.domain.crawl_request import CrawlRequest
from searchcrawl.domain.crawl_result import CrawlOutcome
from searchcrawl.domain.extracted_content import ContentKind, ExtractedContent
from searchcrawl.domain.frontier_entry import FrontierEntry
from searchcrawl.exceptions import ContentExtractionError, HttpFetchError
from searchcrawl.services.content_dispatcher import ContentDispatcher
from searchcrawl.services.event_emitter import EventEmitter
from searchcrawl.services.frontier import DEFAULT_MAX_DEPTH, Frontier
from searchcrawl.services.keyword_normalizer import KeywordMatcher
from searchcrawl.services.url_filter import UrlFilter

logger = logging.getLogger(__name__)


class CrawlExecutor:
    """Runs the breadth-first traversal loop of one crawl.

    This class owns the crawl control-flow (frontier, cancellation checks,
    dispatching fetches, matching and link expansion). It does NOT own session
    bookkeeping or terminal events; those stay with the SessionController.
    """

    def __init__(
        self,
        *,
        dispatcher: ContentDispatcher,
        url_filter: UrlFilter,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.dispatcher = dispatcher
        self.url_filter = url_filter
        self.max_depth = int(max_depth)

    def _is_stopped(self, stop_event) -> bool:
        return stop_event is not None and getattr(stop_event, "is_set", lambda: False)()

    def run(self, request: CrawlRequest, emitter: EventEmitter, stop_event=None) -> CrawlOutcome:
        matcher = KeywordMatcher(request.keyword)
        frontier = Frontier(max_depth=self.max_depth)
        frontier.enqueue(FrontierEntry(request.start_address.strip(), 0))

        pages_processed = 0
        matches = 0
        while True:
            # Cancellation is observed once per iteration, before dequeuing.
            if self._is_stopped(stop_event):
                logger.info("Crawl cancelled with %d entries left in frontier", len(frontier))
                return CrawlOutcome(pages_processed, matches, stopped=True)

            entry = frontier.dequeue_next()
            if entry is None:
                return CrawlOutcome(pages_processed, matches, stopped=False)

            pages_processed += 1
            emitter.progress(entry.address)
            logger.info("Searching depth %s: %s", entry.depth, entry.address)

            content = self.fetch_and_extract(entry.address, emitter)
            if content is None:
                continue

            if matcher.matches(content.text) and emitter.result(entry.address, entry.depth):
                matches += 1
                logger.info("Keyword found at %s (depth %s)", entry.address, entry.depth)

            if frontier.should_expand(entry) and content.links:
                self.expand_links(entry, content, frontier)

    def fetch_and_extract(self, address: str, emitter: EventEmitter) -> Optional[ExtractedContent]:
        """Fetch and extract one address.

        Returns None on failure or when the content type is unsupported; the
        reason is reported as a log event and the crawl carries on.
        """
        try:
            content = self.dispatcher.classify_and_extract(address)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", address, e.original)
            emitter.log(f"fetch failed for {address}: {e.original}")
            return None
        except ContentExtractionError as e:
            logger.warning("Extraction failed for %s: %s", address, e.original)
            emitter.log(f"could not parse {address}: {e.original}")
            return None
        except Exception as e:
            logger.error("Fetch error for %s: %s", address, e, exc_info=True)
            emitter.log(f"error while fetching {address}: {e}")
            return None

        if content.kind is ContentKind.SKIP:
            emitter.log(f"skipped {address}: unsupported content type {content.content_type or 'unknown'}")
            return None
        return content

    def expand_links(self, entry: FrontierEntry, content: ExtractedContent, frontier: Frontier) -> int:
        added = 0
        for address in self.url_filter.expand(content.links, entry.address):
            if frontier.enqueue(FrontierEntry(address, entry.depth + 1)):
                added += 1
        logger.debug("Queued %d new links from %s", added, entry.address)
        return added
