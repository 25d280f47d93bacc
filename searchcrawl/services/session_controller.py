import logging
import threading
from typing import Callable, Optional

from searchcrawl.domain.crawl_event import CrawlEvent
from searchcrawl.domain.crawl_request import CrawlRequest
from searchcrawl.exceptions import CrawlValidationError
from searchcrawl.services.crawl_executor import CrawlExecutor
from searchcrawl.services.event_emitter import EventEmitter, EventSink
from searchcrawl.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = "search completed"
STOPPED_MESSAGE = "search stopped by user"


class SessionController:
    """Owns the lifecycle of per-identity crawl sessions.

    idle -> running -> completed | cancelled | errored, after which the
    identity's session state is removed again.
    """

    def __init__(self, *, registry: SessionRegistry, executor_factory: Callable[[], CrawlExecutor]):
        self.registry = registry
        self.executor_factory = executor_factory

    def start(self, identity: str, request: CrawlRequest, sink: EventSink) -> bool:
        """Run a crawl for `identity` to completion, streaming events to `sink`.

        Returns False when the request was rejected or ignored because the
        identity already has a running crawl.
        """
        emitter = EventEmitter(sink)
        try:
            request.validate()
        except CrawlValidationError as e:
            logger.info("Rejected crawl request from %s: %s", identity, e.message)
            emitter.error(e.message)
            return False

        handle = self.registry.start(identity)
        if handle is None:
            logger.info("Ignoring start for %s: a crawl is already running", identity)
            return False

        logger.info("Crawl started for %s: url=%s keyword=%s", identity, request.start_address, request.keyword)
        try:
            outcome = self.executor_factory().run(request, emitter, handle.stop_event)
            if outcome.stopped:
                terminal = CrawlEvent.done(STOPPED_MESSAGE)
            else:
                terminal = CrawlEvent.done(COMPLETED_MESSAGE)
            logger.info(
                "Crawl %s for %s: %d pages, %d matches",
                "stopped" if outcome.stopped else "finished",
                identity,
                outcome.pages_processed,
                outcome.matches,
            )
        except Exception as e:
            logger.exception("Crawl failed for %s", identity)
            terminal = CrawlEvent.error(f"search failed: {e}")
        finally:
            self.registry.finish(handle)

        emitter.emit(terminal)
        return True

    def start_in_background(self, identity: str, request: CrawlRequest, sink: EventSink) -> threading.Thread:
        thread = threading.Thread(
            target=self.start,
            args=(identity, request, sink),
            name=f"crawl-{identity}",
            daemon=True,
        )
        thread.start()
        return thread

    def request_stop(self, identity: str) -> bool:
        ok = self.registry.request_stop(identity)
        if ok:
            logger.info("Stop requested for %s", identity)
        return ok

    def is_running(self, identity: str) -> bool:
        return self.registry.is_running(identity)

    def get(self, identity: str) -> Optional[dict]:
        return self.registry.get(identity)
