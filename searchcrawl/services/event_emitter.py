from __future__ import annotations

import logging
import queue
import threading
from typing import List, Protocol, Set

from searchcrawl.domain.crawl_event import RESULT, CrawlEvent
from searchcrawl.exceptions import EventStreamClosedError

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Outbound channel for event records; the core is agnostic to the transport."""

    def send(self, record: dict) -> None: ...


class CollectingEventSink:
    def __init__(self):
        self.records: List[dict] = []

    def send(self, record: dict) -> None:
        self.records.append(record)


class QueueEventSink:
    def __init__(self, target: "queue.Queue | None" = None):
        self.queue = target if target is not None else queue.Queue()

    def send(self, record: dict) -> None:
        self.queue.put(record)


class EventEmitter:
    """Writes one session's events to its sink in emission order.

    At most one `result` is sent per address, and nothing may follow the
    terminal `done`/`error` event.
    """

    def __init__(self, sink: EventSink):
        self._sink = sink
        self._lock = threading.Lock()
        self._result_urls: Set[str] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, event: CrawlEvent) -> bool:
        """Send `event`; returns False when it was a duplicate result."""
        with self._lock:
            if self._closed:
                raise EventStreamClosedError(f"cannot emit {event.type!r} after the terminal event")
            if event.type == RESULT:
                url = event.payload["url"]
                if url in self._result_urls:
                    logger.debug("Dropping duplicate result for %s", url)
                    return False
                self._result_urls.add(url)
            if event.is_terminal:
                self._closed = True
            logger.debug("Emitting %s event: %s", event.type, event.payload)
            self._sink.send(event.to_record())
            return True

    def progress(self, url: str) -> bool:
        return self.emit(CrawlEvent.progress(url))

    def result(self, url: str, depth: int) -> bool:
        return self.emit(CrawlEvent.result(url, depth))

    def log(self, message: str) -> bool:
        return self.emit(CrawlEvent.log(message))

    def error(self, message: str) -> bool:
        return self.emit(CrawlEvent.error(message))

    def done(self, message: str) -> bool:
        return self.emit(CrawlEvent.done(message))
