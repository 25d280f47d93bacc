import logging
from collections import deque
from typing import Deque, Optional, Set

from searchcrawl.domain.frontier_entry import FrontierEntry
from searchcrawl.domain.visited_tracker import VisitedTracker

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 2


class Frontier:
    """FIFO queue of (address, depth) pairs plus the crawl's visited set.

    Addresses are marked visited when dequeued, not when enqueued, so the seed
    and every discovered link share the same dedup rule.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, visited_tracker: Optional[VisitedTracker] = None):
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth
        self.visited = visited_tracker if visited_tracker is not None else VisitedTracker()
        self._queue: Deque[FrontierEntry] = deque()
        self._queued: Set[str] = set()

    def enqueue(self, entry: FrontierEntry) -> bool:
        if entry.address in self.visited or entry.address in self._queued:
            return False
        self._queue.append(entry)
        self._queued.add(entry.address)
        return True

    def dequeue_next(self) -> Optional[FrontierEntry]:
        """Pop the next entry to process, or None once the frontier is exhausted."""
        while self._queue:
            entry = self._queue.popleft()
            self._queued.discard(entry.address)
            if entry.address in self.visited:
                logger.debug("Skipping (visited) %s", entry.address)
                continue
            self.visited.mark(entry.address)
            if entry.depth > self.max_depth:
                logger.debug("Skipping (max depth reached) %s at depth %s", entry.address, entry.depth)
                continue
            return entry
        return None

    def should_expand(self, entry: FrontierEntry) -> bool:
        return entry.depth < self.max_depth

    def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)
