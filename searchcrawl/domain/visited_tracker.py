from typing import Iterator, Set


class VisitedTracker:
    """
    Tracks which addresses have been dequeued during one crawl.

    The set only grows: an address marked visited stays visited until the
    tracker is discarded with its frontier at the end of the crawl.
    """

    def __init__(self):
        self._visited: Set[str] = set()

    def mark(self, url: str) -> None:
        """Mark an address as visited."""
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        """Check if an address has been visited."""
        return url in self._visited

    def __contains__(self, url: str) -> bool:
        return url in self._visited

    def __len__(self) -> int:
        return len(self._visited)

    def __iter__(self) -> Iterator[str]:
        return iter(self._visited)
