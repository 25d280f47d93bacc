"""Custom exceptions for SearchCrawl services."""


class CrawlValidationError(Exception):
    """Raised when a crawl request has a malformed seed address or empty keyword."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors or an error status."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class ContentExtractionError(Exception):
    """Raised when a fetched body cannot be parsed into text."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"Content extraction failed for {url}: {original}")


class EventStreamClosedError(Exception):
    """Raised when an event is emitted after the session's terminal event."""
