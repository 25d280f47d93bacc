import threading

import pytest

from searchcrawl.domain.extracted_content import ContentKind, ExtractedContent
from searchcrawl.exceptions import HttpFetchError
from searchcrawl.services.crawl_executor import CrawlExecutor
from searchcrawl.services.session_controller import SessionController
from searchcrawl.services.session_registry import SessionRegistry
from searchcrawl.services.url_filter import UrlFilter


def html_page(text, *links):
    return ExtractedContent(
        kind=ContentKind.HTML,
        text=text,
        links=list(links),
        content_type="text/html; charset=utf-8",
        status_code=200,
    )


class FakeDispatcher:
    """Serves canned ExtractedContent per address; unknown addresses fail like a 404."""

    def __init__(self, pages):
        self.pages = dict(pages)
        self.calls = []
        self.on_fetch = None

    def classify_and_extract(self, address):
        self.calls.append(address)
        if self.on_fetch is not None:
            self.on_fetch(address)
        page = self.pages.get(address)
        if page is None:
            raise HttpFetchError(address, RuntimeError("HTTP 404"))
        if isinstance(page, Exception):
            raise page
        return page


class BlockingDispatcher(FakeDispatcher):
    """Blocks every fetch until `release` is set, signalling `entered` first."""

    def __init__(self, pages):
        super().__init__(pages)
        self.entered = threading.Event()
        self.release = threading.Event()

    def classify_and_extract(self, address):
        self.entered.set()
        assert self.release.wait(timeout=5), "test never released the fetch"
        return super().classify_and_extract(address)


@pytest.fixture
def make_controller():
    def _make(dispatcher, registry=None):
        registry = registry if registry is not None else SessionRegistry()
        return SessionController(
            registry=registry,
            executor_factory=lambda: CrawlExecutor(dispatcher=dispatcher, url_filter=UrlFilter()),
        )
    return _make
