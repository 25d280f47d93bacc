"""Domain objects for SearchCrawl - explicit re-exports to satisfy linters."""
from .crawl_request import CrawlRequest as CrawlRequest
from .crawl_event import CrawlEvent as CrawlEvent
from .frontier_entry import FrontierEntry as FrontierEntry
from .crawl_result import CrawlOutcome as CrawlOutcome
from .session_state import SessionState as SessionState
from .session_state import SessionHandle as SessionHandle

__all__ = ["CrawlRequest", "CrawlEvent", "FrontierEntry", "CrawlOutcome", "SessionState", "SessionHandle"]
