"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from searchcrawl import config as env
from searchcrawl.services.content_dispatcher import ContentDispatcher
from searchcrawl.services.crawl_executor import CrawlExecutor
from searchcrawl.services.html_text_extractor import HtmlTextExtractor
from searchcrawl.services.http_service import HttpService
from searchcrawl.services.pdf_text_extractor import PdfTextExtractor
from searchcrawl.services.session_controller import SessionController
from searchcrawl.services.session_registry import SessionRegistry
from searchcrawl.services.url_filter import UrlFilter


# Environment variables used by the container (read via `searchcrawl.config` helpers).
#
# USER_AGENT (str, default: "SearchCrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (float seconds, default: 5)
#   Timeout for each outbound fetch. A timed-out fetch is logged and skipped.
#
# MAX_DEPTH (int, default: 2)
#   Hop count cap from the seed. Links are only expanded below this depth.
#
# IGNORED_EXTENSIONS (comma-separated, default: images, styles, scripts, fonts, archives)
#   Discovered links whose last path segment ends with one of these are never queued.
#
# LOG_LEVEL (str, default: "INFO")
#   Root logging level configured by run.py.
#
# HOST / PORT (default: "0.0.0.0" / 3000)
#   Bind address of the API server.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "SearchCrawl/0.1"),
    "HTTP_TIMEOUT": env.get_float_env("HTTP_TIMEOUT", 5.0),
    "MAX_DEPTH": env.get_int_env("MAX_DEPTH", 2),
    "IGNORED_EXTENSIONS": env.ignored_extensions(),
    "LOG_LEVEL": env.log_level(),
    "HOST": env.get_str_env("HOST", "0.0.0.0"),
    "PORT": env.get_int_env("PORT", 3000),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SearchCrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Services - Singleton instances
    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(float),
    )

    html_text_extractor = providers.Singleton(HtmlTextExtractor)

    pdf_text_extractor = providers.Singleton(PdfTextExtractor)

    content_dispatcher = providers.Singleton(
        ContentDispatcher,
        http_service=http_service,
        html_extractor=html_text_extractor,
        document_extractor=pdf_text_extractor,
    )

    url_filter = providers.Singleton(
        UrlFilter,
        ignored_extensions=config.IGNORED_EXTENSIONS,
    )

    session_registry = providers.Singleton(SessionRegistry)

    crawl_executor = providers.Factory(
        CrawlExecutor,
        dispatcher=content_dispatcher,
        url_filter=url_filter,
        max_depth=config.MAX_DEPTH.as_(int),
    )

    session_controller = providers.Singleton(
        SessionController,
        registry=session_registry,
        executor_factory=crawl_executor.provider,
    )
