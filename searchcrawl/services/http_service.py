import logging
import socket
import threading
import time
from typing import Callable, Optional

import requests

from searchcrawl.domain.http_response import HttpResponse
from searchcrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16 * 1024


def _abort_response(resp) -> None:
    """Shut down the socket under a streamed response so a blocked read returns."""
    connection = getattr(getattr(resp, "raw", None), "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        logger.debug("Socket already closed while aborting response", exc_info=True)


class HttpService:
    """
    HTTP client wrapper for fetching crawl targets.

    Requires http_client callable for dependency injection (DIP compliance).
    This enables easy testing without patching and allows swapping HTTP libraries.

    Responses are streamed: headers arrive first and `read_body(content_type)`
    decides whether the body is downloaded at all. `timeout` bounds each socket
    read and also the whole fetch, so a server dripping a body slowly is cut off
    once the deadline passes.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 5):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str, read_body: Optional[Callable[[Optional[str]], bool]] = None) -> HttpResponse:
        """Fetch URL and return status code, Content-Type and (optionally) the raw body."""
        headers = {"User-Agent": self.user_agent}
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        try:
            ct = None
            if hasattr(resp, "headers"):
                ct = resp.headers.get("Content-Type")

            if resp.status_code >= 400:
                raise HttpFetchError(url, RuntimeError(f"HTTP {resp.status_code}"))

            if read_body is not None and not read_body(ct):
                return HttpResponse(resp.status_code, ct)

            return HttpResponse(resp.status_code, ct, self._read_body(url, resp, deadline))
        finally:
            close = getattr(resp, "close", None)
            if close is not None:
                close()

    def _read_body(self, url: str, resp, deadline: float) -> bytes:
        watchdog = threading.Timer(max(deadline - time.monotonic(), 0), _abort_response, args=(resp,))
        watchdog.daemon = True
        watchdog.start()
        chunks = []
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() >= deadline:
                    break
        except (requests.exceptions.RequestException, OSError) as e:
            if time.monotonic() < deadline:
                raise HttpFetchError(url, e) from e
            logger.debug("Read of %s interrupted at deadline: %s", url, e)
        finally:
            watchdog.cancel()

        if time.monotonic() >= deadline:
            raise HttpFetchError(
                url, requests.exceptions.Timeout(f"body not received within {self.timeout}s")
            )
        return b"".join(chunks)
