import asyncio
import contextlib
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from searchcrawl.api.auth import WS_UNAUTHORIZED, identity_from_websocket, require_identity
from searchcrawl.domain.crawl_event import DONE, ERROR, RESULT, CrawlEvent
from searchcrawl.domain.crawl_request import CrawlRequest
from searchcrawl.services.event_emitter import CollectingEventSink
from searchcrawl.services.session_controller import STOPPED_MESSAGE, SessionController

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    startUrl: Optional[str] = None
    keyword: Optional[str] = None


class _LoopQueueEventSink:
    """Hands records from a crawl thread to the socket's event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop, outbox: asyncio.Queue):
        self._loop = loop
        self._outbox = outbox
        self.closed = False

    def send(self, record: dict) -> None:
        if self.closed or self._loop.is_closed():
            logger.debug("Socket gone; dropping %s event", record["type"])
            return
        self._loop.call_soon_threadsafe(self._outbox.put_nowait, record)


async def _drain(websocket: WebSocket, outbox: asyncio.Queue) -> None:
    while True:
        record = await outbox.get()
        await websocket.send_text(json.dumps(record, ensure_ascii=False))


async def _stop_sender(sender: asyncio.Task, identity: str) -> None:
    sender.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        try:
            await sender
        except Exception:
            logger.debug("Event sender for %s failed after the socket closed", identity, exc_info=True)


def create_crawls_router(session_controller: SessionController):
    router = APIRouter(prefix="/crawls", tags=["Crawls"])

    @router.post("/search")
    def search(req: SearchRequest, identity: str = Depends(require_identity)):
        """Run a crawl to completion and return every URL whose text contains the keyword."""
        sink = CollectingEventSink()
        request = CrawlRequest(start_address=req.startUrl or "", keyword=req.keyword or "")
        started = session_controller.start(identity, request, sink)

        terminal = sink.records[-1] if sink.records else None
        if not started:
            if terminal is not None and terminal["type"] == ERROR:
                raise HTTPException(status_code=400, detail=terminal["payload"])
            raise HTTPException(status_code=409, detail="a search is already running")
        if terminal is None or terminal["type"] != DONE:
            raise HTTPException(status_code=500, detail="search failed")

        found = [r["payload"] for r in sink.records if r["type"] == RESULT]
        return {
            "status": "stopped" if terminal["payload"] == STOPPED_MESSAGE else "completed",
            "found_urls": found,
            "events": sink.records,
        }

    @router.post("/stop")
    def stop(identity: str = Depends(require_identity)):
        if not session_controller.request_stop(identity):
            raise HTTPException(status_code=404, detail="no running search")
        return {"status": "stopping"}

    @router.get("/active")
    def list_active(identity: str = Depends(require_identity)):
        """The caller's own running session, if any; other identities stay hidden."""
        state = session_controller.get(identity)
        return {"active": [state] if state is not None else []}

    @router.websocket("/ws")
    async def crawl_socket(websocket: WebSocket):
        identity = identity_from_websocket(websocket)
        if identity is None:
            await websocket.close(code=WS_UNAUTHORIZED)
            return
        await websocket.accept()

        outbox: asyncio.Queue = asyncio.Queue()
        sink = _LoopQueueEventSink(asyncio.get_running_loop(), outbox)
        sender = asyncio.create_task(_drain(websocket, outbox))
        try:
            while True:
                try:
                    message = await websocket.receive_json()
                except ValueError:
                    outbox.put_nowait(CrawlEvent.error("messages must be JSON objects").to_record())
                    continue
                action = message.get("action") if isinstance(message, dict) else None
                if action == "start":
                    request = CrawlRequest(
                        start_address=message.get("startUrl") or "",
                        keyword=message.get("keyword") or "",
                    )
                    session_controller.start_in_background(identity, request, sink)
                elif action == "stop":
                    session_controller.request_stop(identity)
                else:
                    outbox.put_nowait(CrawlEvent.error(f"unknown action: {action!r}").to_record())
        except WebSocketDisconnect:
            logger.info("Socket closed for %s", identity)
            session_controller.request_stop(identity)
        finally:
            sink.closed = True
            await _stop_sender(sender, identity)

    return router
