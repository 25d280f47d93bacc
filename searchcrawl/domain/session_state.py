from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SessionState:
    """Per-identity crawl state held by the session registry."""

    identity: str
    started_at: datetime
    running: bool = True
    stop_event: threading.Event = field(default_factory=threading.Event)

    @property
    def cancel_requested(self) -> bool:
        return self.stop_event.is_set()

    def snapshot(self) -> dict:
        return {
            "identity": self.identity,
            "running": self.running,
            "cancel_requested": self.cancel_requested,
            "started_at": self.started_at,
        }


@dataclass(frozen=True)
class SessionHandle:
    identity: str
    stop_event: threading.Event
