from __future__ import annotations

import threading
from datetime import datetime
from typing import Dict, List, Optional

from searchcrawl.domain.session_state import SessionHandle, SessionState


class SessionRegistry:
    """Thread-safe in-memory map of caller identity -> running crawl session.

    Every mutation happens under one lock, so the start-while-running check
    and the insert are a single atomic step. It is ephemeral and designed for
    single-process visibility.
    """

    def __init__(self, *, event_factory=threading.Event):
        self._lock = threading.Lock()
        self._event_factory = event_factory
        self._sessions: Dict[str, SessionState] = {}

    def start(self, identity: str) -> Optional[SessionHandle]:
        """Claim `identity`; None if it already has a running crawl."""
        with self._lock:
            existing = self._sessions.get(identity)
            if existing is not None and existing.running:
                return None
            state = SessionState(
                identity=identity,
                started_at=datetime.utcnow(),
                stop_event=self._event_factory(),
            )
            self._sessions[identity] = state
            return SessionHandle(identity=identity, stop_event=state.stop_event)

    def request_stop(self, identity: str) -> bool:
        """Set the cancellation flag for `identity`. No effect when it has no session."""
        with self._lock:
            state = self._sessions.get(identity)
            if state is None:
                return False
            state.stop_event.set()
            return True

    def finish(self, handle: SessionHandle) -> bool:
        """Remove the session created by `handle`; a newer session for the identity is left alone."""
        with self._lock:
            state = self._sessions.get(handle.identity)
            if state is None or state.stop_event is not handle.stop_event:
                return False
            state.running = False
            del self._sessions[handle.identity]
            return True

    def get(self, identity: str) -> Optional[Dict]:
        with self._lock:
            state = self._sessions.get(identity)
            return state.snapshot() if state else None

    def is_running(self, identity: str) -> bool:
        with self._lock:
            state = self._sessions.get(identity)
            return state is not None and state.running

    def list_active(self) -> List[Dict]:
        with self._lock:
            return [s.snapshot() for s in self._sessions.values() if s.running]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
