from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

PROGRESS = "progress"
RESULT = "result"
LOG = "log"
ERROR = "error"
DONE = "done"

EVENT_TYPES = (PROGRESS, RESULT, LOG, ERROR, DONE)
TERMINAL_TYPES = (ERROR, DONE)


@dataclass(frozen=True)
class CrawlEvent:
    """A single progress/result/log/error/done notification for the caller.

    The payload is `{"url": ...}` for progress, `{"url": ..., "depth": ...}`
    for result and a plain message string for log, error and done.
    """

    type: str
    payload: Any

    def __post_init__(self):
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {self.type!r}")

    @classmethod
    def progress(cls, url: str) -> "CrawlEvent":
        return cls(PROGRESS, {"url": url})

    @classmethod
    def result(cls, url: str, depth: int) -> "CrawlEvent":
        return cls(RESULT, {"url": url, "depth": depth})

    @classmethod
    def log(cls, message: str) -> "CrawlEvent":
        return cls(LOG, message)

    @classmethod
    def error(cls, message: str) -> "CrawlEvent":
        return cls(ERROR, message)

    @classmethod
    def done(cls, message: str) -> "CrawlEvent":
        return cls(DONE, message)

    @property
    def is_terminal(self) -> bool:
        return self.type in TERMINAL_TYPES

    def to_record(self) -> dict:
        payload = dict(self.payload) if isinstance(self.payload, dict) else self.payload
        return {"type": self.type, "payload": payload}

    def to_json(self) -> str:
        return json.dumps(self.to_record(), ensure_ascii=False)

    def encode(self) -> bytes:
        return self.to_json().encode("utf-8")
