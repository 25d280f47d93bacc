from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ContentKind(str, Enum):
    HTML = "html"
    DOCUMENT = "document"
    SKIP = "skip"


@dataclass(frozen=True)
class ExtractedContent:
    """Outcome of classifying and extracting one address."""

    kind: ContentKind
    text: Optional[str] = None
    links: List[str] = field(default_factory=list)
    content_type: Optional[str] = None
    status_code: Optional[int] = None
