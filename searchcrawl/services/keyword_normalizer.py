import unicodedata
from typing import Optional


def normalize_keyword(raw: str) -> str:
    """NFKC-normalize then case fold, so width and case variants compare equal."""
    return unicodedata.normalize("NFKC", raw).casefold()


class KeywordMatcher:
    """Holds the canonical keyword of one crawl and tests page text against it."""

    def __init__(self, raw_keyword: str):
        self.keyword = normalize_keyword(raw_keyword)

    def matches(self, text: Optional[str]) -> bool:
        if not text or not self.keyword:
            return False
        return self.keyword in normalize_keyword(text)
