import logging
from typing import Callable, List, NamedTuple, Optional, Union

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Elements whose text is never rendered.
INVISIBLE_TAGS = ("script", "style", "noscript", "template")


class HtmlContent(NamedTuple):
    text: str
    links: List[str]


def _default_soup(markup: Union[bytes, str], encoding: Optional[str]) -> BeautifulSoup:
    if isinstance(markup, bytes):
        return BeautifulSoup(markup, "html.parser", from_encoding=encoding)
    return BeautifulSoup(markup, "html.parser")


class HtmlTextExtractor:
    def __init__(
        self,
        soup_factory: Optional[Callable[[Union[bytes, str], Optional[str]], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or _default_soup

    def extract(self, body: Union[bytes, str, None], encoding: Optional[str] = None) -> HtmlContent:
        """Return the visible text of <body> and the raw href of every <a>.

        Raw bytes are decoded by BeautifulSoup: `encoding` (the header charset)
        wins when given, otherwise the document's own <meta charset> or a
        sniffed encoding is used.
        """
        if not body:
            return HtmlContent("", [])

        soup = self._soup_factory(body, encoding)
        links = [a.get("href") for a in soup.find_all("a", href=True) if a.get("href")]

        for tag in INVISIBLE_TAGS:
            for element in soup.find_all(tag):
                element.decompose()

        root = soup.body if soup.body is not None else soup
        text = root.get_text(separator=" ", strip=True)
        logger.debug("Extracted %d chars and %d links from HTML", len(text), len(links))
        return HtmlContent(text, links)
