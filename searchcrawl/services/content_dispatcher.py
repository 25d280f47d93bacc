from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from searchcrawl.domain.extracted_content import ContentKind, ExtractedContent
from searchcrawl.exceptions import ContentExtractionError
from searchcrawl.services.html_text_extractor import HtmlTextExtractor
from searchcrawl.services.http_service import HttpService
from searchcrawl.services.pdf_text_extractor import PdfTextExtractor

logger = logging.getLogger(__name__)

HTML_TYPES = ("text/html", "application/xhtml+xml")
DOCUMENT_TYPES = ("application/pdf",)


def classify_content_type(content_type: Optional[str]) -> ContentKind:
    if not content_type:
        return ContentKind.SKIP
    mime = content_type.split(";", 1)[0].strip().lower()
    if mime in HTML_TYPES:
        return ContentKind.HTML
    if mime in DOCUMENT_TYPES:
        return ContentKind.DOCUMENT
    return ContentKind.SKIP


def charset_of(content_type: Optional[str]) -> Optional[str]:
    """Return the charset parameter of a Content-Type header, if declared."""
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset":
            return value.strip().strip("\"'") or None
    return None


@dataclass(frozen=True)
class ContentDispatcher:
    """Fetches an address and routes the body to the extractor for its content type.

    Fetch failures surface as HttpFetchError and parser failures as
    ContentExtractionError; the traversal loop turns both into log events.
    """

    http_service: HttpService
    html_extractor: HtmlTextExtractor
    document_extractor: PdfTextExtractor

    def classify_and_extract(self, address: str) -> ExtractedContent:
        response = self.http_service.fetch(
            address,
            read_body=lambda ct: classify_content_type(ct) is not ContentKind.SKIP,
        )
        kind = classify_content_type(response.content_type)

        if kind is ContentKind.SKIP:
            logger.debug("Skipping (content type %s) %s", response.content_type, address)
            return ExtractedContent(
                kind=kind,
                content_type=response.content_type,
                status_code=response.status_code,
            )

        try:
            if kind is ContentKind.HTML:
                html = self.html_extractor.extract(
                    response.content, charset_of(response.content_type)
                )
                text, links = html.text, html.links
            else:
                text, links = self.document_extractor.extract(response.content), []
        except Exception as e:
            raise ContentExtractionError(address, e) from e

        return ExtractedContent(
            kind=kind,
            text=text,
            links=list(links),
            content_type=response.content_type,
            status_code=response.status_code,
        )
