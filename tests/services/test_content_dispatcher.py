from unittest.mock import Mock

import pytest

from searchcrawl.domain.extracted_content import ContentKind
from searchcrawl.domain.http_response import HttpResponse
from searchcrawl.exceptions import ContentExtractionError, HttpFetchError
from searchcrawl.services.content_dispatcher import ContentDispatcher, charset_of, classify_content_type
from searchcrawl.services.html_text_extractor import HtmlTextExtractor
from searchcrawl.services.keyword_normalizer import KeywordMatcher


class _FakeHttpService:
    def __init__(self, content_type, content=None, status_code=200):
        self.content_type = content_type
        self.content = content
        self.status_code = status_code
        self.body_read = None

    def fetch(self, url, read_body=None):
        self.body_read = read_body(self.content_type) if read_body else True
        if not self.body_read:
            return HttpResponse(self.status_code, self.content_type)
        return HttpResponse(self.status_code, self.content_type, self.content)


def _dispatcher(http_service, document_extractor=None):
    return ContentDispatcher(
        http_service=http_service,
        html_extractor=HtmlTextExtractor(),
        document_extractor=document_extractor or Mock(),
    )


@pytest.mark.parametrize("content_type,kind", [
    ("text/html", ContentKind.HTML),
    ("text/html; charset=Shift_JIS", ContentKind.HTML),
    ("application/xhtml+xml", ContentKind.HTML),
    ("Application/PDF", ContentKind.DOCUMENT),
    ("image/png", ContentKind.SKIP),
    ("application/json", ContentKind.SKIP),
    ("", ContentKind.SKIP),
    (None, ContentKind.SKIP),
])
def test_classify_content_type(content_type, kind):
    assert classify_content_type(content_type) is kind


def test_html_is_parsed_for_text_and_links():
    http = _FakeHttpService("text/html", content=b'<body><p>needle here</p><a href="/next">n</a></body>')
    content = _dispatcher(http).classify_and_extract("https://example.com/")
    assert http.body_read is True
    assert content.kind is ContentKind.HTML
    assert "needle here" in content.text
    assert content.links == ["/next"]
    assert content.status_code == 200


def test_pdf_goes_to_document_extractor():
    http = _FakeHttpService("application/pdf", content=b"%PDF-1.7")
    document_extractor = Mock()
    document_extractor.extract.return_value = "pdf text"
    content = _dispatcher(http, document_extractor).classify_and_extract("https://example.com/r.pdf")
    document_extractor.extract.assert_called_once_with(b"%PDF-1.7")
    assert content.kind is ContentKind.DOCUMENT
    assert content.text == "pdf text"
    assert content.links == []


def test_unsupported_type_is_skipped_without_reading_body():
    http = _FakeHttpService("image/png", content=b"\x89PNG")
    document_extractor = Mock()
    content = _dispatcher(http, document_extractor).classify_and_extract("https://example.com/img")
    assert http.body_read is False
    assert content.kind is ContentKind.SKIP
    assert content.text is None
    assert content.content_type == "image/png"
    document_extractor.extract.assert_not_called()


def test_parser_failure_becomes_content_extraction_error():
    http = _FakeHttpService("application/pdf", content=b"broken")
    document_extractor = Mock()
    document_extractor.extract.side_effect = ValueError("bad xref")
    with pytest.raises(ContentExtractionError) as exc:
        _dispatcher(http, document_extractor).classify_and_extract("https://example.com/r.pdf")
    assert exc.value.url == "https://example.com/r.pdf"
    assert isinstance(exc.value.original, ValueError)


def test_fetch_errors_propagate():
    http = Mock()
    http.fetch.side_effect = HttpFetchError("https://example.com/", RuntimeError("HTTP 500"))
    with pytest.raises(HttpFetchError):
        _dispatcher(http).classify_and_extract("https://example.com/")


@pytest.mark.parametrize("content_type,charset", [
    ("text/html", None),
    ("text/html; charset=UTF-8", "UTF-8"),
    ('text/html; Charset="shift_jis"', "shift_jis"),
    ("text/html; boundary=x", None),
    (None, None),
])
def test_charset_of(content_type, charset):
    assert charset_of(content_type) == charset


def test_utf8_page_without_declared_charset_matches_non_ascii_keyword():
    body = "<html><body><p>東京の検索エンジン</p></body></html>".encode("utf-8")
    http = _FakeHttpService("text/html", content=body)
    content = _dispatcher(http).classify_and_extract("https://example.jp/")
    assert "東京の検索エンジン" in content.text
    assert KeywordMatcher("検索").matches(content.text)


def test_meta_charset_is_honoured_when_header_has_none():
    body = (
        '<html><head><meta charset="shift_jis"></head>'
        "<body><p>検索エンジン</p></body></html>"
    ).encode("shift_jis")
    http = _FakeHttpService("text/html", content=body)
    content = _dispatcher(http).classify_and_extract("https://example.jp/sjis")
    assert KeywordMatcher("検索").matches(content.text)


def test_header_charset_is_used_for_decoding():
    body = "<body><p>Grüße aus Köln</p></body>".encode("iso-8859-1")
    http = _FakeHttpService("text/html; charset=ISO-8859-1", content=body)
    content = _dispatcher(http).classify_and_extract("https://example.de/")
    assert "Grüße aus Köln" in content.text
