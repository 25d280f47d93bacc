from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation.

    `content` holds the raw body bytes and is None when the body was not read
    (unsupported type). Decoding is left to the extractor for the content type.
    """
    status_code: int
    content_type: Optional[str] = None
    content: Optional[bytes] = None
