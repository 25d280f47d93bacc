import logging
from typing import Optional

from fastapi import Header, HTTPException, WebSocket

logger = logging.getLogger(__name__)

IDENTITY_HEADER = "X-Crawl-Identity"
# Close code for sockets opened without an identity (4000-4999 are application codes).
WS_UNAUTHORIZED = 4401


def _clean(identity: Optional[str]) -> Optional[str]:
    if identity is None:
        return None
    identity = identity.strip()
    return identity or None


def require_identity(x_crawl_identity: Optional[str] = Header(None)) -> str:
    """Resolve the caller identity that scopes crawl sessions."""
    identity = _clean(x_crawl_identity)
    if identity is None:
        raise HTTPException(status_code=401, detail=f"{IDENTITY_HEADER} header required")
    return identity


def identity_from_websocket(websocket: WebSocket) -> Optional[str]:
    identity = _clean(websocket.headers.get(IDENTITY_HEADER))
    if identity is None:
        identity = _clean(websocket.query_params.get("identity"))
    return identity
