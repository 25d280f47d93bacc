import io
import logging
from typing import Optional

from pypdf import PdfReader

logger = logging.getLogger(__name__)


class PdfTextExtractor:
    """Extracts embedded text from PDF documents using pypdf."""

    def extract(self, content: Optional[bytes]) -> str:
        if not content:
            return ""

        reader = PdfReader(io.BytesIO(content))
        chunks = []
        for idx, page in enumerate(reader.pages):
            try:
                extracted = page.extract_text() or ""
            except Exception:
                logger.warning("Could not extract text from PDF page %s", idx, exc_info=True)
                continue
            if extracted.strip():
                chunks.append(extracted.strip())
        return "\n\n".join(chunks)
