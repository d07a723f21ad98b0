import logging
from io import BytesIO

from pypdf import PdfReader

from resume_tailor.errors import ExtractionError

logger = logging.getLogger(__name__)


def extract_pdf_text(data: bytes) -> str:
    """Plain text of every page, joined by newlines. Raises ExtractionError on bad input."""
    try:
        reader = PdfReader(BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        logger.warning("PDF parse failed (%d bytes): %s", len(data), e)
        raise ExtractionError() from e

    text = "\n".join(pages)
    logger.debug("PDF parsed: %d pages, %d chars", len(pages), len(text))
    return text
