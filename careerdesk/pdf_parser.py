"""Plain-text extraction from uploaded PDF files."""
import io
import logging
import re
from typing import Optional

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_PDF_BYTES = 10 * 1024 * 1024
MIN_PDF_BYTES = 100
MIN_TEXT_CHARS = 10


class PdfExtractionError(ValueError):
    """Raised with a message that can be shown to the user as-is."""


def validate_pdf_upload(filename: Optional[str], content_type: Optional[str], size: int) -> None:
    """Reject uploads that are clearly not usable before reading them."""
    name = (filename or "").lower()
    if content_type != "application/pdf" and not name.endswith(".pdf"):
        raise PdfExtractionError("Please upload a PDF file (.pdf extension)")
    if size > MAX_PDF_BYTES:
        raise PdfExtractionError("PDF file is too large. Please upload a file smaller than 10MB.")
    if size < MIN_PDF_BYTES:
        raise PdfExtractionError("File is too small to be a valid PDF.")


def extract_text_from_pdf(data: bytes) -> str:
    if data[:4] != b"%PDF":
        raise PdfExtractionError(
            "This file appears to be corrupted or not a valid PDF. Please try another file."
        )

    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise PdfExtractionError(
                "This PDF is password-protected or encrypted. Please use an unprotected PDF."
            )
        logger.info(f"PDF loaded successfully. Pages: {len(reader.pages)}")
        parts = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                parts.append(page_text)
    except PdfExtractionError:
        raise
    except PdfReadError as e:
        msg = str(e)
        if "password" in msg.lower() or "encrypt" in msg.lower():
            raise PdfExtractionError(
                "This PDF is password-protected or encrypted. Please use an unprotected PDF."
            ) from e
        raise PdfExtractionError(f"Failed to process PDF: {msg}") from e
    except Exception as e:
        logger.error(f"PDF extraction error: {e}")
        raise PdfExtractionError(f"Failed to process PDF: {e}") from e

    text = re.sub(r"\s+", " ", "\n\n".join(parts)).strip()
    logger.info(f"Extracted text length: {len(text)}")

    if len(text) < MIN_TEXT_CHARS:
        raise PdfExtractionError(
            "Could not extract text from this PDF. It might be an image-based scan. "
            "Try using a text-based PDF."
        )
    return text
