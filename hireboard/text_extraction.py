"""
Resume Text Extraction - uploaded PDF/DOCX files to plain text

Validates uploads (type whitelist, size limit) and pulls text out of the
document so the scorer can work on it.
"""

import logging
from io import BytesIO
from typing import Dict

from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# MIME type -> stored file type
ALLOWED_TYPES: Dict[str, str] = {
    PDF_MIME: "pdf",
    DOCX_MIME: "docx",
}

DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_MIN_TEXT_LENGTH = 50


class ResumeUploadError(Exception):
    """Base class for rejected resume uploads."""

    pass


class UnsupportedFileTypeError(ResumeUploadError):
    """Raised when the upload is not a PDF or DOCX file."""

    pass


class FileTooLargeError(ResumeUploadError):
    """Raised when the upload exceeds the configured size limit."""

    pass


class TextExtractionError(ResumeUploadError):
    """Raised when a document cannot be read or yields too little text."""

    pass


def file_type_for(mime_type: str) -> str:
    """
    Map a MIME type to the stored file type ('pdf' or 'docx').

    Raises:
        UnsupportedFileTypeError: For anything outside the whitelist
    """
    try:
        return ALLOWED_TYPES[mime_type]
    except KeyError:
        raise UnsupportedFileTypeError("Invalid file type. Only PDF and DOCX are allowed.")


def validate_upload(mime_type: str, size: int, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    """
    Check an upload before reading it.

    Args:
        mime_type: Declared content type
        size: Payload size in bytes
        max_bytes: Size limit

    Returns:
        Stored file type ('pdf' or 'docx')
    """
    file_type = file_type_for(mime_type)
    if size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise FileTooLargeError(f"File too large. Maximum size is {limit_mb:g}MB.")
    return file_type


def extract_text_from_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(data))
        return "\n".join((page.extract_text() or "") for page in reader.pages).strip()
    except Exception as e:
        logger.error(f"PDF extraction error: {e}")
        raise TextExtractionError(f"Failed to extract text from PDF: {e}") from e


def extract_text_from_docx(data: bytes) -> str:
    try:
        document = Document(BytesIO(data))
        return "\n".join(paragraph.text for paragraph in document.paragraphs).strip()
    except Exception as e:
        logger.error(f"DOCX extraction error: {e}")
        raise TextExtractionError(f"Failed to extract text from DOCX: {e}") from e


def extract_text(data: bytes, mime_type: str) -> str:
    """
    Extract plain text from an uploaded resume.

    Args:
        data: Raw file bytes
        mime_type: Declared content type

    Returns:
        Extracted text

    Raises:
        UnsupportedFileTypeError: Unknown content type
        TextExtractionError: The document could not be parsed
    """
    file_type = file_type_for(mime_type)
    if file_type == "pdf":
        return extract_text_from_pdf(data)
    return extract_text_from_docx(data)


def extract_resume_text(
    data: bytes,
    mime_type: str,
    max_bytes: int = DEFAULT_MAX_BYTES,
    min_length: int = DEFAULT_MIN_TEXT_LENGTH,
) -> str:
    """
    Validate an upload and return text long enough to score.

    Raises:
        ResumeUploadError: Any validation or extraction failure
    """
    validate_upload(mime_type, len(data), max_bytes)
    text = extract_text(data, mime_type)

    if len(text.strip()) < min_length:
        raise TextExtractionError("Could not extract sufficient text from the file")

    return text
