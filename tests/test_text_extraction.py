"""
Tests for resume upload validation and text extraction.
"""

from io import BytesIO

import pytest
from docx import Document
from pypdf import PdfWriter

from hireboard.text_extraction import (
    DOCX_MIME,
    PDF_MIME,
    FileTooLargeError,
    ResumeUploadError,
    TextExtractionError,
    UnsupportedFileTypeError,
    extract_resume_text,
    extract_text,
    file_type_for,
    validate_upload,
)


@pytest.fixture
def docx_bytes():
    document = Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("Experience: built data pipelines in Python for five years.")
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def blank_pdf_bytes():
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_file_type_mapping():
    assert file_type_for(PDF_MIME) == "pdf"
    assert file_type_for(DOCX_MIME) == "docx"


@pytest.mark.parametrize("mime", ["text/plain", "application/msword", "image/png", ""])
def test_unsupported_types(mime):
    with pytest.raises(UnsupportedFileTypeError):
        file_type_for(mime)


def test_upload_size_limit():
    assert validate_upload(PDF_MIME, 1024, max_bytes=2048) == "pdf"

    with pytest.raises(FileTooLargeError, match="Maximum size is 5MB"):
        validate_upload(PDF_MIME, 5 * 1024 * 1024 + 1)


def test_upload_errors_share_a_base_class():
    for error in (UnsupportedFileTypeError, FileTooLargeError, TextExtractionError):
        assert issubclass(error, ResumeUploadError)


def test_docx_paragraphs_joined_by_newlines(docx_bytes):
    text = extract_text(docx_bytes, DOCX_MIME)
    assert text == "Jane Doe\nExperience: built data pipelines in Python for five years."


def test_extract_resume_text_accepts_enough_text(docx_bytes):
    text = extract_resume_text(docx_bytes, DOCX_MIME)
    assert text.startswith("Jane Doe")


def test_extract_resume_text_rejects_short_text(docx_bytes):
    with pytest.raises(TextExtractionError, match="Could not extract sufficient text"):
        extract_resume_text(docx_bytes, DOCX_MIME, min_length=500)


def test_blank_pdf_has_no_usable_text(blank_pdf_bytes):
    assert extract_text(blank_pdf_bytes, PDF_MIME) == ""

    with pytest.raises(TextExtractionError):
        extract_resume_text(blank_pdf_bytes, PDF_MIME)


def test_corrupt_documents_raise_extraction_errors():
    with pytest.raises(TextExtractionError, match="PDF"):
        extract_text(b"garbage", PDF_MIME)
    with pytest.raises(TextExtractionError, match="DOCX"):
        extract_text(b"garbage", DOCX_MIME)


def test_size_checked_before_parsing():
    with pytest.raises(FileTooLargeError):
        extract_resume_text(b"x" * 100, PDF_MIME, max_bytes=10)
