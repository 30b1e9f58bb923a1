"""
Tests for the text-acquisition input handler.
"""

from unittest.mock import MagicMock, patch

import pytest

from invoice_engine.extraction import DocumentOrigin
from invoice_engine.input_handler import InputHandler
from invoice_engine.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    OCREngineNotAvailableError,
    UnsupportedFileTypeError,
)


@pytest.fixture
def handler():
    return InputHandler()


def test_text_file(handler, tmp_path):
    path = tmp_path / "invoice.txt"
    path.write_text("Total Due: $20.00", encoding="utf-8")

    document = handler.load(path)

    assert document.text == "Total Due: $20.00"
    assert document.filename == "invoice.txt"
    assert document.origin == DocumentOrigin.TEXT_DOCUMENT


def test_pdf_pages_joined(handler, tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")

    first, second = MagicMock(), MagicMock()
    first.extract_text.return_value = "Invoice #A1"
    second.extract_text.return_value = None

    with patch("invoice_engine.input_handler.handler.pdfplumber.open") as mock_open:
        mock_open.return_value.__enter__.return_value.pages = [first, second]
        document = handler.load(path)

    assert document.text == "Invoice #A1\n"
    assert document.origin == DocumentOrigin.TEXT_DOCUMENT


def test_unreadable_pdf(handler, tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"garbage")

    with patch("invoice_engine.input_handler.handler.pdfplumber.open", side_effect=ValueError("bad")):
        with pytest.raises(CorruptedFileError):
            handler.load(path)


def test_image_needs_ocr(handler, tmp_path):
    path = tmp_path / "scan.png"
    path.write_bytes(b"\x89PNG")

    with pytest.raises(OCREngineNotAvailableError):
        handler.load(path)


def test_unsupported_suffix(handler, tmp_path):
    path = tmp_path / "invoice.docx"
    path.write_bytes(b"PK")

    with pytest.raises(UnsupportedFileTypeError):
        handler.load(path)


def test_missing_file(handler, tmp_path):
    with pytest.raises(DocumentNotFoundError):
        handler.load(tmp_path / "nope.txt")


def test_collect_files(handler, tmp_path):
    for name in ("b.pdf", "a.txt", "c.docx", "d.PNG"):
        (tmp_path / name).write_bytes(b"x")

    files = handler.collect_files(tmp_path)

    assert [f.name for f in files] == ["a.txt", "b.pdf", "d.PNG"]


def test_collect_files_missing_directory(handler, tmp_path):
    with pytest.raises(DocumentNotFoundError):
        handler.collect_files(tmp_path / "missing")
