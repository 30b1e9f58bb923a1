"""
Main Input Handler Module.

This module provides the InputHandler class that turns invoice files
into plain text for the extraction engine. It detects the file type and
delegates to the matching reader.

Usage:
    from invoice_engine.input_handler import InputHandler

    handler = InputHandler()
    document = handler.load("invoice.pdf")

    # Collect a directory
    files = handler.collect_files("./invoices/")

Classes:
    LoadedDocument: Text of one document plus its origin
    InputHandler: Main class for file input handling
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

import pdfplumber

from config import get_config
from invoice_engine.extraction.models import DocumentOrigin
from invoice_engine.utils.logger import get_logger
from invoice_engine.utils.helpers import get_file_extension
from invoice_engine.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    DocumentNotFoundError,
    CorruptedFileError,
    OCREngineNotAvailableError
)


# Initialize module logger
logger = get_logger(__name__)


@dataclass
class LoadedDocument:
    """
    Data class representing a document turned into text.

    Attributes:
        filepath: Original file path
        filename: Original filename
        text: Extracted plain text
        origin: How the text was obtained
    """
    filepath: str
    filename: str
    text: str
    origin: DocumentOrigin

    def __repr__(self) -> str:
        return (
            f"LoadedDocument(filename='{self.filename}', "
            f"origin='{self.origin.value}', "
            f"chars={len(self.text)})"
        )


class InputHandler:
    """
    Main input handler for invoice files.

    Text files are read directly and digital PDFs go through pdfplumber.
    Scanned images need an OCR engine, which is not part of this package.

    Attributes:
        encoding: Encoding for text files
        text_extensions: Suffixes read as plain text
        pdf_extensions: Suffixes read with pdfplumber
        image_extensions: Suffixes recognised as scanned images

    Example:
        >>> handler = InputHandler()
        >>> document = handler.load("invoice.txt")
        >>> print(document.origin)
        DocumentOrigin.TEXT_DOCUMENT
    """

    # Default file extensions
    TEXT_EXTENSIONS = ['.txt', '.text']
    PDF_EXTENSIONS = ['.pdf']
    IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.tiff', '.tif', '.bmp']

    def __init__(self) -> None:
        """Initialize the InputHandler from configuration."""
        self.encoding = get_config("input.text_encoding", "utf-8")

        self.text_extensions = self._extensions("input.text_extensions", self.TEXT_EXTENSIONS)
        self.pdf_extensions = self._extensions("input.pdf_extensions", self.PDF_EXTENSIONS)
        self.image_extensions = self._extensions("input.image_extensions", self.IMAGE_EXTENSIONS)

        logger.debug(
            f"InputHandler initialized with extensions: "
            f"{sorted(self.supported_extensions)}"
        )

    @staticmethod
    def _extensions(key: str, default: List[str]) -> set:
        return {ext.lower() for ext in get_config(key, default)}

    @property
    def supported_extensions(self) -> set:
        """Every suffix the handler recognises, images included."""
        return self.text_extensions | self.pdf_extensions | self.image_extensions

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of input file.

        Args:
            filepath: Path to the file to analyze.

        Returns:
            File type string: 'text', 'pdf' or 'image'.

        Raises:
            UnsupportedFileTypeError: If file type is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.text_extensions:
            return 'text'
        elif extension in self.pdf_extensions:
            return 'pdf'
        elif extension in self.image_extensions:
            return 'image'
        else:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists and is a regular file.

        Args:
            filepath: Path to the file to validate.

        Returns:
            Path object pointing to the validated file.

        Raises:
            DocumentNotFoundError: If file doesn't exist.
            InputError: If the path is not a file.
        """
        path = Path(filepath)

        if not path.exists():
            raise DocumentNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        return path

    def load(self, filepath: Union[str, Path]) -> LoadedDocument:
        """
        Load a document and return its text.

        Args:
            filepath: Path to the invoice file.

        Returns:
            LoadedDocument with the text and its origin.

        Raises:
            DocumentNotFoundError: If the file is missing.
            UnsupportedFileTypeError: If the suffix is not recognised.
            CorruptedFileError: If the file cannot be read.
            OCREngineNotAvailableError: If the file is a scanned image.
        """
        path = self.validate_file(filepath)
        file_type = self.detect_file_type(path)

        logger.info(f"Loading {file_type} file: {path.name}")

        if file_type == 'text':
            text = self._read_text(path)
        elif file_type == 'pdf':
            text = self._read_pdf(path)
        else:
            raise OCREngineNotAvailableError("tesseract", str(path))

        return LoadedDocument(
            filepath=str(filepath),
            filename=path.name,
            text=text,
            origin=DocumentOrigin.TEXT_DOCUMENT
        )

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (UnicodeDecodeError, OSError) as e:
            raise CorruptedFileError(str(path), str(e)) from e

    def _read_pdf(self, path: Path) -> str:
        """
        Extract the embedded text of a digital PDF.

        Args:
            path: Path to the PDF file.

        Returns:
            Page texts joined by newlines.

        Raises:
            CorruptedFileError: If pdfplumber cannot open the file.
        """
        try:
            with pdfplumber.open(path) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            raise CorruptedFileError(str(path), str(e)) from e

        logger.debug(f"Extracted text from {len(pages)} PDF page(s): {path.name}")
        return "\n".join(pages)

    def collect_files(self, directory: Union[str, Path]) -> List[Path]:
        """
        List every supported file in a directory (non-recursive).

        Args:
            directory: Path to directory containing invoice files.

        Returns:
            Sorted list of file paths.

        Raises:
            DocumentNotFoundError: If the directory doesn't exist.
            InputError: If the path is not a directory.
        """
        directory = Path(directory)

        if not directory.exists():
            raise DocumentNotFoundError(str(directory))

        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        files = sorted(
            path for path in directory.iterdir()
            if path.is_file() and get_file_extension(path) in self.supported_extensions
        )

        logger.info(f"Found {len(files)} files to process in {directory}")
        return files
