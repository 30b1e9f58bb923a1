"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the invoice
field engine. A field that could not be found is never an exception;
absence is represented by an empty optional field on the record.

Exception Hierarchy:
    InvoiceExtractionError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── DocumentNotFoundError
    │   └── CorruptedFileError
    ├── OCRError
    │   └── OCREngineNotAvailableError
    └── ExtractionError
        ├── InitializationError
        └── EmptyInputError
"""


class InvoiceExtractionError(Exception):
    """
    Base exception for all invoice field engine errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceExtractionError):
    """Base exception for text-acquisition errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class DocumentNotFoundError(InputError):
    """Raised when an input document cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a file appears to be corrupted or unreadable."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(InvoiceExtractionError):
    """Base exception for OCR-related errors."""
    pass


class OCREngineNotAvailableError(OCRError):
    """Raised when a scanned image needs an OCR engine that is not wired in."""

    def __init__(self, engine_name: str, filepath: str = None):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name, "filepath": filepath}
        super().__init__(message, details)


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================

class ExtractionError(InvoiceExtractionError):
    """Base exception for field-extraction errors."""
    pass


class InitializationError(ExtractionError):
    """
    Raised when a pattern rule fails to compile.

    Fatal: the engine cannot start with a broken rule set.
    """

    def __init__(self, rule_name: str, reason: str = None):
        message = f"Failed to compile pattern rule: {rule_name}"
        details = {"rule": rule_name, "reason": reason}
        super().__init__(message, details)


class EmptyInputError(ExtractionError):
    """Raised when extraction is requested on blank text."""

    def __init__(self, source: str = None):
        message = "Empty text content"
        details = {"source": source} if source else None
        super().__init__(message, details)


__all__ = [
    'InvoiceExtractionError',
    'InputError',
    'UnsupportedFileTypeError',
    'DocumentNotFoundError',
    'CorruptedFileError',
    'OCRError',
    'OCREngineNotAvailableError',
    'ExtractionError',
    'InitializationError',
    'EmptyInputError',
]
