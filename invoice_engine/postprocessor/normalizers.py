"""
Data Normalizers Module.

This module normalizes raw date strings captured by the extraction
cascades. Australian documents write dates day-first, so ambiguous
numeric dates are read as DD/MM/YYYY.

Author: ML Engineering Team
"""

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser

from config import get_config
from invoice_engine.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class DateNormalizer:
    """
    Normalizes date strings to a standard format.

    Attributes:
        output_format: Target date format string
        input_formats: Recognized input format strings, tried in order

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("15/01/2024")
        "2024-01-15"
        >>> normalizer.normalize("3 March 2024")
        "2024-03-03"
    """

    DEFAULT_INPUT_FORMATS = [
        "%d/%m/%Y",
        "%d-%m-%Y",
        "%d/%m/%y",
        "%Y-%m-%d",
        "%d %B %Y",
        "%d %b %Y",
    ]

    def __init__(self) -> None:
        """Initialize the date normalizer with configuration."""
        self.output_format = get_config(
            "postprocessing.date.output_format",
            "%Y-%m-%d"
        )
        self.input_formats = get_config(
            "postprocessing.date.input_formats",
            self.DEFAULT_INPUT_FORMATS
        )

        logger.debug(f"DateNormalizer initialized (output: {self.output_format})")

    def parse(self, date_str: str) -> Optional[datetime]:
        """
        Parse a date string.

        Args:
            date_str: Input date string in any recognized format.

        Returns:
            Parsed datetime, or None if parsing fails.
        """
        if not date_str:
            return None

        date_str = self._clean_date_string(date_str)

        parsed = self._try_explicit_formats(date_str)
        if parsed is None:
            parsed = self._try_dateutil_parser(date_str)

        if parsed is None:
            logger.debug(f"Could not parse date: {date_str}")
        return parsed

    def normalize(self, date_str: str) -> Optional[str]:
        """
        Normalize a date string to the configured output format.

        Args:
            date_str: Input date string in any recognized format.

        Returns:
            Normalized date string, or None if parsing fails.
        """
        parsed = self.parse(date_str)
        if parsed is None:
            return None
        return parsed.strftime(self.output_format)

    def _clean_date_string(self, date_str: str) -> str:
        """
        Clean and prepare date string for parsing.

        Args:
            date_str: Raw date string.

        Returns:
            Cleaned date string.
        """
        date_str = ' '.join(date_str.split())

        # Remove ordinal suffixes (1st, 2nd, 3rd, 4th, etc.)
        date_str = re.sub(r'(\d+)(st|nd|rd|th)\b', r'\1', date_str, flags=re.IGNORECASE)

        return date_str.strip()

    def _try_explicit_formats(self, date_str: str) -> Optional[datetime]:
        """
        Try to parse date using explicit format strings.

        Args:
            date_str: Date string to parse.

        Returns:
            Parsed datetime or None.
        """
        for fmt in self.input_formats:
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue
        return None

    def _try_dateutil_parser(self, date_str: str) -> Optional[datetime]:
        """
        Try to parse date using dateutil, day-first.

        Args:
            date_str: Date string to parse.

        Returns:
            Parsed datetime or None.
        """
        try:
            return date_parser.parse(date_str, dayfirst=True)
        except (ValueError, OverflowError):
            return None
