"""
Field Extractor Module.

Applies the pattern cascades of a PatternLibrary to document text.

Single-valued fields (ABN, invoice number, payment terms) stop at the
first rule that yields an acceptable value. Multi-valued fields (dates,
amounts) collect every match across the whole cascade.

Author: ML Engineering Team
"""

from typing import Callable, List, Optional

from config import get_config
from invoice_engine.utils.logger import get_logger
from .identifier import IdentifierValidator
from .models import ExtractedField
from .patterns import DEFAULT_LIBRARY, PatternLibrary

# Initialize module logger
logger = get_logger(__name__)


class FieldExtractor:
    """
    Regex-cascade extractor for invoice header fields.

    Confidence priors are fixed per field family and reflect how
    specific the family's rules are.

    Attributes:
        library: Compiled pattern cascades.
        max_amount: Amounts at or above this value are discarded.

    Example:
        >>> extractor = FieldExtractor()
        >>> extractor.extract_invoice_number("Invoice #INV-2024-001").value
        'INV-2024-001'
    """

    ABN_CONFIDENCE = 0.90
    INVOICE_NUMBER_CONFIDENCE = 0.85
    DATE_CONFIDENCE = 0.80
    AMOUNT_CONFIDENCE = 0.75
    PAYMENT_TERMS_CONFIDENCE = 0.75

    MAX_INVOICE_NUMBER_LENGTH = 50
    MIN_DATE_LENGTH = 6

    def __init__(self, library: Optional[PatternLibrary] = None) -> None:
        """
        Initialize the field extractor.

        Args:
            library: Compiled pattern library. Defaults to the shared
                     library compiled at import time.
        """
        self.library = library or DEFAULT_LIBRARY
        self.max_amount = get_config("extraction.amounts.max_value", 1_000_000)

    def _first_match(
        self,
        field_type: str,
        text: str,
        confidence: float,
        clean: Callable[[str], Optional[str]]
    ) -> Optional[ExtractedField[str]]:
        """
        Run a cascade until a rule yields a value that survives `clean`.

        Only the first match of each rule is considered; a rejected
        candidate moves the cascade on to the next rule.

        Args:
            field_type: Cascade key in the library.
            text: Text to search.
            confidence: Confidence assigned to an accepted value.
            clean: Returns the cleaned value, or None to reject it.

        Returns:
            ExtractedField or None.
        """
        for rule in self.library.cascade(field_type):
            raw = rule.search(text)
            if raw is None:
                continue

            value = clean(raw)
            if value is None:
                logger.debug(f"Rule {rule.name} rejected candidate '{raw}'")
                continue

            return ExtractedField(value, confidence, rule.name)
        return None

    def extract_abn(self, text: str) -> Optional[ExtractedField[str]]:
        """
        Extract a checksum-valid ABN.

        Args:
            text: Document text.

        Returns:
            ExtractedField with spaces stripped, or None.
        """
        def clean(raw: str) -> Optional[str]:
            abn = "".join(raw.split())
            return abn if IdentifierValidator.validate(abn) else None

        return self._first_match('abn', text, self.ABN_CONFIDENCE, clean)

    def extract_invoice_number(self, text: str) -> Optional[ExtractedField[str]]:
        """
        Extract the invoice (document) number.

        Args:
            text: Document text.

        Returns:
            ExtractedField with the upper-cased number, or None.
        """
        def clean(raw: str) -> Optional[str]:
            number = raw.strip().upper()
            if not number or len(number) >= self.MAX_INVOICE_NUMBER_LENGTH:
                return None
            return number

        return self._first_match('invoice_number', text, self.INVOICE_NUMBER_CONFIDENCE, clean)

    def extract_payment_terms(self, text: str) -> Optional[ExtractedField[str]]:
        """
        Extract payment terms; the whole matched phrase is the value.

        Args:
            text: Document text.

        Returns:
            ExtractedField or None.
        """
        return self._first_match(
            'payment_terms', text, self.PAYMENT_TERMS_CONFIDENCE, lambda raw: raw.strip()
        )

    def extract_dates(self, text: str) -> List[ExtractedField[str]]:
        """
        Extract every distinct date string, in cascade order.

        The first result is taken as the invoice date and the second
        as the due date.

        Args:
            text: Document text.

        Returns:
            List of ExtractedField, sorted by confidence (stable).
        """
        dates: List[ExtractedField[str]] = []
        seen = set()

        for rule in self.library.cascade('date'):
            for raw in rule.find_all(text):
                date = raw.strip()
                if date in seen or len(date) < self.MIN_DATE_LENGTH:
                    continue
                seen.add(date)
                dates.append(ExtractedField(date, self.DATE_CONFIDENCE, rule.name))

        return sorted(dates, key=lambda d: d.confidence, reverse=True)

    def extract_amounts(self, text: str) -> List[ExtractedField[float]]:
        """
        Extract every distinct monetary amount, largest first.

        Args:
            text: Document text.

        Returns:
            List of ExtractedField with float values.
        """
        amounts: List[ExtractedField[float]] = []
        seen = set()

        for rule in self.library.cascade('amount'):
            for raw in rule.find_all(text):
                amount_str = raw.replace(",", "")
                try:
                    amount = float(amount_str)
                except ValueError:
                    continue

                if 0 < amount < self.max_amount and amount_str not in seen:
                    seen.add(amount_str)
                    amounts.append(ExtractedField(amount, self.AMOUNT_CONFIDENCE, rule.name))

        return sorted(amounts, key=lambda a: a.value, reverse=True)
