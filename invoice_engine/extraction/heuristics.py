"""
Heuristic Extractors Module.

Fields that no single pattern captures well:
    - VendorNameDetector: letterhead-line heuristic
    - LineItemExtractor: per-line amount and quantity decomposition

Author: ML Engineering Team
"""

from typing import List, Optional

from config import get_config
from invoice_engine.utils.helpers import clean_line
from invoice_engine.utils.logger import get_logger
from .models import ExtractedField, LineItem
from .patterns import DEFAULT_LIBRARY, PatternLibrary, PatternRule

# Initialize module logger
logger = get_logger(__name__)


class VendorNameDetector:
    """
    Picks the vendor name from the top of the document.

    Scans the first few non-empty lines, skipping label lines and bare
    numbers, and accepts the first plausible line. Lines naming a
    business entity ("Pty Ltd", "Inc", ...) get the higher confidence.

    Example:
        >>> VendorNameDetector().detect("Acme Supplies Pty Ltd\\nABN: 51 824 753 556").value
        'Acme Supplies Pty Ltd'
    """

    SKIP_PREFIXES = ("abn", "invoice", "date", "tax", "bill to", "ship to")
    BUSINESS_SUFFIXES = ("pty ltd", "ltd", "limited", "inc", "corp", "llc", "trading as", "t/a")
    NUMERIC_CHARS = set("0123456789-/")

    ENTITY_CONFIDENCE = 0.90
    PLAIN_CONFIDENCE = 0.70
    SOURCE = "vendor_heuristic"

    MIN_LENGTH = 3
    MAX_LENGTH = 100

    def __init__(self, max_lines: Optional[int] = None) -> None:
        self.max_lines = max_lines or get_config("extraction.vendor.max_lines", 10)

    def detect(self, text: str) -> Optional[ExtractedField[str]]:
        """
        Detect the vendor name.

        Args:
            text: Document text.

        Returns:
            ExtractedField or None if no line qualifies.
        """
        lines = [line.strip() for line in text.split("\n")]
        lines = [line for line in lines if line][:self.max_lines]

        for line in lines:
            lower = line.lower()
            if lower.startswith(self.SKIP_PREFIXES):
                continue
            if all(ch in self.NUMERIC_CHARS for ch in line):
                continue

            if self.MIN_LENGTH < len(line) < self.MAX_LENGTH and any(ch.isalpha() for ch in line):
                if any(suffix in lower for suffix in self.BUSINESS_SUFFIXES):
                    confidence = self.ENTITY_CONFIDENCE
                else:
                    confidence = self.PLAIN_CONFIDENCE
                return ExtractedField(line, confidence, self.SOURCE)

        return None


class LineItemExtractor:
    """
    Decomposes invoice lines into line items.

    Each line is handled on its own: the last amount on the line is the
    total, the one before it the unit price, and a "2 x" / "3 @" marker
    gives the quantity.

    Example:
        >>> items = LineItemExtractor().extract("Widget 2 x 5.00 10.00")
        >>> items[0].quantity, items[0].unit_price, items[0].total
        (2.0, 5.0, 10.0)
    """

    QUANTITY_CONFIDENCE = 0.70
    PLAIN_CONFIDENCE = 0.50

    def __init__(self, library: Optional[PatternLibrary] = None) -> None:
        """
        Initialize the line-item extractor.

        Args:
            library: Pattern library providing the amount and quantity rules.
                     Rules it lacks are taken from the default library.
        """
        library = library or DEFAULT_LIBRARY
        self.amount_rule = self._rule(library, 'line_item_amount')
        self.quantity_rule = self._rule(library, 'line_item_quantity')

        self.min_line_length = get_config("extraction.line_items.min_line_length", 10)
        self.max_items = get_config("extraction.line_items.max_items", 50)
        self.max_description_length = get_config(
            "extraction.line_items.max_description_length", 200
        )

    def extract(self, text: str) -> List[LineItem]:
        """
        Extract line items from the whole text.

        Args:
            text: Document text.

        Returns:
            Up to `max_items` line items; extra candidates are dropped.
        """
        items = []
        for raw_line in text.split("\n"):
            item = self.parse_line(raw_line)
            if item is not None:
                items.append(item)

        if len(items) > self.max_items:
            logger.debug(f"Dropping {len(items) - self.max_items} line items over the limit")
        return items[:self.max_items]

    def parse_line(self, line: str) -> Optional[LineItem]:
        """
        Parse one line into a line item.

        Args:
            line: A single line of text.

        Returns:
            LineItem, or None if the line has no usable amount or description.
        """
        line = line.strip()
        if len(line) < self.min_line_length:
            return None

        amounts = self._amounts(line)
        if not amounts:
            return None

        quantity = self._quantity(line)

        total = amounts[-1]
        if len(amounts) >= 2:
            unit_price = amounts[-2]
        elif quantity:
            unit_price = total / quantity
        else:
            unit_price = total

        position = line.find(f"{amounts[0]:.2f}")
        description = line[:position] if position >= 0 else line
        description = clean_line(description)

        if not description or len(description) >= self.max_description_length:
            return None

        return LineItem(
            description=description,
            quantity=quantity,
            unit_price=unit_price,
            total=total,
            confidence=self.QUANTITY_CONFIDENCE if quantity is not None else self.PLAIN_CONFIDENCE
        )

    @staticmethod
    def _rule(library: PatternLibrary, field_type: str) -> PatternRule:
        rules = library.cascade(field_type) or DEFAULT_LIBRARY.cascade(field_type)
        return rules[0]

    def _amounts(self, line: str) -> List[float]:
        amounts = []
        for raw in self.amount_rule.find_all(line):
            try:
                value = float(raw.replace(",", ""))
            except ValueError:
                continue
            if value > 0:
                amounts.append(value)
        return amounts

    def _quantity(self, line: str) -> Optional[float]:
        raw = self.quantity_rule.search(line)
        if raw is None:
            return None
        return float(raw)
