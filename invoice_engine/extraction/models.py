"""
Extraction Data Model.

This module defines the records produced by the field-extraction engine:
    - ExtractedField: a value paired with a confidence and provenance tag
    - LineItem: one decomposed invoice line
    - DocumentOrigin: where the text came from
    - ExtractedInvoice: the aggregate record for one extraction call

All records are frozen; a re-extraction replaces the record wholesale.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


class DocumentOrigin(str, Enum):
    """Closed set of document origins."""

    UNKNOWN = "unknown"
    TEXT_DOCUMENT = "text_document"
    SCANNED_IMAGE = "scanned_image"


@dataclass(frozen=True)
class ExtractedField(Generic[T]):
    """
    A single extracted value with its confidence and provenance.

    Attributes:
        value: Extracted value (string or number).
        confidence: Self-reported certainty in [0, 1].
        source: Name of the rule or heuristic that produced the value.

    Example:
        >>> ExtractedField("51824753556", 0.90, "abn_labeled_spaced")
    """
    value: T
    confidence: float
    source: str

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1], got {self.confidence}")

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'confidence': self.confidence, 'source': self.source}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['ExtractedField']:
        if not data:
            return None
        return cls(
            value=data['value'],
            confidence=float(data['confidence']),
            source=data.get('source', '')
        )


@dataclass(frozen=True)
class LineItem:
    """
    One invoice line decomposed into description and amounts.

    `total` is always present; `quantity` and `unit_price` may be unknown.
    """
    description: str
    total: float
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    confidence: float = 0.5

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'quantity': self.quantity,
            'unit_price': self.unit_price,
            'total': self.total,
            'confidence': self.confidence
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        return cls(
            description=data['description'],
            total=float(data['total']),
            quantity=data.get('quantity'),
            unit_price=data.get('unit_price'),
            confidence=float(data.get('confidence', 0.5))
        )


# Fields whose presence and confidence feed aggregation and validation
FIELD_NAMES = (
    'abn',
    'invoice_number',
    'invoice_date',
    'due_date',
    'vendor_name',
    'total_amount',
    'gst_amount',
    'payment_terms',
)


@dataclass(frozen=True)
class ExtractedInvoice:
    """
    Represents the result of extracting one invoice's text.

    Every header field is optional; absence means no rule matched.
    `overall_confidence` is derived by the confidence aggregator.

    Attributes:
        abn: Checksum-validated 11-digit business identifier
        invoice_number: Document number, upper-cased
        invoice_date: First date found in the text
        due_date: Second date found in the text
        vendor_name: Vendor detected from the letterhead lines
        total_amount: Largest amount found
        gst_amount: Tax component found among the remaining amounts
        payment_terms: Matched payment-terms phrase
        line_items: Decomposed line items
        raw_text: Trimmed input text
        overall_confidence: Aggregate confidence (0-1)
        document_origin: Where the text came from

    Example:
        >>> invoice = extractor.extract("ABN: 51 824 753 556\\nTotal: $110.00")
        >>> invoice.abn.value
        '51824753556'
    """
    abn: Optional[ExtractedField[str]] = None
    invoice_number: Optional[ExtractedField[str]] = None
    invoice_date: Optional[ExtractedField[str]] = None
    due_date: Optional[ExtractedField[str]] = None
    vendor_name: Optional[ExtractedField[str]] = None
    total_amount: Optional[ExtractedField[float]] = None
    gst_amount: Optional[ExtractedField[float]] = None
    payment_terms: Optional[ExtractedField[str]] = None
    line_items: List[LineItem] = field(default_factory=list)
    raw_text: str = ""
    overall_confidence: float = 0.0
    document_origin: DocumentOrigin = DocumentOrigin.UNKNOWN

    @property
    def fields(self) -> Dict[str, Optional[ExtractedField]]:
        """
        Get all header fields as a dictionary.

        Returns:
            Dictionary of field names to extracted fields (or None).
        """
        return {name: getattr(self, name) for name in FIELD_NAMES}

    @property
    def missing_fields(self) -> List[str]:
        """Names of header fields that were not extracted."""
        return [name for name, value in self.fields.items() if value is None]

    @property
    def extracted_fields(self) -> Dict[str, ExtractedField]:
        """Only the header fields that have values."""
        return {name: value for name, value in self.fields.items() if value is not None}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the invoice record.
        """
        result = {
            name: (value.to_dict() if value is not None else None)
            for name, value in self.fields.items()
        }
        result.update({
            'line_items': [item.to_dict() for item in self.line_items],
            'raw_text': self.raw_text,
            'overall_confidence': self.overall_confidence,
            'document_origin': self.document_origin.value
        })
        return result

    def to_json(self, indent: int = 2) -> str:
        """
        Convert to JSON string.

        Args:
            indent: JSON indentation level.

        Returns:
            JSON string representation.
        """
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractedInvoice':
        """
        Create an ExtractedInvoice from its dictionary form.

        Args:
            data: Dictionary produced by to_dict().

        Returns:
            ExtractedInvoice instance.
        """
        header = {name: ExtractedField.from_dict(data.get(name)) for name in FIELD_NAMES}
        return cls(
            **header,
            line_items=[LineItem.from_dict(item) for item in data.get('line_items', [])],
            raw_text=data.get('raw_text', ''),
            overall_confidence=float(data.get('overall_confidence', 0.0)),
            document_origin=DocumentOrigin(data.get('document_origin', DocumentOrigin.UNKNOWN.value))
        )

    def __repr__(self) -> str:
        def _value(f):
            return f.value if f is not None else None

        return (
            f"ExtractedInvoice("
            f"abn={_value(self.abn)}, "
            f"invoice={_value(self.invoice_number)}, "
            f"total={_value(self.total_amount)}, "
            f"confidence={self.overall_confidence:.2f})"
        )
