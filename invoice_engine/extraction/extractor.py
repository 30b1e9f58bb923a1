"""
Invoice Extractor Module.

This module provides the main InvoiceExtractor class that turns raw
document text into an ExtractedInvoice.

Pipeline:
    text -> pattern cascades (ABN, invoice number, dates, amounts,
    payment terms) -> vendor and line-item heuristics -> overall
    confidence

Every stage is a pure function of the input text, so a single
extractor can serve concurrent calls.

Author: ML Engineering Team
"""

import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from invoice_engine.utils.logger import get_logger
from invoice_engine.utils.exceptions import EmptyInputError
from invoice_engine.postprocessor.confidence import ConfidenceAggregator
from .field_extractor import FieldExtractor
from .heuristics import LineItemExtractor, VendorNameDetector
from .models import DocumentOrigin, ExtractedField, ExtractedInvoice
from .patterns import PatternLibrary

# Initialize module logger
logger = get_logger(__name__)


class InvoiceExtractor:
    """
    Rule-based invoice field extractor.

    Attributes:
        fields: Cascade extractor for the header fields
        vendor_detector: Vendor-name heuristic
        line_items: Line-item heuristic
        aggregator: Overall confidence calculator
        tax_ratio: A tax amount must be below this share of the total

    Example:
        >>> extractor = InvoiceExtractor()
        >>> invoice = extractor.extract(text, DocumentOrigin.TEXT_DOCUMENT)
        >>> print(invoice.invoice_number.value)
        >>> print(invoice.overall_confidence)
    """

    def __init__(self, library: Optional[PatternLibrary] = None) -> None:
        """
        Initialize the invoice extractor.

        Args:
            library: Compiled pattern library. If None, the shared
                     default library is used.
        """
        self.fields = FieldExtractor(library)
        self.vendor_detector = VendorNameDetector()
        self.line_items = LineItemExtractor(library)
        self.aggregator = ConfidenceAggregator()
        self.tax_ratio = get_config("extraction.amounts.tax_ratio", 0.2)

        logger.debug("InvoiceExtractor initialized")

    def extract(
        self,
        text: str,
        origin: DocumentOrigin = DocumentOrigin.UNKNOWN
    ) -> ExtractedInvoice:
        """
        Extract invoice fields from document text.

        Args:
            text: Plain text of the document.
            origin: Where the text came from.

        Returns:
            ExtractedInvoice; fields that were not found are None.

        Raises:
            EmptyInputError: If the text is blank.
        """
        start_time = time.time()

        text = (text or "").strip()
        if not text:
            raise EmptyInputError(origin.value)

        dates = self.fields.extract_dates(text)
        amounts = self.fields.extract_amounts(text)
        total_amount = amounts[0] if amounts else None

        invoice = ExtractedInvoice(
            abn=self.fields.extract_abn(text),
            invoice_number=self.fields.extract_invoice_number(text),
            invoice_date=dates[0] if dates else None,
            due_date=dates[1] if len(dates) > 1 else None,
            vendor_name=self.vendor_detector.detect(text),
            total_amount=total_amount,
            gst_amount=self._find_gst_amount(text, amounts),
            payment_terms=self.fields.extract_payment_terms(text),
            line_items=self.line_items.extract(text),
            raw_text=text,
            document_origin=origin
        )
        invoice = replace(invoice, overall_confidence=self.aggregator.score(invoice))

        for name, extracted in invoice.extracted_fields.items():
            logger.debug(
                f"Extracted {name}: '{extracted.value}' "
                f"(confidence: {extracted.confidence:.2f}, source: {extracted.source})"
            )

        logger.info(
            f"Extraction complete: {len(invoice.extracted_fields)}/{len(invoice.fields)} fields, "
            f"{len(invoice.line_items)} line items, "
            f"confidence: {invoice.overall_confidence:.2f}, "
            f"time: {time.time() - start_time:.3f}s"
        )
        return invoice

    def _find_gst_amount(
        self,
        text: str,
        amounts: List[ExtractedField[float]]
    ) -> Optional[ExtractedField[float]]:
        """
        Pick the GST component from the amounts after the total.

        The first remaining amount under `tax_ratio` of the total is
        taken, provided the text mentions GST at all.

        Args:
            text: Document text.
            amounts: Amounts sorted largest first.

        Returns:
            ExtractedField or None.
        """
        if len(amounts) < 2 or "gst" not in text.lower():
            return None

        # TODO: tie the tax amount to its GST-labelled line so multi-rate invoices pick the right one
        limit = amounts[0].value * self.tax_ratio
        for amount in amounts[1:]:
            if amount.value < limit:
                return amount
        return None

    def extract_file(self, filepath: Union[str, Path]) -> ExtractedInvoice:
        """
        Load a document through the input handler and extract it.

        Args:
            filepath: Path to a text, PDF or image document.

        Returns:
            ExtractedInvoice tagged with the document's origin.

        Raises:
            InputError: If the document cannot be turned into text.
            OCRError: If the document is a scanned image.
            EmptyInputError: If the document contains no text.
        """
        from invoice_engine.input_handler import InputHandler

        document = InputHandler().load(filepath)
        return self.extract(document.text, document.origin)


def extract_invoice(
    text: str,
    origin: DocumentOrigin = DocumentOrigin.UNKNOWN
) -> ExtractedInvoice:
    """
    Convenience function to extract a record with a fresh extractor.

    Args:
        text: Plain text of the document.
        origin: Where the text came from.

    Returns:
        ExtractedInvoice.
    """
    return InvoiceExtractor().extract(text, origin)
