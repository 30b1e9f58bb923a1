"""
Invoice Field Engine - Source Package.

This package contains the core modules of the rule-based invoice field
extraction and confidence-scoring engine.

Modules:
    - input_handler: Text, PDF and image input handling
    - extraction: Pattern cascades, heuristics and the extractor
    - postprocessor: Confidence aggregation, validation and normalization
    - utils: Logging, exceptions and helpers

Architecture:
    Input -> Text -> Extraction -> Confidence -> Validation
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

from .extraction import (
    DocumentOrigin,
    ExtractedField,
    ExtractedInvoice,
    InvoiceExtractor,
    LineItem,
    extract_invoice,
)
from .postprocessor import (
    SuggestedAction,
    ValidationPolicy,
    ValidationVerdict,
    validate_invoice,
)

__all__ = [
    'DocumentOrigin',
    'ExtractedField',
    'ExtractedInvoice',
    'InvoiceExtractor',
    'LineItem',
    'extract_invoice',
    'SuggestedAction',
    'ValidationPolicy',
    'ValidationVerdict',
    'validate_invoice'
]
