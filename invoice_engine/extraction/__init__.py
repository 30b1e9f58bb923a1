"""
Extraction Module for the Invoice Field Engine.

This module provides functionality for:
    - Pattern cascades for the structured header fields
    - ABN checksum validation
    - Vendor-name and line-item heuristics
    - The InvoiceExtractor pipeline and its result types

Author: ML Engineering Team
"""

from .models import (
    FIELD_NAMES,
    DocumentOrigin,
    ExtractedField,
    ExtractedInvoice,
    LineItem,
)
from .identifier import IdentifierValidator
from .patterns import DEFAULT_LIBRARY, DEFAULT_RULES, PatternLibrary, PatternRule
from .field_extractor import FieldExtractor
from .heuristics import LineItemExtractor, VendorNameDetector
from .extractor import InvoiceExtractor, extract_invoice

__all__ = [
    'FIELD_NAMES',
    'DocumentOrigin',
    'ExtractedField',
    'ExtractedInvoice',
    'LineItem',
    'IdentifierValidator',
    'DEFAULT_LIBRARY',
    'DEFAULT_RULES',
    'PatternLibrary',
    'PatternRule',
    'FieldExtractor',
    'LineItemExtractor',
    'VendorNameDetector',
    'InvoiceExtractor',
    'extract_invoice'
]
