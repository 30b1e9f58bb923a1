"""
Post-Processing Module for the Invoice Field Engine.

This module provides functionality for:
    - ABN checksum validation
    - Overall confidence aggregation
    - The validation policy (accept / review / manual entry)
    - Date normalization

Author: ML Engineering Team
"""

from .validators import (
    IdentifierValidator,
    SuggestedAction,
    ValidationPolicy,
    ValidationVerdict,
    validate_invoice,
)
from .confidence import ConfidenceAggregator
from .normalizers import DateNormalizer

__all__ = [
    'IdentifierValidator',
    'SuggestedAction',
    'ValidationPolicy',
    'ValidationVerdict',
    'validate_invoice',
    'ConfidenceAggregator',
    'DateNormalizer'
]
