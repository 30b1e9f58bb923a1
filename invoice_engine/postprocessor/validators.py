"""
Data Validators Module.

This module provides:
    - IdentifierValidator: re-exported ABN checksum, re-applied to records
    - ValidationPolicy: maps an extracted record to a verdict and a
      suggested next action

Validation never raises; sparse records degrade toward manual entry.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from config import get_config
from invoice_engine.utils.logger import get_logger
from invoice_engine.extraction.identifier import IdentifierValidator
from invoice_engine.extraction.models import ExtractedInvoice
from .normalizers import DateNormalizer

# Initialize module logger
logger = get_logger(__name__)


class SuggestedAction(str, Enum):
    """How much human oversight a record needs before use."""

    ACCEPT = "accept"
    REVIEW = "review"
    MANUAL_ENTRY = "manual_entry"


@dataclass
class ValidationVerdict:
    """
    Contains the result of applying the validation policy.

    Attributes:
        is_valid: Whether the record is usable at all
        missing_fields: Required fields that were not extracted
        warnings: Advisory, non-blocking findings
        suggested_action: accept, review or manual_entry
    """
    is_valid: bool
    suggested_action: SuggestedAction
    missing_fields: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'is_valid': self.is_valid,
            'missing_fields': list(self.missing_fields),
            'warnings': list(self.warnings),
            'suggested_action': self.suggested_action.value
        }


class ValidationPolicy:
    """
    Issues a verdict for an extracted invoice record.

    Rules:
        - Required fields (ABN, invoice number, invoice date, total) are
          checked for presence; absence is recorded, not fatal.
        - A record is valid iff the total is present and the overall
          confidence reaches the valid threshold.
        - accept: nothing required missing and confidence reaches the
          accept threshold; review: confidence reaches the valid
          threshold; manual_entry otherwise.

    Example:
        >>> policy = ValidationPolicy()
        >>> verdict = policy.validate(invoice)
        >>> verdict.suggested_action
        <SuggestedAction.REVIEW: 'review'>
    """

    DEFAULT_REQUIRED_FIELDS = ['abn', 'invoice_number', 'invoice_date', 'total_amount']

    def __init__(
        self,
        required_fields: Optional[List[str]] = None,
        valid_threshold: Optional[float] = None,
        accept_threshold: Optional[float] = None
    ) -> None:
        """
        Initialize the policy from arguments or configuration.

        Args:
            required_fields: Field names checked for presence.
            valid_threshold: Minimum overall confidence for validity.
            accept_threshold: Minimum overall confidence for auto-accept.
        """
        self.required_fields = required_fields or get_config(
            "validation.required_fields",
            self.DEFAULT_REQUIRED_FIELDS
        )
        self.valid_threshold = valid_threshold if valid_threshold is not None else get_config(
            "validation.valid_threshold", 0.50
        )
        self.accept_threshold = accept_threshold if accept_threshold is not None else get_config(
            "validation.accept_threshold", 0.75
        )
        self.date_normalizer = DateNormalizer()

        logger.debug(
            f"ValidationPolicy initialized (required: {self.required_fields}, "
            f"valid >= {self.valid_threshold}, accept >= {self.accept_threshold})"
        )

    def validate(self, invoice: ExtractedInvoice) -> ValidationVerdict:
        """
        Validate an extracted invoice record.

        Args:
            invoice: Record to validate.

        Returns:
            ValidationVerdict, never raises.
        """
        missing = self.check_required_fields(invoice)
        warnings = self.collect_warnings(invoice)
        confidence = invoice.overall_confidence

        is_valid = invoice.total_amount is not None and confidence >= self.valid_threshold

        if not missing and confidence >= self.accept_threshold:
            action = SuggestedAction.ACCEPT
        elif confidence >= self.valid_threshold:
            action = SuggestedAction.REVIEW
        else:
            action = SuggestedAction.MANUAL_ENTRY

        logger.info(
            f"Validation verdict: valid={is_valid}, action={action.value}, "
            f"confidence={confidence:.2f}, missing={missing}"
        )
        for warning in warnings:
            logger.debug(f"Validation warning: {warning}")

        return ValidationVerdict(
            is_valid=is_valid,
            suggested_action=action,
            missing_fields=missing,
            warnings=warnings
        )

    def check_required_fields(self, invoice: ExtractedInvoice) -> List[str]:
        """
        Check which required fields are absent.

        Args:
            invoice: Record to check.

        Returns:
            List of missing field names, in required-field order.
        """
        fields = invoice.fields
        return [name for name in self.required_fields if fields.get(name) is None]

    def collect_warnings(self, invoice: ExtractedInvoice) -> List[str]:
        """
        Collect advisory warnings for nice-to-have fields and sanity checks.

        Args:
            invoice: Record to check.

        Returns:
            List of warning messages.
        """
        warnings = []

        if invoice.vendor_name is None:
            warnings.append("Vendor name not detected")
        if invoice.payment_terms is None:
            warnings.append("Payment terms not detected")
        if not invoice.line_items:
            warnings.append("No line items extracted")

        # Re-check the identifier; records may arrive deserialized
        if invoice.abn is not None and not IdentifierValidator.validate(invoice.abn.value):
            warnings.append(f"ABN {invoice.abn.value} failed checksum validation")

        if invoice.invoice_date is not None and invoice.due_date is not None:
            message = self._check_date_order(invoice.invoice_date.value, invoice.due_date.value)
            if message:
                warnings.append(message)

        return warnings

    def _check_date_order(self, invoice_date: str, due_date: str) -> Optional[str]:
        """
        Check that the due date is not before the invoice date.

        Args:
            invoice_date: Raw invoice date string.
            due_date: Raw due date string.

        Returns:
            Warning message, or None if the order is fine or unknown.
        """
        issued = self.date_normalizer.parse(invoice_date)
        due = self.date_normalizer.parse(due_date)
        if issued is None or due is None:
            return None

        # Zone-qualified dates compare on their wall-clock value
        if due.replace(tzinfo=None) < issued.replace(tzinfo=None):
            return f"Due date {due_date} is before invoice date {invoice_date}"
        return None


def validate_invoice(invoice: ExtractedInvoice) -> ValidationVerdict:
    """
    Convenience function to validate a record with the configured policy.

    Args:
        invoice: Record to validate.

    Returns:
        ValidationVerdict.
    """
    return ValidationPolicy().validate(invoice)
