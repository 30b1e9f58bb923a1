"""
Confidence Aggregation Module.

Combines per-field confidences into one overall score for a record.

Author: ML Engineering Team
"""

from typing import Optional

from config import get_config
from invoice_engine.utils.logger import get_logger
from invoice_engine.extraction.models import ExtractedInvoice

logger = get_logger(__name__)


class ConfidenceAggregator:
    """
    Computes the overall confidence of an extracted invoice.

    The score is the mean confidence of whichever scored fields are
    present (absent fields are excluded, not counted as zero). When the
    ABN, invoice number and total are all present a completeness boost
    is added, capped at 1.0.

    Example:
        >>> aggregator = ConfidenceAggregator()
        >>> aggregator.score(invoice)
        0.75
    """

    SCORED_FIELDS = ('abn', 'invoice_number', 'invoice_date', 'total_amount', 'vendor_name')
    COMPLETENESS_FIELDS = ('abn', 'invoice_number', 'total_amount')

    def __init__(self, completeness_boost: Optional[float] = None) -> None:
        """
        Initialize the aggregator.

        Args:
            completeness_boost: Bonus for a bookkeeping-complete record.
                                Defaults to configuration (0.10).
        """
        if completeness_boost is None:
            completeness_boost = get_config("confidence.completeness_boost", 0.10)
        self.completeness_boost = completeness_boost

    def score(self, invoice: ExtractedInvoice) -> float:
        """
        Calculate the overall confidence score.

        Args:
            invoice: Record whose fields are scored.

        Returns:
            Overall confidence in [0, 1]; 0.0 when nothing scored is present.
        """
        fields = invoice.fields
        confidences = [
            fields[name].confidence
            for name in self.SCORED_FIELDS
            if fields[name] is not None
        ]

        if not confidences:
            return 0.0

        average = sum(confidences) / len(confidences)

        boost = 0.0
        if all(fields[name] is not None for name in self.COMPLETENESS_FIELDS):
            boost = self.completeness_boost

        overall = min(average + boost, 1.0)
        logger.debug(
            f"Overall confidence {overall:.2f} from {len(confidences)} fields "
            f"(boost {boost:.2f})"
        )
        return overall
