"""
Pattern Library Module.

Ordered, per-field cascades of regular-expression rules. Rules in a
cascade run most specific first; later rules are looser and would
over-match if tried earlier.

The default library is compiled once at import time and is read-only
afterwards, so one instance can be shared by concurrent extraction calls.

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from invoice_engine.utils.logger import get_logger
from invoice_engine.utils.exceptions import InitializationError

logger = get_logger(__name__)

_CI = re.IGNORECASE

_ABN_LABEL = r"(?:abn|a\.b\.n\.?|australian business number)"
_AMOUNT_TAIL = r"[:\s]*[$€£]?\s*([\d,]+\.\d{2})"
_MONTHS = (
    r"(?:January|February|March|April|May|June|July|August|September|October|"
    r"November|December|Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"
)

# (rule name, regex, flags, capture group returned as the value)
RuleDefinition = Tuple[str, str, int, int]

DEFAULT_RULES: Dict[str, List[RuleDefinition]] = {
    'abn': [
        ("abn_labeled_spaced", _ABN_LABEL + r"[:\s]*(\d{2}\s*\d{3}\s*\d{3}\s*\d{3})", _CI, 1),
        ("abn_labeled", _ABN_LABEL + r"[:\s]*(\d{11})", _CI, 1),
        ("abn_spaced", r"\b(\d{2}\s\d{3}\s\d{3}\s\d{3})\b", 0, 1),
        ("abn_bare", r"\b(\d{11})\b", 0, 1),
    ],
    'invoice_number': [
        ("invoice_number_labeled",
         r"(?:invoice\s*(?:#|no\.?|number)?|inv\.?|tax\s*invoice)[:\s#]*(\w[\w\-]*)", _CI, 1),
        ("invoice_number_short", r"(?:inv|invoice)\s*#?\s*[:\s]*(\w[\w\-]*)", _CI, 1),
        ("invoice_number_reference", r"(?:reference|ref)[:\s#]*(INV[\w\-]*)", _CI, 1),
    ],
    'date': [
        ("date_labeled_numeric", r"(?:invoice\s*date|date)[:\s]*(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})", _CI, 1),
        ("date_labeled_iso", r"(?:invoice\s*date|date)[:\s]*(\d{4}-\d{2}-\d{2})", _CI, 1),
        ("date_labeled_long", r"(?:date)[:\s]*(\d{1,2}\s+" + _MONTHS + r"[a-z]*\s+\d{4})", _CI, 1),
        ("date_numeric", r"\b(\d{1,2}[/-]\d{1,2}[/-]\d{4})\b", 0, 1),
        ("date_iso", r"\b(\d{4}-\d{2}-\d{2})\b", 0, 1),
    ],
    'amount': [
        ("amount_labeled_total",
         r"(?:total\s*amount|total\s*due|amount\s*due|total\s*\(inc\.?\s*gst\)|"
         r"total\s*\(gst\s*inc\.?\)|grand\s*total)" + _AMOUNT_TAIL, _CI, 1),
        ("amount_total", r"(?:total)" + _AMOUNT_TAIL, _CI, 1),
        ("amount_tax", r"(?:gst|tax)" + _AMOUNT_TAIL, _CI, 1),
        ("amount_balance_due", r"(?:balance\s*due)" + _AMOUNT_TAIL, _CI, 1),
        ("amount_currency", r"[$€£]\s*([\d,]+\.\d{2})", 0, 1),
    ],
    'payment_terms': [
        ("payment_terms_days", r"(?:payment\s*terms?|terms?)[:\s]*(\d+\s*(?:days?|day))", _CI, 0),
        ("payment_terms_named",
         r"(?:payment\s*terms?|terms?)[:\s]*(net\s*\d+|cod|cash\s*on\s*delivery|immediate|upon\s*receipt)",
         _CI, 0),
        ("payment_terms_due_in", r"(?:due\s*(?:in|within)?)[:\s]*(\d+\s*(?:days?|day))", _CI, 0),
        ("payment_terms_net", r"net\s*(\d+)", _CI, 0),
        ("payment_terms_eom", r"(?:eom|end\s*of\s*month)", _CI, 0),
        ("payment_terms_common_days", r"(?:14|30|60|90)\s*days?", _CI, 0),
    ],
    'line_item_amount': [
        ("line_item_amount", r"([\d,]+\.\d{2})", 0, 1),
    ],
    'line_item_quantity': [
        ("line_item_quantity", r"(\d+(?:\.\d+)?)\s*(?:x|×|@|at)", _CI, 1),
    ],
}


@dataclass(frozen=True)
class PatternRule:
    """
    One compiled rule of a cascade.

    Attributes:
        name: Rule name, used as the provenance tag of extracted values.
        pattern: Compiled regular expression.
        group: Capture group holding the value (0 for the whole match).
    """
    name: str
    pattern: re.Pattern
    group: int = 1

    def search(self, text: str) -> Optional[str]:
        """Return the first match's value, or None."""
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(self.group)

    def find_all(self, text: str) -> List[str]:
        """Return the value of every non-overlapping match, in order."""
        return [m.group(self.group) for m in self.pattern.finditer(text)]


class PatternLibrary:
    """
    Compiled cascades of pattern rules, keyed by field type.

    Attributes:
        cascades: Mapping of field type to its ordered rules.

    Raises:
        InitializationError: If any rule fails to compile.

    Example:
        >>> library = PatternLibrary()
        >>> [rule.name for rule in library.cascade('abn')]
        ['abn_labeled_spaced', 'abn_labeled', 'abn_spaced', 'abn_bare']
    """

    def __init__(self, definitions: Optional[Dict[str, Sequence[RuleDefinition]]] = None) -> None:
        """
        Compile every rule.

        Args:
            definitions: Rule definitions per field type. Defaults to
                         DEFAULT_RULES.
        """
        definitions = DEFAULT_RULES if definitions is None else definitions
        self.cascades: Dict[str, Tuple[PatternRule, ...]] = {
            field_type: tuple(self._compile(rule) for rule in rules)
            for field_type, rules in definitions.items()
        }
        logger.debug(
            f"PatternLibrary compiled {sum(len(c) for c in self.cascades.values())} rules "
            f"across {len(self.cascades)} cascades"
        )

    @staticmethod
    def _compile(definition: RuleDefinition) -> PatternRule:
        name, regex, flags, group = definition
        try:
            compiled = re.compile(regex, flags)
        except re.error as e:
            logger.error(f"Pattern rule '{name}' failed to compile: {e}")
            raise InitializationError(name, str(e)) from e
        if group > compiled.groups:
            raise InitializationError(name, f"capture group {group} not defined")
        return PatternRule(name=name, pattern=compiled, group=group)

    def cascade(self, field_type: str) -> Tuple[PatternRule, ...]:
        """
        Get the ordered rules for a field type.

        Args:
            field_type: Field type key (e.g. "amount").

        Returns:
            Tuple of rules, most specific first.
        """
        return self.cascades.get(field_type, ())


# Compiled at import; a broken rule aborts startup.
DEFAULT_LIBRARY = PatternLibrary()
