"""
Tests for the compiled pattern library.
"""

import pytest

from invoice_engine.extraction import DEFAULT_LIBRARY, DEFAULT_RULES, PatternLibrary
from invoice_engine.utils.exceptions import ExtractionError, InitializationError


def test_cascade_order_is_preserved():
    """Rules run most specific first"""
    names = [rule.name for rule in DEFAULT_LIBRARY.cascade('abn')]
    assert names == ['abn_labeled_spaced', 'abn_labeled', 'abn_spaced', 'abn_bare']


def test_every_default_cascade_compiles():
    for field_type, rules in DEFAULT_RULES.items():
        assert len(DEFAULT_LIBRARY.cascade(field_type)) == len(rules)


def test_unknown_cascade_is_empty():
    assert DEFAULT_LIBRARY.cascade('no_such_field') == ()


def test_broken_regex_raises_initialization_error():
    """A rule that fails to compile aborts construction of the library"""
    with pytest.raises(InitializationError) as exc_info:
        PatternLibrary({'abn': [("broken_rule", r"(\d+", 0, 1)]})

    assert isinstance(exc_info.value, ExtractionError)
    assert exc_info.value.details["rule"] == "broken_rule"


def test_missing_capture_group_raises_initialization_error():
    with pytest.raises(InitializationError):
        PatternLibrary({'amount': [("no_group", r"\d+\.\d{2}", 0, 1)]})


def test_rule_search_returns_first_match_group():
    library = PatternLibrary({'code': [("code", r"code-(\d+)", 0, 1)]})
    rule = library.cascade('code')[0]

    assert rule.search("code-12 and code-34") == "12"
    assert rule.find_all("code-12 and code-34") == ["12", "34"]
    assert rule.search("nothing here") is None


def test_rule_group_zero_returns_whole_match():
    rule = DEFAULT_LIBRARY.cascade('payment_terms')[3]
    assert rule.name == 'payment_terms_net'
    assert rule.search("Strictly NET 14") == "NET 14"
