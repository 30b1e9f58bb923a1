"""
Tests for the vendor-name and line-item heuristics.
"""

import pytest

from invoice_engine.extraction import (
    DEFAULT_RULES,
    InvoiceExtractor,
    LineItemExtractor,
    PatternLibrary,
    VendorNameDetector,
)
from invoice_engine.utils.helpers import clean_line


class TestVendorNameDetector:
    def test_business_entity_gets_higher_confidence(self):
        result = VendorNameDetector().detect("Acme Supplies Pty Ltd\nABN: 51 824 753 556")

        assert result.value == "Acme Supplies Pty Ltd"
        assert result.confidence == 0.90
        assert result.source == "vendor_heuristic"

    def test_plain_name(self):
        result = VendorNameDetector().detect("Bob's Plumbing\nInvoice #1")

        assert result.value == "Bob's Plumbing"
        assert result.confidence == 0.70

    def test_label_and_numeric_lines_skipped(self):
        text = "TAX INVOICE\nABN: 51 824 753 556\n15/01/2024\nGreenleaf Trading Co"
        assert VendorNameDetector().detect(text).value == "Greenleaf Trading Co"

    def test_too_short_line_skipped(self):
        assert VendorNameDetector().detect("ABC\nInvoice 1\nZeta Goods").value == "Zeta Goods"

    def test_blank_lines_do_not_count_toward_window(self):
        assert VendorNameDetector().detect("\n\n\n   \nAcme Corp").value == "Acme Corp"

    def test_only_first_lines_are_scanned(self):
        text = "\n".join(["12345"] * 10 + ["Late Vendor Pty Ltd"])
        assert VendorNameDetector().detect(text) is None

    def test_short_fragments_count_toward_window(self):
        text = "\n".join(["p1"] * 10 + ["Acme Corp"])
        assert VendorNameDetector().detect(text) is None

    def test_window_size_is_configurable(self):
        text = "\n".join(["12345"] * 10 + ["Late Vendor Pty Ltd"])
        assert VendorNameDetector(max_lines=11).detect(text).value == "Late Vendor Pty Ltd"

    def test_overlong_line_rejected(self):
        assert VendorNameDetector().detect("A" * 100) is None


class TestLineItemExtractor:
    def test_quantity_unit_price_and_total(self):
        item = LineItemExtractor().parse_line("Widget 2 x 5.00 10.00")

        assert item.description == "Widget 2 x"
        assert item.quantity == 2.0
        assert item.unit_price == 5.0
        assert item.total == 10.0
        assert item.confidence == 0.70

    def test_unit_price_derived_from_quantity(self):
        item = LineItemExtractor().parse_line("Consulting 3 @ 150.00")

        assert item.quantity == 3.0
        assert item.unit_price == pytest.approx(50.0)
        assert item.total == 150.0

    def test_single_amount_without_quantity(self):
        item = LineItemExtractor().parse_line("Delivery fee 25.00")

        assert item.description == "Delivery fee"
        assert item.quantity is None
        assert item.unit_price == 25.0
        assert item.confidence == 0.50

    def test_zero_quantity_falls_back_to_total(self):
        item = LineItemExtractor().parse_line("Sample pack 0 x 12.00")

        assert item.quantity == 0.0
        assert item.unit_price == 12.0

    @pytest.mark.parametrize("line", [
        "Fee 5.00",                  # too short
        "No amounts on this line",
        "Discount line 0.00",        # only a zero amount
        "12.00 15.00 apples",        # empty description
    ])
    def test_rejected_lines(self, line):
        assert LineItemExtractor().parse_line(line) is None

    def test_extract_scans_every_line(self):
        text = "Widget A 2 x 25.00 50.00\nshort\nWidget B 1 x 50.00 50.00"
        items = LineItemExtractor().extract(text)

        assert [item.description for item in items] == ["Widget A 2 x", "Widget B 1 x"]

    def test_items_capped(self):
        text = "\n".join(f"Item number {i} 10.00" for i in range(60))
        items = LineItemExtractor().extract(text)

        assert len(items) == 50
        assert items[0].description == "Item number 0"

    def test_library_without_line_item_rules(self):
        """Header-only libraries fall back to the default line-item rules"""
        library = PatternLibrary({'abn': DEFAULT_RULES['abn']})
        item = LineItemExtractor(library).parse_line("Widget 2 x 5.00 10.00")

        assert (item.quantity, item.total) == (2.0, 10.0)

    def test_extractor_with_header_only_library(self):
        library = PatternLibrary({'abn': DEFAULT_RULES['abn']})
        invoice = InvoiceExtractor(library).extract("ABN: 51 824 753 556\nWidget 2 x 5.00 10.00")

        assert invoice.abn.value == "51824753556"
        assert invoice.total_amount is None
        assert len(invoice.line_items) == 1


def test_clean_line_replaces_control_characters():
    assert clean_line("Widget\tA  ") == "Widget A"
    assert clean_line("\x00Gadget\x7f") == "Gadget"
