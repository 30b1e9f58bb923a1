"""
End-to-end tests for the InvoiceExtractor pipeline.
"""

import json

import pytest

from invoice_engine.extraction import DocumentOrigin, ExtractedInvoice, extract_invoice
from invoice_engine.postprocessor import SuggestedAction, validate_invoice
from invoice_engine.utils.exceptions import EmptyInputError


def test_sample_invoice_fields(extractor, sample_text):
    invoice = extractor.extract(sample_text, DocumentOrigin.TEXT_DOCUMENT)

    assert invoice.vendor_name.value == "Acme Supplies Pty Ltd"
    assert invoice.abn.value == "51824753556"
    assert invoice.invoice_number.value == "INV-2024-001"
    assert invoice.invoice_date.value == "15/01/2024"
    assert invoice.due_date.value == "14/02/2024"
    assert invoice.total_amount.value == 110.0
    assert invoice.total_amount.source == "amount_labeled_total"
    assert invoice.gst_amount.value == 10.0
    assert invoice.payment_terms.value == "Payment Terms: Net 30"
    assert invoice.document_origin == DocumentOrigin.TEXT_DOCUMENT
    assert invoice.missing_fields == []


def test_sample_invoice_line_items(extractor, sample_text):
    items = extractor.extract(sample_text).line_items

    assert items[0].description == "Widget A 2 x"
    assert (items[0].quantity, items[0].unit_price, items[0].total) == (2.0, 25.0, 50.0)
    assert items[1].description == "Widget B 1 x"


def test_sample_invoice_confidence_and_verdict(extractor, sample_text):
    invoice = extractor.extract(sample_text)
    verdict = validate_invoice(invoice)

    assert invoice.overall_confidence == pytest.approx(0.94)
    assert verdict.is_valid is True
    assert verdict.suggested_action == SuggestedAction.ACCEPT
    assert verdict.warnings == []


def test_extraction_is_idempotent(extractor, sample_text):
    assert extractor.extract(sample_text) == extractor.extract(sample_text)


@pytest.mark.parametrize("text", ["", "   \n\t  ", None])
def test_blank_text_raises(extractor, text):
    with pytest.raises(EmptyInputError):
        extractor.extract(text)


def test_raw_text_is_trimmed(extractor):
    invoice = extractor.extract("\n\n  Total Due: $20.00  \n")
    assert invoice.raw_text == "Total Due: $20.00"


def test_origin_defaults_to_unknown(extractor):
    assert extractor.extract("Total Due: $20.00").document_origin == DocumentOrigin.UNKNOWN


def test_absent_fields_are_none_not_errors(extractor):
    invoice = extractor.extract("Just a note with nothing useful")

    assert invoice.total_amount is None
    assert invoice.overall_confidence == pytest.approx(0.70)
    assert validate_invoice(invoice).is_valid is False


class TestGstSelection:
    def test_gst_requires_mention(self, extractor):
        invoice = extractor.extract("Total: $110.00\nTax: $10.00")

        assert invoice.total_amount.value == 110.0
        assert invoice.gst_amount is None

    def test_gst_must_be_small_share_of_total(self, extractor):
        invoice = extractor.extract("Total: $110.00\nGST: $30.00")
        assert invoice.gst_amount is None

    def test_single_amount_has_no_gst(self, extractor):
        assert extractor.extract("GST inclusive\nTotal: $110.00").gst_amount is None


def test_record_survives_serialisation(extractor, sample_text):
    invoice = extractor.extract(sample_text, DocumentOrigin.TEXT_DOCUMENT)

    restored = ExtractedInvoice.from_dict(json.loads(invoice.to_json()))

    assert restored == invoice
    assert validate_invoice(restored).to_dict() == validate_invoice(invoice).to_dict()


def test_extract_file(extractor, sample_text, tmp_path):
    path = tmp_path / "invoice.txt"
    path.write_text(sample_text, encoding="utf-8")

    invoice = extractor.extract_file(path)

    assert invoice.document_origin == DocumentOrigin.TEXT_DOCUMENT
    assert invoice.invoice_number.value == "INV-2024-001"


def test_extract_invoice_convenience(sample_text):
    invoice = extract_invoice(sample_text)
    assert invoice.abn.value == "51824753556"
