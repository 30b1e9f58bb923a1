"""
Shared pytest fixtures for the invoice field engine tests.
"""

import logging

import pytest

from config import ConfigurationManager
from invoice_engine.extraction import ExtractedField, ExtractedInvoice, InvoiceExtractor
from invoice_engine.utils.logger import ROOT_LOGGER_NAME


SAMPLE_INVOICE = """Acme Supplies Pty Ltd
ABN: 51 824 753 556
Tax Invoice #INV-2024-001
Invoice Date: 15/01/2024
Due Date: 14/02/2024
Payment Terms: Net 30

Widget A 2 x 25.00 50.00
Widget B 1 x 50.00 50.00

Subtotal: $100.00
GST: $10.00
Total Amount: $110.00
"""


@pytest.fixture(autouse=True)
def reset_state():
    """Give every test a fresh configuration and an unconfigured package logger"""
    yield
    ConfigurationManager.reset()
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers.clear()


@pytest.fixture
def sample_text():
    return SAMPLE_INVOICE


@pytest.fixture
def extractor():
    return InvoiceExtractor()


@pytest.fixture
def make_invoice():
    """Build an ExtractedInvoice from (value, confidence) pairs"""
    def _make(overall_confidence=0.0, **fields):
        built = {
            name: ExtractedField(value, confidence, "test")
            for name, (value, confidence) in fields.items()
        }
        return ExtractedInvoice(overall_confidence=overall_confidence, **built)
    return _make
