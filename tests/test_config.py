"""
Tests for the YAML configuration layer.
"""

import pytest

from config import ConfigurationManager, get_config
from invoice_engine.postprocessor import SuggestedAction, ValidationPolicy


def test_default_settings_loaded():
    assert get_config("validation.accept_threshold") == 0.75
    assert get_config("validation.valid_threshold") == 0.50
    assert get_config("extraction.vendor.max_lines") == 10
    assert get_config("validation.required_fields") == [
        'abn', 'invoice_number', 'invoice_date', 'total_amount'
    ]


def test_missing_key_returns_default():
    assert get_config("no.such.key", "fallback") == "fallback"


def test_singleton():
    assert ConfigurationManager() is ConfigurationManager()


def test_log_path_resolved_to_absolute():
    from pathlib import Path
    assert Path(get_config("logging.file.path")).is_absolute()


def test_custom_config_drives_policy(tmp_path, make_invoice):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "validation:\n"
        "  required_fields: [total_amount]\n"
        "  valid_threshold: 0.3\n"
        "  accept_threshold: 0.6\n",
        encoding="utf-8"
    )
    ConfigurationManager.reset()
    ConfigurationManager(str(path))

    verdict = ValidationPolicy().validate(
        make_invoice(overall_confidence=0.65, total_amount=(10.0, 0.65))
    )

    assert verdict.missing_fields == []
    assert verdict.suggested_action == SuggestedAction.ACCEPT


def test_missing_config_file(tmp_path):
    ConfigurationManager.reset()
    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "missing.yaml"))
