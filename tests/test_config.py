"""
Tests for environment settings and logging setup.
"""
import json
import logging

import pytest

from safetygate.config import JSONFormatter, GateSettings, configure_logging
from safetygate.exceptions import ConfigurationError
from safetygate.models import CourtStyle, DistributionMode, FilingType


class TestGateSettings:

    def test_defaults(self):
        settings = GateSettings.from_env({})
        assert settings == GateSettings()
        assert settings.default_court_style == CourtStyle.IHC
        assert settings.default_filing_type == FilingType.WRIT
        assert settings.default_mode == DistributionMode.CONTROLLED_LEGAL
        assert settings.phrase_pack is None

    def test_values_from_env(self):
        settings = GateSettings.from_env({
            "SAFETYGATE_LOG_LEVEL": "debug",
            "SAFETYGATE_LOG_FORMAT": "TEXT",
            "SAFETYGATE_DEFAULT_COURT": "SC",
            "SAFETYGATE_DEFAULT_FILING": "appeal",
            "SAFETYGATE_DEFAULT_MODE": "court_mode",
            "SAFETYGATE_PHRASE_PACK": "/etc/safetygate/pack.yaml",
        })
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "text"
        assert settings.default_court_style == CourtStyle.SC
        assert settings.default_filing_type == FilingType.APPEAL
        assert settings.default_mode == DistributionMode.COURT_MODE
        assert settings.phrase_pack == "/etc/safetygate/pack.yaml"

    @pytest.mark.parametrize("name,value", [
        ("SAFETYGATE_LOG_LEVEL", "LOUD"),
        ("SAFETYGATE_LOG_FORMAT", "xml"),
        ("SAFETYGATE_DEFAULT_COURT", "XYZ"),
        ("SAFETYGATE_DEFAULT_MODE", "secret"),
    ])
    def test_invalid_values(self, name, value):
        with pytest.raises(ConfigurationError) as exc_info:
            GateSettings.from_env({name: value})
        assert exc_info.value.details["variable"] == name

    def test_empty_enum_value_uses_default(self):
        assert GateSettings.from_env({"SAFETYGATE_DEFAULT_COURT": ""}).default_court_style == CourtStyle.IHC


class TestLogging:

    def test_json_formatter(self):
        record = logging.LogRecord(
            "safetygate.engine.gate", logging.INFO, __file__, 1, "gate %s", ("ran",), None
        )
        record.signal_count = 3
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "gate ran"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "safetygate.engine.gate"
        assert entry["signal_count"] == 3
        assert "timestamp" in entry

    def test_configure_logging_replaces_handler(self):
        logger = configure_logging(GateSettings(log_format="text"))
        configure_logging(GateSettings(log_level="DEBUG"))
        ours = [h for h in logger.handlers if getattr(h, "_safetygate", False)]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert logger.level == logging.DEBUG
        logger.removeHandler(ours[0])
        logger.setLevel(logging.NOTSET)
