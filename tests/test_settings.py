"""Tests for settings and logging configuration."""
import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from suilend_agent.core.logging_config import (
    ColoredJsonFormatter,
    CorrelationFilter,
    build_log_config,
)
from suilend_agent.core.settings import Settings, load_object


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("AUTH_SECRET", "s3cret")
    monkeypatch.delenv("SUI_NETWORK", raising=False)

    settings = Settings.from_env()

    assert settings.LOG_LEVEL == "DEBUG"
    assert not settings.is_development()
    assert settings.AUTH_SECRET.get_secret_value() == "s3cret"
    assert settings.SUI_NETWORK == "mainnet"


def test_load_object():
    assert load_object("json:dumps") is json.dumps


@pytest.mark.parametrize("path", ["json", ":dumps", "json:"])
def test_load_object_rejects_malformed_paths(path):
    with pytest.raises(ValueError, match="module:attribute"):
        load_object(path)


def test_load_object_missing_attribute():
    with pytest.raises(ValueError, match="no attribute"):
        load_object("json:not_there")


def test_log_config_per_environment():
    dev = build_log_config("DEBUG", "development", "cid")
    prod = build_log_config("INFO", "production", "cid")

    assert dev["formatters"]["json"]["()"].endswith("ColoredJsonFormatter")
    assert prod["formatters"]["json"]["()"].endswith(".JsonFormatter")
    assert "Colored" not in prod["formatters"]["json"]["()"]
    assert "%(correlation_id)s" in prod["formatters"]["json"]["format"]
    assert dev["loggers"]["suilend_agent"]["level"] == "DEBUG"
    assert dev["filters"]["correlation"]["correlation_id"] == "cid"


def test_correlation_filter():
    record = logging.LogRecord("suilend_agent", logging.INFO, __file__, 1, "hello", None, None)

    assert CorrelationFilter("abc").filter(record)
    assert record.correlation_id == "abc"


def test_colored_formatter_outputs_json():
    formatter = ColoredJsonFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("suilend_agent", logging.WARNING, __file__, 1, "careful", None, None)

    data = json.loads(formatter.format(record))
    assert isinstance(formatter, jsonlogger.JsonFormatter)
    assert data["levelname"] == "WARNING"
    assert "careful" in data["message"]
