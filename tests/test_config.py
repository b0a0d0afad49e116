# tests/test_config.py

import logging

import pytest

from core.config import LOG_LEVEL_ENV, get_log_level
from core.logging_utils import setup_logging, teardown_logging


def test_default_log_level(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert get_log_level() == logging.WARNING


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_log_level() == logging.DEBUG


def test_log_level_override_wins(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    assert get_log_level("error") == logging.ERROR


def test_unknown_log_level():
    with pytest.raises(ValueError):
        get_log_level("LOUD")


def test_setup_logging_attaches_handler():
    root = logging.getLogger()
    previous_level = root.level

    handler = setup_logging("INFO")
    try:
        assert handler in root.handlers
        assert root.level == logging.INFO

    finally:
        teardown_logging(handler)
        root.setLevel(previous_level)

    assert handler not in root.handlers
