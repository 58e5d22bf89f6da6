"""Tests for structlog-backed logging setup."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from deferred_citations.core.config import ObservabilityConfig
from deferred_citations.hooks.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    package_level = logging.getLogger("deferred_citations").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("deferred_citations").setLevel(package_level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_installs_single_processor_formatter(self):
        setup_logging(ObservabilityConfig(log_level="DEBUG", json_logs=True))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("deferred_citations").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(ObservabilityConfig(log_level="chatty", json_logs=True))
        assert logging.getLogger().level == logging.INFO

    def test_json_lines_for_stdlib_records(self, capsys):
        setup_logging(ObservabilityConfig(log_level="INFO", json_logs=True))
        logging.getLogger("deferred_citations.parsing.parser").warning("repair applied")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "repair applied"
        assert record["level"] == "warning"
        assert record["logger"] == "deferred_citations.parsing.parser"
