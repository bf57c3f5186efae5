"""
Tests for logging setup.
"""

import json
import logging

import pytest

from distmirror.logging_config import HumanFormatter, JSONFormatter, setup_logging


def _record(msg="[mirror] Processing Gradle 8.5", **extra):
    record = logging.LogRecord("distmirror.mirror.manager", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_formatter(self):
        data = json.loads(JSONFormatter().format(_record(artifact_id="gradle-8.5-bin")))

        assert data["level"] == "INFO"
        assert data["logger"] == "distmirror.mirror.manager"
        assert data["message"] == "[mirror] Processing Gradle 8.5"
        assert data["artifact_id"] == "gradle-8.5-bin"
        assert "version" not in data

    def test_human_formatter(self):
        line = HumanFormatter().format(_record())

        assert "[manager     ]" in line
        assert line.endswith("[mirror] Processing Gradle 8.5")


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_format(self):
        setup_logging(level="debug", format_type="json")
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_env_defaults(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        setup_logging()
        root = logging.getLogger()

        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, HumanFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
