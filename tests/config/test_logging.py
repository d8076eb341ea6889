"""Logging levels and JSON line output."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from botforge.config.logging import PACKAGE_LOGGER, configure_logging


def _json_lines(capfd: pytest.CaptureFixture[str]) -> list[dict[str, object]]:
    return [json.loads(line) for line in capfd.readouterr().err.splitlines() if line]


@pytest.mark.parametrize(("verbose", "level"), [(True, logging.DEBUG), (False, logging.WARNING)])
def test_package_level_follows_verbose(verbose: bool, level: int) -> None:
    configure_logging(verbose=verbose)
    assert logging.getLogger(PACKAGE_LOGGER).level == level
    assert logging.getLogger().level == logging.WARNING


def test_reconfiguring_replaces_handler() -> None:
    for _ in range(3):
        configure_logging(verbose=True)
    assert len(logging.getLogger().handlers) == 1


class TestJsonLines:
    def test_structlog_event(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        structlog.get_logger("botforge.assembly").warning("over budget", category="head", used=2)
        (line,) = _json_lines(capfd)
        assert line["event"] == "over budget"
        assert line["category"] == "head"
        assert line["used"] == 2
        assert line["level"] == "warning"
        assert line["logger"] == "botforge.assembly"
        assert "timestamp" in line

    def test_module_logger_record(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("botforge.services.catalog").debug("Slot catalog caches cleared")
        (line,) = _json_lines(capfd)
        assert line["event"] == "Slot catalog caches cleared"
        assert line["level"] == "debug"
        assert line["logger"] == "botforge.services.catalog"

    def test_debug_dropped_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        logging.getLogger("botforge.services.catalog").debug("quiet please")
        assert _json_lines(capfd) == []

    def test_pluggy_stays_quiet_under_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pluggy").debug("hook noise")
        assert _json_lines(capfd) == []
