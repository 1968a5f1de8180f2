"""Tests for the configuration helpers and the JSON logger."""

import json
import logging
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botmethods.core import config
from botmethods.core.logger import BotMethodsLogger, _JsonFormatter


# ── URL template ─────────────────────────────────────────────────────────────


class TestUrlTemplate:
    """Templates must carry exactly one token and one method placeholder."""

    def test_default_is_valid(self) -> None:
        assert config.is_valid_url_template(config.DEFAULT_URL_TEMPLATE)

    def test_local_server(self) -> None:
        assert config.is_valid_url_template("http://localhost:8081/bot<token>/<method>")

    @pytest.mark.parametrize(
        "template",
        [
            None,
            "",
            "https://api.telegram.org/bot/<method>",
            "https://api.telegram.org/bot<token>/",
            "https://x/<token>/<token>/<method>",
            "ftp://api.telegram.org/bot<token>/<method>",
            "bot<token>/<method>",
        ],
    )
    def test_invalid(self, template) -> None:
        assert not config.is_valid_url_template(template)

    def test_resolve_falls_back(self) -> None:
        assert config._resolve_url_template("nonsense") == config.DEFAULT_URL_TEMPLATE
        custom = "http://localhost:8081/bot<token>/<method>"
        assert config._resolve_url_template(custom) == custom


# ── Timeout and level ────────────────────────────────────────────────────────


class TestParsers:
    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 10.0), ("", 10.0), ("2.5", 2.5), ("abc", 10.0), ("0", 10.0), ("-3", 10.0)],
    )
    def test_timeout(self, raw, expected: float) -> None:
        assert config._parse_timeout(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, logging.INFO), ("debug", logging.DEBUG), (" WARNING ", logging.WARNING), ("loud", logging.INFO)],
    )
    def test_log_level(self, raw, expected: int) -> None:
        assert config._parse_log_level(raw) == expected


# ── Logger ───────────────────────────────────────────────────────────────────


class TestLogger:
    """Singleton behaviour and JSON output."""

    def test_singleton(self) -> None:
        assert BotMethodsLogger() is BotMethodsLogger()
        assert BotMethodsLogger.get_logger() is BotMethodsLogger.get_logger(logging.DEBUG)
        assert BotMethodsLogger.get_logger().name == "botmethods"

    def test_handlers_attached_once(self) -> None:
        logger = BotMethodsLogger.get_logger()
        handlers = list(logger.handlers)
        assert any(isinstance(h.formatter, _JsonFormatter) for h in handlers)

        BotMethodsLogger()
        BotMethodsLogger.get_logger(logging.ERROR)
        assert logger.handlers == handlers

    def test_formatter_merges_extra(self) -> None:
        record = logging.LogRecord(
            name="botmethods",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Telegram API error %s",
            args=(400,),
            exc_info=None,
        )
        record.api_endpoint = "sendInvoice"
        entry = json.loads(_JsonFormatter().format(record))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "botmethods"
        assert entry["message"] == "Telegram API error 400"
        assert entry["api_endpoint"] == "sendInvoice"
        assert "exc_info" not in entry

    def test_formatter_includes_exception(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            name="botmethods",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="failed",
            args=(),
            exc_info=exc_info,
        )
        entry = json.loads(_JsonFormatter().format(record))
        assert "RuntimeError: boom" in entry["exc_info"]
