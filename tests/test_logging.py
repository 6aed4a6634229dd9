"""Tests for folio.logging_setup."""

import io
import json
import logging

from rich.console import Console
from rich.logging import RichHandler

from folio.config.models import FolioConfig
from folio.logging_setup import JsonFormatter, configure_logging


class TestConfigureLogging:
    def test_text_format_uses_rich(self):
        console = Console(file=io.StringIO(), width=200)
        handler = configure_logging(FolioConfig(log_level="debug"), console=console)
        logger = logging.getLogger("folio")

        assert isinstance(handler, RichHandler)
        assert logger.handlers == [handler]
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

        logging.getLogger("folio.pipeline.orchestrator").debug("compiled %s", "blog/hello-world")
        assert "compiled blog/hello-world" in console.file.getvalue()

    def test_json_format(self):
        handler = configure_logging(FolioConfig(log_format="json", log_level="warn"))
        assert isinstance(handler.formatter, JsonFormatter)
        assert logging.getLogger("folio").level == logging.WARNING

    def test_reconfigure_replaces_handler(self):
        configure_logging(FolioConfig())
        configure_logging(FolioConfig(log_format="json"))
        assert len(logging.getLogger("folio").handlers) == 1


class TestJsonFormatter:
    def test_record_fields(self):
        record = logging.LogRecord("folio.store", logging.ERROR, __file__, 1, "missing %s", ("blog",), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "error"
        assert payload["logger"] == "folio.store"
        assert payload["message"] == "missing blog"
        assert "ts" in payload
