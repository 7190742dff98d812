"""
Unit tests for structured logging setup.
"""

import json
import logging
import os
import tempfile
from decimal import Decimal

import pytest

from exitplan.application.config import LoggingConfig
from exitplan.domain.entities import StrategyStatus
from exitplan.infrastructure.logging import (
    EngineJSONFormatter,
    EngineLogFilter,
    correlation_context,
    get_correlation_id,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("exitplan.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    """Remove handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if any(isinstance(f, EngineLogFilter) for f in handler.filters):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestEngineJSONFormatter:
    """Test JSON formatting."""

    def test_base_fields(self):
        """Test the standard structure of an entry."""
        entry = json.loads(EngineJSONFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "exitplan.test"
        assert entry["message"] == "hello world"
        assert entry["line"] == 10

    def test_engine_fields_and_extra(self):
        """Test engine fields are grouped and Decimals stay exact."""
        entry = json.loads(
            EngineJSONFormatter().format(
                _record(token_symbol="ETH", status=StrategyStatus.ACTIVE, profit=Decimal("0.1"))
            )
        )
        assert entry["engine"] == {"token_symbol": "ETH", "status": "active"}
        assert entry["extra"] == {"profit": "0.1"}

    def test_correlation_id(self):
        """Test the correlation ID is included when set."""
        record = _record()
        with correlation_context("req-1"):
            EngineLogFilter().filter(record)
        entry = json.loads(EngineJSONFormatter().format(record))
        assert entry["correlation_id"] == "req-1"


class TestCorrelationContext:
    """Test correlation ID scoping."""

    def test_generated_and_reset(self):
        """Test an ID is generated and cleared after the block."""
        with correlation_context() as correlation_id:
            assert get_correlation_id() == correlation_id
        assert get_correlation_id() is None


class TestSetupLogging:
    """Test handler installation."""

    def test_text_console(self, restore_root_logger):
        """Test the default configuration installs one console handler."""
        setup_logging(LoggingConfig(level="WARNING"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, EngineJSONFormatter)

    def test_json_with_rotating_file(self, restore_root_logger):
        """Test a file handler writes JSON lines."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "engine.log")
            setup_logging(LoggingConfig(level="INFO", json=True, file=path, max_bytes=1024, backup_count=1))
            root = logging.getLogger()
            assert len(root.handlers) == 2
            logging.getLogger("exitplan.test").info("planned", extra={"operation": "plan"})
            for handler in root.handlers:
                handler.flush()
            with open(path) as f:
                entry = json.loads(f.readline())
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
        assert entry["message"] == "planned"
        assert entry["engine"] == {"operation": "plan"}
