"""
Tests for the engine's logging wrapper.
"""

import logging

import pytest

from symbolic_cas import SymbolicEngine
from symbolic_cas.logging_system import (
    CasLogger, LogLevel, configure_logging, get_logger, set_log_level
)


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected():
    """Configure the global logger at a given level and collect what it emits"""
    collector = _Collector()

    def configure(level):
        logger = configure_logging(level)
        logger.logger.addHandler(collector)
        return collector.records

    yield configure
    configure_logging(LogLevel.MINIMAL)


class TestLevels:
    """Messages are filtered by verbosity."""

    def test_should_log(self):
        logger = CasLogger(LogLevel.MODERATE)
        assert logger._should_log(LogLevel.MINIMAL)
        assert logger._should_log(LogLevel.MODERATE)
        assert not logger._should_log(LogLevel.VERBOSE)

    def test_silent_has_no_console_handler(self):
        logger = CasLogger(LogLevel.SILENT)
        assert logger.logger.handlers == []

    def test_set_log_level_updates_global(self):
        set_log_level(LogLevel.DETAILED)
        assert get_logger().log_level == LogLevel.DETAILED
        set_log_level(LogLevel.MINIMAL)


class TestEngineLogging:
    """What the engine reports at each level."""

    def test_parse_failure_is_a_warning(self, collected):
        records = collected(LogLevel.MINIMAL)
        SymbolicEngine().parse_from_string("2 +")
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "Could not parse '2 +'" in records[0].getMessage()

    def test_successful_parse_is_quiet_at_minimal(self, collected):
        records = collected(LogLevel.MINIMAL)
        SymbolicEngine().parse_from_string("x + 1")
        assert records == []

    def test_parsed_expression_reported_at_moderate(self, collected):
        records = collected(LogLevel.MODERATE)
        SymbolicEngine().parse_from_string("x + 1")
        assert any("(x + 1)" in r.getMessage() for r in records)

    def test_operations_reported_at_detailed(self, collected):
        records = collected(LogLevel.DETAILED)
        engine = SymbolicEngine()
        engine.parse_from_string("x^2")
        engine.differentiate("x")
        assert any(r.getMessage().startswith("differentiate:") for r in records)

    def test_silent_suppresses_warnings(self, collected):
        records = collected(LogLevel.SILENT)
        SymbolicEngine().parse_from_string("2 +")
        assert records == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
