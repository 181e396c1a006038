"""Tests for the allocator event log.

The logger records structured entries for pool events so a session
leaves an audit trail of allocations, releases and compactions.
"""

from py_memsim.logging import LogEntry, Logger, LogLevel
from py_memsim.memory import MemoryPool
from py_memsim.shell import Shell

POOL_SIZE = 10


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, source, and process."""
        entry = LogEntry(level=LogLevel.INFO, message="allocated", source="pool", process="A")
        assert entry.level is LogLevel.INFO
        assert entry.message == "allocated"
        assert entry.source == "pool"
        assert entry.process == "A"

    def test_process_defaults_to_none(self) -> None:
        """Pool-wide events have no process."""
        entry = LogEntry(level=LogLevel.INFO, message="compacted", source="pool")
        assert entry.process is None

    def test_entry_str(self) -> None:
        """String form is ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.WARNING, message="no placement", source="pool")
        assert str(entry) == "[WARNING] pool: no placement"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable."""
        logger = Logger()
        logger.log(LogLevel.INFO, "allocated", source="pool")
        assert len(logger.entries) == 1
        assert logger.entries[0].message == "allocated"

    def test_entries_are_ordered(self) -> None:
        """Entries should be in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_entries_returns_a_copy(self) -> None:
        """Mutating the returned list must not touch the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="test")
        logger.entries.clear()
        assert len(logger) == 1

    def test_filter_by_level(self) -> None:
        """Filtering should return only entries at or above the level."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "debug msg", source="test")
        logger.log(LogLevel.INFO, "info msg", source="test")
        logger.log(LogLevel.ERROR, "error msg", source="test")
        warnings_and_above = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings_and_above) == 1
        assert warnings_and_above[0].level is LogLevel.ERROR

    def test_filter_by_source(self) -> None:
        """Filtering by source should return matching entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "pool event", source="pool")
        logger.log(LogLevel.INFO, "shell event", source="shell")
        assert [e.source for e in logger.filter(source="pool")] == ["pool"]

    def test_filter_by_process(self) -> None:
        """Filtering by process should return that process's events."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="pool", process="A")
        logger.log(LogLevel.INFO, "b", source="pool", process="B")
        assert [e.message for e in logger.filter(process="B")] == ["b"]

    def test_filter_without_criteria_returns_everything(self) -> None:
        """No criteria means every entry."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "x", source="test")
        assert len(logger.filter()) == 1

    def test_clear(self) -> None:
        """Clearing should remove all entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "test", source="test")
        logger.clear()
        assert len(logger.entries) == 0


class TestShellLogCommand:
    """Verify the LOG shell command."""

    def test_empty_log(self) -> None:
        """A fresh pool has nothing to show."""
        shell = Shell(pool=MemoryPool(POOL_SIZE))
        assert shell.execute("LOG") == "No log entries."

    def test_log_shows_allocations(self) -> None:
        """Allocations appear in the LOG output."""
        shell = Shell(pool=MemoryPool(POOL_SIZE))
        shell.execute("A X 4 F")
        output = shell.execute("log")
        assert "[INFO] pool:" in output
        assert "process X" in output
