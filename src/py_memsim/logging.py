"""Allocator event log.

``MemoryPool`` records each allocation, release and compaction here as
a ``LogEntry`` tagged with the process involved, and the shell's
``LOG`` command prints them back.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "pool").
        process: The process identifier involved, if any.

    """

    level: LogLevel
    message: str
    source: str
    process: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        process: str | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            process: Process identifier associated with the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, process=process))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        process: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching every given criterion.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.
            process: If set, only return entries about this process.

        Returns:
            A filtered list of log entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if process is not None:
            result = [e for e in result if e.process == process]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
