"""Simulator configuration — pool size, display width, and defaults.

A session starts from a ``PoolConfig``.  The defaults are enough to run
interactively; a JSON file can override any of them::

    {
        "pool_size": 512,
        "display_width": 64,
        "default_strategy": "best",
        "compaction": "partition"
    }

Missing keys fall back to the defaults.  Command-line arguments are
applied on top of the loaded file by the REPL.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from py_memsim.memory.compaction import CompactionMethod
from py_memsim.memory.placement import Strategy

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_POOL_SIZE = 256
DEFAULT_DISPLAY_WIDTH = 80


class ConfigError(Exception):
    """Raise when a configuration file is unreadable or invalid."""


@dataclass(frozen=True)
class PoolConfig:
    """Settings for one simulator session."""

    pool_size: int = DEFAULT_POOL_SIZE
    display_width: int = DEFAULT_DISPLAY_WIDTH
    default_strategy: Strategy = Strategy.FIRST
    compaction: CompactionMethod = CompactionMethod.BUBBLE

    def __post_init__(self) -> None:
        """Reject sizes and widths that could never work.

        Raises:
            ConfigError: If pool_size or display_width is not positive.

        """
        for name in ("pool_size", "display_width"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                msg = f"{name} must be a positive integer, got {value!r}"
                raise ConfigError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PoolConfig:
        """Build a config from a parsed JSON object.

        Raises:
            ConfigError: If a value has the wrong type or is unknown.

        """
        try:
            return cls(
                pool_size=data.get("pool_size", DEFAULT_POOL_SIZE),
                display_width=data.get("display_width", DEFAULT_DISPLAY_WIDTH),
                default_strategy=Strategy.parse(data.get("default_strategy", Strategy.FIRST)),
                compaction=CompactionMethod(data.get("compaction", CompactionMethod.BUBBLE)),
            )
        except (AttributeError, ValueError) as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigError(msg) from e


def load_config(path: Path) -> PoolConfig:
    """Read a ``PoolConfig`` from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object,
            or holds invalid values.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load config {path}: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"Config {path} must contain a JSON object"
        raise ConfigError(msg)
    return PoolConfig.from_dict(data)
