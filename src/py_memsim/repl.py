"""Interactive REPL (Read-Eval-Print Loop) for the allocation simulator.

The REPL builds a memory pool from the command line (and an optional
JSON config file), creates a shell, and enters the classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell reports an exit.

This module keeps the I/O loop separate from the shell logic.  The
shell is fully testable (returns strings, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.

``parse_args`` and ``build_config`` are pure and testable.  ``run()``
is the I/O loop and ``main()`` the console entry point.
"""

import argparse
import readline  # noqa: F401  (line editing and history for input())
import sys
from dataclasses import replace
from pathlib import Path

from py_memsim.config import ConfigError, PoolConfig, load_config
from py_memsim.memory.pool import MemoryPool
from py_memsim.memory.space import PoolCreationError
from py_memsim.shell import Shell

PROMPT = "allocator> "


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments without the program name (``sys.argv[1:]`` if None).

    Returns:
        The parsed namespace (``size``, ``config``, ``width``, ``script``).

    """
    parser = argparse.ArgumentParser(
        prog="py-memsim",
        description="Simulate contiguous memory allocation with first, best and worst fit",
    )
    parser.add_argument("size", type=int, nargs="?", default=None, help="memory pool size in slots")
    parser.add_argument("--config", type=Path, default=None, help="JSON configuration file")
    parser.add_argument("--width", type=int, default=None, help="slots per line in the memory map")
    parser.add_argument("--script", type=Path, default=None, help="run a command script before prompting")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PoolConfig:
    """Merge the config file (if any) with command-line overrides.

    Raises:
        ConfigError: If the file or an override is invalid.

    """
    config = load_config(args.config) if args.config is not None else PoolConfig()
    overrides: dict[str, int] = {}
    if args.size is not None:
        overrides["pool_size"] = args.size
    if args.width is not None:
        overrides["display_width"] = args.width
    return replace(config, **overrides) if overrides else config


def run(shell: Shell) -> None:
    """Drive ``shell`` from standard input until exit, EOF or Ctrl+C."""
    try:
        while not shell.exited:
            try:
                command = input(PROMPT)
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result and result != Shell.EXIT_SENTINEL:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C
        print("\nInterrupted.")  # noqa: T201


def main(argv: list[str] | None = None) -> int:
    """Build the pool and run the REPL.

    This is the ``py-memsim`` console entry point.

    Returns:
        The process exit status.

    """
    args = parse_args(argv)
    try:
        config = build_config(args)
        pool = MemoryPool(config.pool_size, compaction=config.compaction)
    except (ConfigError, PoolCreationError) as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return 1

    shell = Shell(pool=pool, config=config)
    if args.script is not None:
        output = shell.run_file(args.script)
        if output and output != Shell.EXIT_SENTINEL:
            print(output)  # noqa: T201
    run(shell)
    return 0


if __name__ == "__main__":
    sys.exit(main())
