"""The shell — command interpreter for the allocation simulator.

The shell reads one command line, splits it into a command name and
arguments, dispatches to a handler, and returns a string result.  The
command language is deliberately terse (one letter per operation)::

    A <process> <size> <F|B|W>   allocate with first/best/worst fit
    F <process>                  free every slot the process owns
    S                            show the memory map
    STAT                         show address ranges per owner
    C                            compact memory
    R <file>                     run a script of commands
    CLEAR                        clear the terminal
    E                            exit

Design choices:
    - **Returns strings, not prints.**  This keeps the shell fully
      testable and separates concerns (the caller decides how to
      display output).
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **Input is validated here, not in the engine.**  The pool expects
      clean arguments; every "Usage:" and "Error:" message is produced
      at this boundary.
"""

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from py_memsim.config import PoolConfig
from py_memsim.memory.placement import Strategy
from py_memsim.memory.pool import MemoryPool
from py_memsim.memory.space import FREE

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

# Scripts may run other scripts; this bounds the nesting.
_MAX_SCRIPT_DEPTH = 16

_CLEAR_SCREEN = "\033c\033[3J"


class Shell:
    """Command interpreter that operates on a memory pool."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        pool: MemoryPool,
        config: PoolConfig | None = None,
        allow_scripts: bool = True,
    ) -> None:
        """Create a shell attached to a memory pool.

        Args:
            pool: The pool every command operates on.
            config: Session settings (display width, default strategy).
            allow_scripts: Whether the R command may read script files.

        """
        self._pool = pool
        self._config = config if config is not None else PoolConfig(pool_size=pool.size)
        self._exited = False
        self._script_depth = 0

        # Command name -> handler.
        self._commands: dict[str, _Handler] = {
            "A": self._cmd_allocate,
            "F": self._cmd_free,
            "S": self._cmd_show,
            "STAT": self._cmd_stat,
            "C": self._cmd_compact,
            "R": self._cmd_read,
            "CLEAR": self._cmd_clear,
            "E": self._cmd_exit,
            "EXIT": self._cmd_exit,
            "HELP": self._cmd_help,
            "LOG": self._cmd_log,
        }
        if not allow_scripts:
            del self._commands["R"]

    @property
    def pool(self) -> MemoryPool:
        """Return the pool this shell drives."""
        return self._pool

    @property
    def exited(self) -> bool:
        """Return True once an exit command has run."""
        return self._exited

    def execute(self, command: str) -> str:
        """Parse and execute one command line.

        Command names are case-insensitive.

        Args:
            command: The raw command string (e.g. "A X 10 B").

        Returns:
            The command output, an error message, or ``EXIT_SENTINEL``.

        """
        if self._exited:
            return self.EXIT_SENTINEL

        parts = command.strip().split()
        if not parts:
            return ""

        handler = self._commands.get(parts[0].upper())
        if handler is None:
            return f"Unknown command: {parts[0]}"

        return handler(parts[1:])

    def run_script(self, script: str) -> list[str]:
        """Execute a multi-line script, returning output from each command.

        Blank lines and ``#`` comments are skipped.  Execution stops at
        the first exit command, whose sentinel is the last result.

        Args:
            script: Multi-line string of commands.

        Returns:
            List of output strings, one per executed command.

        """
        results: list[str] = []
        for raw in script.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            results.append(self.execute(line))
            if self._exited:
                break
        return results

    def run_file(self, path: Path) -> str:
        """Run a script file and return its combined output.

        Returns:
            The non-empty outputs joined by newlines, an error message,
            or ``EXIT_SENTINEL`` if the script exited without output.

        """
        if self._script_depth >= _MAX_SCRIPT_DEPTH:
            return f"Error: scripts nested deeper than {_MAX_SCRIPT_DEPTH} levels"

        try:
            script = path.read_text()
        except OSError as e:
            return f"Error: cannot read script {path}: {e.strerror or e}"
        except UnicodeDecodeError:
            return f"Error: script {path} is not valid UTF-8 text"

        self._script_depth += 1
        try:
            results = self.run_script(script)
        finally:
            self._script_depth -= 1

        output = "\n".join(r for r in results if r and r != self.EXIT_SENTINEL)
        if self._exited and not output:
            return self.EXIT_SENTINEL
        return output

    # -- Command handlers ------------------------------------------------

    def _cmd_allocate(self, args: list[str]) -> str:
        """Allocate memory for a process."""
        if len(args) < 2:  # noqa: PLR2004
            return "Usage: A <process> <size> [F|B|W]"

        process = args[0]
        if len(process) != 1 or process == FREE:
            return f"Error: process name must be one character other than '{FREE}'"

        try:
            size = int(args[1])
        except ValueError:
            return f"Error: invalid size '{args[1]}'"
        if size <= 0:
            return f"Error: size must be positive, got {size}"

        try:
            strategy = Strategy.parse(args[2]) if len(args) > 2 else self._config.default_strategy  # noqa: PLR2004
        except ValueError as e:
            return f"Error: {e}"

        address = self._pool.allocate(process, size, strategy)
        if address is None:
            return f"Cannot allocate {size} slots for process {process} ({strategy} fit)"
        return ""

    def _cmd_free(self, args: list[str]) -> str:
        """Release all memory held by a process."""
        if not args:
            return "Usage: F <process>"
        self._pool.deallocate(args[0])
        return ""

    def _cmd_show(self, _args: list[str]) -> str:
        """Show the memory map."""
        return self._pool.render(self._config.display_width)

    def _cmd_stat(self, _args: list[str]) -> str:
        """Show each run of slots with its owner."""
        return "\n".join(f"\t{region}" for region in self._pool.regions())

    def _cmd_compact(self, _args: list[str]) -> str:
        """Compact memory."""
        self._pool.compact()
        return ""

    def _cmd_read(self, args: list[str]) -> str:
        """Run commands from a script file."""
        if not args:
            return "Usage: R <file>"
        return self.run_file(Path(args[0]))

    def _cmd_clear(self, _args: list[str]) -> str:
        """Clear the terminal screen."""
        return _CLEAR_SCREEN

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        self._exited = True
        return self.EXIT_SENTINEL

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(sorted(self._commands))

    def _cmd_log(self, _args: list[str]) -> str:
        """Show the pool's event log."""
        entries = self._pool.logger.entries
        return "\n".join(str(e) for e in entries) if entries else "No log entries."
