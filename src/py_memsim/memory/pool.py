"""Memory pool — the public face of the allocation engine.

``MemoryPool`` owns one ``AddressSpace`` and exposes the operations a
command layer needs:

- ``allocate`` / ``deallocate`` — place or release a process's memory.
- ``compact`` — squeeze all allocations down to address 0.
- ``snapshot`` / ``find_free_regions`` — read-only inspection.
- ``regions`` / ``render`` — the two reporting views: a list of
  address ranges, and a character map wrapped to a terminal width.

Each mutation is recorded in the pool's ``Logger`` so a session can be
replayed as an audit trail.

The pool is single-owner: nothing here locks, and every call runs to
completion before returning.
"""

from dataclasses import dataclass

from py_memsim.logging import Logger, LogLevel
from py_memsim.memory.compaction import CompactionMethod, run_compaction
from py_memsim.memory.holes import Hole, find_holes
from py_memsim.memory.placement import Strategy
from py_memsim.memory.placement import allocate as place
from py_memsim.memory.placement import deallocate as release
from py_memsim.memory.space import FREE, AddressSpace

DEFAULT_WIDTH = 80
_SOURCE = "pool"


@dataclass(frozen=True)
class Region:
    """A maximal run of slots sharing one tag.

    ``end`` is inclusive, matching how address ranges are printed
    (``addresses [0:4]`` covers five slots).
    """

    start: int
    end: int
    owner: str | None
    """Owning process, or None for unallocated space."""

    @property
    def length(self) -> int:
        """Return the number of slots in the region."""
        return self.end - self.start + 1

    def __str__(self) -> str:
        """Format as ``addresses [start:end] - process X`` or ``- unallocated``."""
        what = "unallocated" if self.owner is None else f"process {self.owner}"
        return f"addresses [{self.start}:{self.end}] - {what}"


class MemoryPool:
    """A simulated contiguous memory pool with pluggable placement."""

    def __init__(
        self,
        size: int,
        *,
        compaction: CompactionMethod = CompactionMethod.BUBBLE,
        logger: Logger | None = None,
    ) -> None:
        """Create a pool of ``size`` free slots.

        Args:
            size: Number of slots in the pool.
            compaction: Algorithm ``compact()`` uses.
            logger: Event log to write to (a fresh one if omitted).

        Raises:
            PoolCreationError: If the pool cannot be built.

        """
        self._space = AddressSpace(size)
        self._compaction = CompactionMethod(compaction)
        self._logger = logger if logger is not None else Logger()

    @property
    def size(self) -> int:
        """Return the fixed number of slots."""
        return len(self._space)

    @property
    def space(self) -> AddressSpace:
        """Return the underlying address space."""
        return self._space

    @property
    def logger(self) -> Logger:
        """Return the pool's event log."""
        return self._logger

    @property
    def used_slots(self) -> int:
        """Return the number of slots owned by some process."""
        return self.size - self._space.count(FREE)

    @property
    def free_slots(self) -> int:
        """Return the number of unallocated slots."""
        return self._space.count(FREE)

    def owners(self) -> set[str]:
        """Return the identifiers of every process holding memory."""
        return {tag for tag in self._space if tag != FREE}

    def allocate(self, process_id: str, size: int, strategy: Strategy = Strategy.FIRST) -> int | None:
        """Allocate ``size`` contiguous slots to a process.

        Args:
            process_id: The requesting process.
            size: Number of slots wanted.
            strategy: Placement algorithm.

        Returns:
            The starting address, or None if the request cannot be placed.

        """
        address = place(self._space, process_id, size, strategy)
        if address is None:
            self._logger.log(
                LogLevel.WARNING,
                f"No {strategy}-fit placement for {size} slots (process {process_id})",
                source=_SOURCE,
                process=process_id,
            )
        else:
            self._logger.log(
                LogLevel.INFO,
                f"Allocated [{address}:{address + size - 1}] to process {process_id} ({strategy} fit)",
                source=_SOURCE,
                process=process_id,
            )
        return address

    def deallocate(self, process_id: str) -> int:
        """Release every slot a process owns.

        Returns:
            The number of slots freed (0 for an unknown process).

        """
        released = release(self._space, process_id)
        if released:
            self._logger.log(
                LogLevel.INFO,
                f"Freed {released} slots from process {process_id}",
                source=_SOURCE,
                process=process_id,
            )
        else:
            self._logger.log(
                LogLevel.DEBUG,
                f"Process {process_id} holds no memory",
                source=_SOURCE,
                process=process_id,
            )
        return released

    def compact(self) -> int:
        """Slide all allocations to low addresses.

        Returns:
            The work count reported by the compaction method.

        """
        work = run_compaction(self._space, self._compaction)
        self._logger.log(
            LogLevel.INFO,
            f"Compacted pool ({self._compaction}, {work} steps)",
            source=_SOURCE,
        )
        return work

    def snapshot(self) -> tuple[str, ...]:
        """Return the tag of every slot in address order."""
        return self._space.snapshot()

    def find_free_regions(self, min_size: int = 1) -> list[Hole]:
        """Return every hole of at least ``min_size`` slots, lowest first."""
        return list(find_holes(self._space, min_size))

    def largest_hole(self) -> int:
        """Return the length of the largest hole (0 when memory is full)."""
        return max((hole.length for hole in find_holes(self._space)), default=0)

    def regions(self) -> list[Region]:
        """Split the pool into maximal runs of identical tags."""
        result: list[Region] = []
        start = 0
        tags = self._space.snapshot()
        for address in range(1, len(tags) + 1):
            if address == len(tags) or tags[address] != tags[start]:
                owner = None if tags[start] == FREE else tags[start]
                result.append(Region(start=start, end=address - 1, owner=owner))
                start = address
        return result

    def render(self, width: int = DEFAULT_WIDTH) -> str:
        """Return the pool as a character map, ``width`` slots per line.

        Raises:
            ValueError: If width is not positive.

        """
        if width <= 0:
            msg = f"Display width must be positive, got {width}"
            raise ValueError(msg)
        layout = self._space.layout()
        return "\n".join(layout[i : i + width] for i in range(0, len(layout), width))
