"""Hole discovery — find maximal runs of free slots.

A **hole** is a maximal stretch of consecutive ``FREE`` slots.  Every
placement strategy starts from the same question — "which holes are big
enough?" — so that scan lives here, once.

Holes are *views*, not state.  They are recomputed on demand and are
stale the moment the address space changes.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from py_memsim.memory.space import FREE, AddressSpace


@dataclass(frozen=True)
class Hole:
    """A run of free slots starting at ``start`` and ``length`` slots long."""

    start: int
    length: int

    @property
    def end(self) -> int:
        """Return the address one past the last free slot."""
        return self.start + self.length


def find_holes(space: AddressSpace, min_size: int = 1) -> Iterator[Hole]:
    """Yield every hole of at least ``min_size`` slots, lowest address first.

    The scan groups consecutive free slots greedily and resumes right
    after each hole, so yielded holes never overlap and are never
    adjacent.  Address order matters: first-fit takes the first one.

    Args:
        space: The address space to scan.
        min_size: Smallest hole worth reporting.  Values below 1 are
            treated as 1.

    Yields:
        Holes in ascending address order.

    """
    min_size = max(min_size, 1)
    run_start: int | None = None
    for address, tag in enumerate(space):
        if tag == FREE:
            if run_start is None:
                run_start = address
        elif run_start is not None:
            if address - run_start >= min_size:
                yield Hole(start=run_start, length=address - run_start)
            run_start = None

    if run_start is not None and len(space) - run_start >= min_size:
        yield Hole(start=run_start, length=len(space) - run_start)
