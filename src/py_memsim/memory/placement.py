"""Placement strategies — decide *where* a contiguous request goes.

Given a request for ``size`` slots, the allocator looks at the holes
big enough to hold it and picks one.  Three classic policies:

- **FirstFitPolicy**: take the first big-enough hole (lowest address).
  Fast, and tends to leave small leftovers near the bottom of memory.
- **BestFitPolicy**: take the *smallest* big-enough hole.  Keeps large
  holes intact for large requests, but leaves tiny unusable slivers.
- **WorstFitPolicy**: take the *largest* hole.  The leftover is as big
  as possible, so it stays useful for later requests.

Ties in best/worst fit go to the lowest address — holes arrive in
address order and a later hole only wins if it is strictly better.

Allocation is two phases:
    1. **Select** — read-only; returns an address or ``None``.
    2. **Commit** — tag ``[address, address + size)`` with the process.

An unsatisfiable request (size 0, larger than memory, or no hole big
enough) is a normal outcome, reported as ``None`` — not an exception.

Design: Strategy pattern
    ``PlacementPolicy`` is the strategy; ``select_address`` is the
    context.  A new algorithm is a new policy class plus one entry in
    ``_POLICIES``.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import Protocol

from py_memsim.memory.holes import Hole, find_holes
from py_memsim.memory.space import FREE, AddressSpace


class Strategy(StrEnum):
    """The placement algorithms the allocator understands."""

    FIRST = "first"
    BEST = "best"
    WORST = "worst"

    @classmethod
    def parse(cls, text: str) -> "Strategy":
        """Turn ``"first"``/``"F"``, ``"best"``/``"B"`` or ``"worst"``/``"W"`` into a Strategy.

        Matching is case-insensitive.

        Raises:
            ValueError: If the text names no known strategy.

        """
        key = text.strip().lower()
        for strategy in cls:
            if key in {strategy.value, strategy.value[0]}:
                return strategy
        msg = f"Unknown placement strategy: {text!r}"
        raise ValueError(msg)


class PlacementPolicy(Protocol):
    """Interface every placement algorithm must satisfy."""

    def choose(self, holes: Iterable[Hole], size: int) -> Hole | None:
        """Return the hole to place ``size`` slots in, or None.

        ``holes`` arrive in ascending address order.
        """
        ...  # pragma: no cover


class FirstFitPolicy:
    """First fit — the lowest-addressed hole that is big enough."""

    def choose(self, holes: Iterable[Hole], size: int) -> Hole | None:
        """Return the first qualifying hole."""
        for hole in holes:
            if hole.length >= size:
                return hole
        return None


class BestFitPolicy:
    """Best fit — the smallest hole that is big enough.

    Stops early on an exact fit, since nothing can beat it.
    """

    def choose(self, holes: Iterable[Hole], size: int) -> Hole | None:
        """Return the smallest qualifying hole (lowest address on ties)."""
        best: Hole | None = None
        for hole in holes:
            if hole.length < size:
                continue
            if best is None or hole.length < best.length:
                best = hole
                if hole.length == size:
                    break
        return best


class WorstFitPolicy:
    """Worst fit — the largest hole, as long as it is big enough."""

    def choose(self, holes: Iterable[Hole], size: int) -> Hole | None:
        """Return the largest qualifying hole (lowest address on ties)."""
        worst: Hole | None = None
        for hole in holes:
            if hole.length >= size and (worst is None or hole.length > worst.length):
                worst = hole
        return worst


_POLICIES: dict[Strategy, PlacementPolicy] = {
    Strategy.FIRST: FirstFitPolicy(),
    Strategy.BEST: BestFitPolicy(),
    Strategy.WORST: WorstFitPolicy(),
}


def policy_for(strategy: Strategy) -> PlacementPolicy:
    """Return the policy object implementing ``strategy``."""
    return _POLICIES[strategy]


def select_address(space: AddressSpace, size: int, strategy: Strategy) -> int | None:
    """Pick a starting address for ``size`` slots without changing anything.

    Args:
        space: The address space to search.
        size: Number of contiguous slots wanted.
        strategy: Which placement algorithm to use.

    Returns:
        The chosen starting address, or None if the request cannot be
        placed (size 0, bigger than memory, or no hole large enough).

    """
    if size <= 0 or size > len(space):
        return None
    hole = policy_for(strategy).choose(find_holes(space, size), size)
    return None if hole is None else hole.start


def allocate(space: AddressSpace, process_id: str, size: int, strategy: Strategy) -> int | None:
    """Place ``size`` slots for ``process_id`` and tag them.

    When no placement exists the space is left exactly as it was.

    Args:
        space: The address space to allocate in.
        process_id: Owner tag written into the chosen slots.
        size: Number of contiguous slots wanted.
        strategy: Which placement algorithm to use.

    Returns:
        The starting address of the new allocation, or None.

    Raises:
        ValueError: If ``process_id`` is empty or equal to ``FREE``.

    """
    if not process_id or process_id == FREE:
        msg = f"Invalid process identifier: {process_id!r}"
        raise ValueError(msg)
    address = select_address(space, size, strategy)
    if address is not None:
        space.tag_range(address, address + size, process_id)
    return address


def deallocate(space: AddressSpace, process_id: str) -> int:
    """Free every slot owned by ``process_id``.

    Freed slots merge with neighbouring holes automatically — a free
    slot is free no matter how it got that way.  Freeing a process that
    owns nothing is a harmless no-op.

    Returns:
        The number of slots released.

    """
    if process_id == FREE:
        return 0
    released = 0
    for address, tag in enumerate(space.snapshot()):
        if tag == process_id:
            space.set_slot(address, FREE)
            released += 1
    return released
