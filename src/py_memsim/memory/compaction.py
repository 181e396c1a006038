"""Compaction — slide every allocation down to address 0.

After enough allocate/free churn, memory looks like Swiss cheese: lots
of free slots in total, but no single hole large enough for the next
request (**external fragmentation**).  Compaction fixes that by moving
every occupied slot toward low addresses, keeping processes in their
original order, until all free space is one hole at the top::

    .AA..B.CC.   →   AABCC.....

Two implementations with identical results:

- ``compact`` — repeated left-to-right passes.  Whenever a free slot
  sits just below an occupied one, swap them.  Stop after a pass that
  moves nothing.  O(N²) in the worst case, but it shows memory moving
  the way a step-by-step animation would.
- ``stable_partition`` — a single O(N) pass that collects the occupied
  tags in order and rewrites the space.  Only the *final* state matches
  ``compact``; intermediate passes are not reproduced.
"""

from enum import StrEnum

from py_memsim.memory.space import FREE, AddressSpace


class CompactionMethod(StrEnum):
    """Which compaction algorithm to run."""

    BUBBLE = "bubble"
    PARTITION = "partition"


def compact_pass(space: AddressSpace) -> bool:
    """Run one left-to-right sweep, sliding occupied slots down by one.

    Returns:
        True if anything moved during the pass.

    """
    moved = False
    for address in range(1, len(space)):
        if space.slot_at(address - 1) == FREE and space.slot_at(address) != FREE:
            space.swap(address - 1, address)
            moved = True
    return moved


def compact(space: AddressSpace) -> int:
    """Repeat ``compact_pass`` until a pass moves nothing.

    Returns:
        The number of passes that moved at least one slot (0 if the
        space was already compact).

    """
    passes = 0
    while compact_pass(space):
        passes += 1
    return passes


def stable_partition(space: AddressSpace) -> int:
    """Compact in one pass by rewriting the space in order.

    Returns:
        The number of slots whose tag changed.

    """
    before = space.snapshot()
    occupied = [tag for tag in before if tag != FREE]
    changed = 0
    for address in range(len(space)):
        tag = occupied[address] if address < len(occupied) else FREE
        if before[address] != tag:
            space.set_slot(address, tag)
            changed += 1
    return changed


def run_compaction(space: AddressSpace, method: CompactionMethod = CompactionMethod.BUBBLE) -> int:
    """Compact ``space`` with the chosen method and return its work count."""
    if method == CompactionMethod.PARTITION:
        return stable_partition(space)
    return compact(space)
