"""Memory subsystem — address space, hole discovery, placement, and compaction.

Re-exports public symbols so callers can write::

    from py_memsim.memory import MemoryPool, Strategy
"""

from py_memsim.memory.compaction import CompactionMethod, compact, stable_partition
from py_memsim.memory.holes import Hole, find_holes
from py_memsim.memory.placement import (
    BestFitPolicy,
    FirstFitPolicy,
    PlacementPolicy,
    Strategy,
    WorstFitPolicy,
    allocate,
    deallocate,
    select_address,
)
from py_memsim.memory.pool import MemoryPool, Region
from py_memsim.memory.space import FREE, AddressRangeError, AddressSpace, PoolCreationError

__all__ = [
    "FREE",
    "AddressRangeError",
    "AddressSpace",
    "BestFitPolicy",
    "CompactionMethod",
    "FirstFitPolicy",
    "Hole",
    "MemoryPool",
    "PlacementPolicy",
    "PoolCreationError",
    "Region",
    "Strategy",
    "WorstFitPolicy",
    "allocate",
    "compact",
    "deallocate",
    "find_holes",
    "select_address",
    "stable_partition",
]
