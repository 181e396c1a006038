"""Address space — the fixed-length buffer that represents simulated memory.

Contiguous allocation treats memory as one long row of **slots**.  Each
slot carries a **tag**: either the ``FREE`` sentinel or the identifier
of the process that owns it.  A pool of ten slots where process ``A``
holds the first five looks like this::

    AAAAA.....

Every other part of the engine (hole discovery, placement, compaction)
reads and writes memory *only* through this class.

Design choices:
    - **Fixed length.**  The size is chosen at construction and never
      changes — real physical memory doesn't grow either.
    - **Every write is range-checked.**  Out-of-range indices raise
      ``AddressRangeError`` instead of silently clamping, so a bad
      caller can never scribble past the end of the buffer.
    - **No negative indexing.**  ``slot_at(-1)`` is an error, not "the
      last slot" — addresses are addresses, not Python list indices.
"""

from collections.abc import Iterator

FREE = "."
"""Tag marking a slot that no process owns."""


class PoolCreationError(Exception):
    """Raise when an address space cannot be built."""


class AddressRangeError(IndexError):
    """Raise when an address or address range falls outside the space."""


class AddressSpace:
    """A fixed number of tagged slots, all ``FREE`` at birth."""

    def __init__(self, size: int) -> None:
        """Create an address space of ``size`` free slots.

        Args:
            size: Number of slots.  Must be a positive integer.

        Raises:
            PoolCreationError: If size is not a positive integer or the
                backing storage cannot be obtained.

        """
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            msg = f"Address space size must be a positive integer, got {size!r}"
            raise PoolCreationError(msg)
        try:
            self._slots: list[str] = [FREE] * size
        except MemoryError as e:
            msg = f"Cannot reserve {size} slots"
            raise PoolCreationError(msg) from e

    @classmethod
    def from_layout(cls, layout: str) -> "AddressSpace":
        """Build an address space from a layout string such as ``"AA..B"``.

        Each character becomes one slot; ``FREE`` characters stay free.

        Raises:
            PoolCreationError: If the layout is empty.

        """
        space = cls(len(layout))
        for address, tag in enumerate(layout):
            space._slots[address] = tag
        return space

    def __len__(self) -> int:
        """Return the fixed number of slots."""
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        """Iterate over tags in address order."""
        return iter(self._slots)

    def __eq__(self, other: object) -> bool:
        """Two spaces are equal when every slot holds the same tag."""
        if not isinstance(other, AddressSpace):
            return NotImplemented
        return self._slots == other._slots

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Show the layout, e.g. ``AddressSpace('AAA..')``."""
        return f"AddressSpace({self.layout()!r})"

    def slot_at(self, address: int) -> str:
        """Return the tag stored at ``address``.

        Raises:
            AddressRangeError: If the address is outside ``[0, len)``.

        """
        self._check_address(address)
        return self._slots[address]

    def set_slot(self, address: int, tag: str) -> None:
        """Store ``tag`` at ``address``.

        Raises:
            AddressRangeError: If the address is outside ``[0, len)``.

        """
        self._check_address(address)
        self._slots[address] = tag

    def tag_range(self, start: int, end: int, tag: str) -> None:
        """Set every slot in ``[start, end)`` to ``tag``.

        An empty range (``start == end``) is a no-op.  The range is
        validated before anything is written, so a rejected call leaves
        the space untouched.

        Args:
            start: First address to tag (inclusive).
            end: Address one past the last slot to tag (exclusive).
            tag: ``FREE`` or a process identifier.

        Raises:
            AddressRangeError: If ``start < 0``, ``end > len`` or
                ``start > end``.

        """
        if start < 0 or end > len(self._slots) or start > end:
            msg = f"Range [{start}:{end}) is outside address space of {len(self._slots)} slots"
            raise AddressRangeError(msg)
        self._slots[start:end] = [tag] * (end - start)

    def swap(self, first: int, second: int) -> None:
        """Exchange the tags at two addresses.

        Raises:
            AddressRangeError: If either address is out of range.

        """
        self._check_address(first)
        self._check_address(second)
        self._slots[first], self._slots[second] = self._slots[second], self._slots[first]

    def snapshot(self) -> tuple[str, ...]:
        """Return an immutable copy of every tag in address order."""
        return tuple(self._slots)

    def layout(self) -> str:
        """Return the tags joined into one string, e.g. ``"AAAAA....."``."""
        return "".join(self._slots)

    def copy(self) -> "AddressSpace":
        """Return an independent copy of this address space."""
        clone = AddressSpace(len(self._slots))
        clone._slots = list(self._slots)
        return clone

    def count(self, tag: str) -> int:
        """Return how many slots currently hold ``tag``."""
        return self._slots.count(tag)

    def _check_address(self, address: int) -> None:
        if not 0 <= address < len(self._slots):
            msg = f"Address {address} is outside address space of {len(self._slots)} slots"
            raise AddressRangeError(msg)
