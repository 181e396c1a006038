"""Tests for hole discovery.

A hole is a maximal run of free slots.  ``find_holes`` reports them in
ascending address order, skipping any shorter than the requested
minimum.  Every placement strategy is built on this scan.
"""

from py_memsim.memory import AddressSpace, Hole, find_holes

MIXED_LAYOUT = "..AAA.BB....C."


class TestHole:
    """Verify the Hole value type."""

    def test_end_is_exclusive(self) -> None:
        """end should be one past the last free slot."""
        hole = Hole(start=3, length=4)
        assert hole.end == 7

    def test_holes_are_values(self) -> None:
        """Holes with equal fields compare equal."""
        assert Hole(start=1, length=2) == Hole(start=1, length=2)


class TestFindHoles:
    """Verify scanning for runs of free slots."""

    def test_empty_pool_is_one_hole(self) -> None:
        """An untouched pool is a single hole covering everything."""
        space = AddressSpace(10)
        assert list(find_holes(space)) == [Hole(start=0, length=10)]

    def test_full_pool_has_no_holes(self) -> None:
        """With every slot owned there is nothing to report."""
        space = AddressSpace.from_layout("AAAA")
        assert list(find_holes(space)) == []

    def test_all_holes_in_address_order(self) -> None:
        """Every maximal free run should be reported, lowest first."""
        space = AddressSpace.from_layout(MIXED_LAYOUT)
        assert list(find_holes(space)) == [
            Hole(start=0, length=2),
            Hole(start=5, length=1),
            Hole(start=8, length=4),
            Hole(start=13, length=1),
        ]

    def test_min_size_filters_short_holes(self) -> None:
        """Holes shorter than min_size are skipped."""
        space = AddressSpace.from_layout(MIXED_LAYOUT)
        assert list(find_holes(space, 2)) == [Hole(start=0, length=2), Hole(start=8, length=4)]

    def test_min_size_larger_than_any_hole(self) -> None:
        """No qualifying hole yields an empty sequence, not an error."""
        space = AddressSpace.from_layout(MIXED_LAYOUT)
        assert list(find_holes(space, 5)) == []

    def test_hole_at_end_of_pool(self) -> None:
        """A trailing run of free slots counts as a hole."""
        space = AddressSpace.from_layout("AA...")
        assert list(find_holes(space)) == [Hole(start=2, length=3)]

    def test_zero_min_size_means_one(self) -> None:
        """A hole always has at least one slot."""
        space = AddressSpace.from_layout("A.A")
        assert list(find_holes(space, 0)) == [Hole(start=1, length=1)]

    def test_scan_restarts(self) -> None:
        """Calling find_holes again rescans from address 0."""
        space = AddressSpace.from_layout("..A..")
        first = list(find_holes(space))
        second = list(find_holes(space))
        assert first == second

    def test_holes_are_never_adjacent_or_short(self) -> None:
        """Reported holes are ascending, separated, and at least min_size long."""
        space = AddressSpace.from_layout("...A.B..CC.....D..")
        min_size = 2
        holes = list(find_holes(space, min_size))
        assert all(h.length >= min_size for h in holes)
        for before, after in zip(holes, holes[1:], strict=False):
            assert before.end < after.start
