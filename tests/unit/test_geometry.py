"""Tests for rectangle, kerf and guillotine split geometry."""

from __future__ import annotations

import pytest

from cutlist.domain.services.geometry import (
    Rect,
    choose_orientation,
    fits_within,
    guillotine_split,
    kerf_extent,
    place_in_rect,
)


class TestRect:
    """Tests for Rect."""

    def test_edges_and_area(self) -> None:
        rect = Rect(x=2, y=3, width=10, height=4)
        assert rect.right_edge == 12
        assert rect.top_edge == 7
        assert rect.area == 40

    def test_rejects_zero_size(self) -> None:
        with pytest.raises(ValueError):
            Rect(x=0, y=0, width=0, height=4)

    def test_fits_with_tolerance(self) -> None:
        rect = Rect(x=0, y=0, width=10, height=4)
        assert rect.fits(10 + 1e-12, 4)
        assert not rect.fits(10.01, 4)


class TestFitsWithin:
    def test_exact_fit(self) -> None:
        assert fits_within(96, 48, 96, 48)

    def test_too_long(self) -> None:
        assert not fits_within(97, 10, 96, 48)


class TestChooseOrientation:
    """Tests for orientation selection."""

    def test_prefers_unrotated(self) -> None:
        rect = Rect(x=0, y=0, width=50, height=50)
        assert choose_orientation(rect, 20, 10, can_rotate=True) is False

    def test_rotates_when_needed(self) -> None:
        rect = Rect(x=0, y=0, width=10, height=30)
        assert choose_orientation(rect, 20, 10, can_rotate=True) is True

    def test_no_rotation_when_locked(self) -> None:
        rect = Rect(x=0, y=0, width=10, height=30)
        assert choose_orientation(rect, 20, 10, can_rotate=False) is None


class TestKerfExtent:
    """Tests for kerf accounting along one axis."""

    def test_adds_kerf(self) -> None:
        assert kerf_extent(24, 96, 0.125) == 24.125

    def test_full_span_needs_no_cut(self) -> None:
        assert kerf_extent(48, 48, 0.125) == 48

    def test_kerf_capped_at_available(self) -> None:
        assert kerf_extent(47.95, 48, 0.125) == 48


class TestGuillotineSplit:
    """Tests for guillotine remainders."""

    def test_two_remainders(self) -> None:
        rect = Rect(x=0, y=0, width=96, height=48)
        right, top = guillotine_split(rect, 24.125, 12.125)
        assert right == Rect(x=24.125, y=0, width=96 - 24.125, height=48)
        assert top == Rect(x=0, y=12.125, width=24.125, height=48 - 12.125)

    def test_full_width_leaves_only_top(self) -> None:
        rect = Rect(x=0, y=0, width=96, height=48)
        remainders = guillotine_split(rect, 96, 10)
        assert remainders == (Rect(x=0, y=10, width=96, height=38),)

    def test_exact_fill_leaves_nothing(self) -> None:
        rect = Rect(x=0, y=0, width=10, height=10)
        assert guillotine_split(rect, 10, 10) == ()


class TestPlaceInRect:
    def test_replaces_used_rect_with_remainders(self) -> None:
        free = (Rect(0, 0, 10, 10), Rect(20, 0, 96, 48))
        result = place_in_rect(free, 1, 24, 12, 0.125)
        assert result[0] == Rect(0, 0, 10, 10)
        assert len(result) == 3

    def test_input_is_not_mutated(self) -> None:
        free = (Rect(0, 0, 96, 48),)
        place_in_rect(free, 0, 24, 12, 0.125)
        assert free == (Rect(0, 0, 96, 48),)

    def test_remainders_do_not_overlap(self) -> None:
        free = (Rect(0, 0, 96, 48),)
        right, top = place_in_rect(free, 0, 30, 20, 0.125)
        assert top.right_edge <= right.x
