"""Tests for guillotine bin packing and cut list optimization.

Tests cover:
- PackedBoard immutability and first-fit placement
- Kerf handling between pieces
- Rotation rules for grain-sensitive parts
- Skipped parts (no stock, too thick, too large)
- Glue-up strip expansion
- Conservation of parts, ordering and determinism
"""

from __future__ import annotations

import itertools
from typing import Callable

import pytest

from cutlist.domain import (
    CutList,
    CutListSettings,
    GlueUpSpec,
    IssueSeverity,
    IssueType,
    Part,
    Stock,
    ValidationIssue,
)
from cutlist.domain.services import recompute_waste_percentage
from cutlist.infrastructure.bin_packing import (
    MAX_GLUE_UP_STRIPS,
    CutListOptimizer,
    GuillotineBinPacker,
    PackedBoard,
    PieceToPlace,
    expand_part,
    generate_cut_list,
    glue_up_strip_count,
)


def _piece(part: Part, order: int = 0) -> PieceToPlace:
    return PieceToPlace(
        part=part,
        order=order,
        name=part.name,
        length=part.cut_length,
        width=part.cut_width,
        can_rotate=not part.grain_sensitive,
    )


def _assert_no_overlap(cut_list: CutList) -> None:
    for board in cut_list.stock_boards:
        for p in board.placements:
            assert p.right_edge <= board.stock_length + 1e-9
            assert p.top_edge <= board.stock_width + 1e-9
        for a, b in itertools.combinations(board.placements, 2):
            separated = (
                a.right_edge <= b.x + 1e-9
                or b.right_edge <= a.x + 1e-9
                or a.top_edge <= b.y + 1e-9
                or b.top_edge <= a.y + 1e-9
            )
            assert separated, f"{a.part_name} overlaps {b.part_name}"


# =============================================================================
# Data models
# =============================================================================


class TestPieceToPlace:
    def test_rejects_non_positive_size(self, make_part: Callable[..., Part]) -> None:
        with pytest.raises(ValueError):
            PieceToPlace(
                part=make_part(), order=0, name="x", length=0, width=1, can_rotate=True
            )


class TestPackedBoard:
    """Tests for PackedBoard."""

    def test_fresh_board_has_one_free_rect(self, plywood: Stock) -> None:
        board = PackedBoard.fresh(plywood, sequence=1)
        assert len(board.free_rects) == 1
        assert board.free_rects[0].width == 96
        assert board.free_rects[0].height == 48
        assert board.placements == ()

    def test_place_returns_new_board(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        board = PackedBoard.fresh(plywood, sequence=1)
        piece = _piece(make_part())
        index, rotated = board.find_fit(piece)
        placed = board.place(piece, index, rotated, kerf=0.125)

        assert board.placements == ()
        assert len(placed.placements) == 1
        assert placed.used_area == 288

    def test_find_fit_none_when_too_big(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        board = PackedBoard.fresh(plywood, sequence=1)
        assert board.find_fit(_piece(make_part(length=100, width=50))) is None


class TestGuillotineBinPacker:
    """Tests for the per-stock packer."""

    def test_rejects_negative_kerf(self) -> None:
        with pytest.raises(ValueError):
            GuillotineBinPacker(kerf=-0.1)

    def test_four_small_parts_share_one_board(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        pieces = [_piece(make_part(id=f"p{i}"), i) for i in range(4)]
        result = GuillotineBinPacker().pack(pieces, plywood)

        assert len(result.boards) == 1
        assert result.piece_count == 4
        assert result.skipped == ()

    def test_oversized_piece_is_skipped(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        pieces = [_piece(make_part(id="big", length=100, width=10))]
        result = GuillotineBinPacker().pack(pieces, plywood)

        assert result.boards == ()
        assert [s.part_id for s in result.skipped] == ["big"]
        assert "Does not fit" in result.skipped[0].reason

    def test_largest_piece_placed_first(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        small = _piece(make_part(id="small", length=10, width=10), 0)
        large = _piece(make_part(id="large", length=40, width=40), 1)
        result = GuillotineBinPacker().pack([small, large], plywood)

        first = result.boards[0].placements[0]
        assert first.piece.part.id == "large"
        assert (first.x, first.y) == (0.0, 0.0)

    def test_kerf_prevents_two_half_sheets(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        pieces = [
            _piece(make_part(id="a", length=48, width=48), 0),
            _piece(make_part(id="b", length=48, width=48), 1),
        ]
        assert len(GuillotineBinPacker(kerf=0.125).pack(pieces, plywood).boards) == 2
        assert len(GuillotineBinPacker(kerf=0.0).pack(pieces, plywood).boards) == 1

    def test_kerf_separates_neighbours(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        pieces = [_piece(make_part(id=f"p{i}"), i) for i in range(2)]
        board = GuillotineBinPacker(kerf=0.125).pack(pieces, plywood).boards[0]
        second = board.placements[1]
        assert second.x == pytest.approx(24.125)
        assert second.y == 0.0

    def test_first_fit_fills_earlier_board(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        pieces = [
            _piece(make_part(id="a", length=90, width=40), 0),
            _piece(make_part(id="b", length=90, width=40), 1),
            _piece(make_part(id="c", length=50, width=5), 2),
        ]
        result = GuillotineBinPacker().pack(pieces, plywood)

        assert len(result.boards) == 2
        assert [p.piece.part.id for p in result.boards[0].placements] == ["a", "c"]
        assert [b.sequence for b in result.boards] == [1, 2]


# =============================================================================
# Glue-up expansion
# =============================================================================


class TestGlueUpExpansion:
    """Tests for splitting glue-up panels into strips."""

    def test_regular_part_is_single_piece(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        pieces = expand_part(make_part(width=6, stock_id="oak"), oak_board, 0)
        assert len(pieces) == 1
        assert pieces[0].strip_index is None

    def test_strip_count_from_stock_width(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(width=20, stock_id="oak", glue_up_panel=GlueUpSpec())
        assert glue_up_strip_count(part, oak_board) == 3

    def test_exact_multiple_does_not_round_up(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(width=24, stock_id="oak", glue_up_panel=GlueUpSpec())
        assert glue_up_strip_count(part, oak_board) == 3

    def test_board_count_is_a_minimum(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(width=20, stock_id="oak", glue_up_panel=GlueUpSpec(board_count=5))
        assert glue_up_strip_count(part, oak_board) == 5

    def test_board_width_narrows_strips(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(width=20, stock_id="oak", glue_up_panel=GlueUpSpec(board_width=4))
        assert glue_up_strip_count(part, oak_board) == 5

    def test_strip_count_is_capped(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(width=1000, stock_id="oak", glue_up_panel=GlueUpSpec())
        assert glue_up_strip_count(part, oak_board) == MAX_GLUE_UP_STRIPS

    def test_strips_sum_to_panel_width(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(width=20, stock_id="oak", glue_up_panel=GlueUpSpec())
        pieces = expand_part(part, oak_board, 0)

        assert [p.strip_index for p in pieces] == [1, 2, 3]
        assert sum(p.width for p in pieces) == pytest.approx(20)
        assert all(not p.can_rotate for p in pieces)
        assert pieces[0].name.endswith("(strip 1/3)")


# =============================================================================
# Optimizer
# =============================================================================


class TestCutListOptimizer:
    """Tests for full cut list generation."""

    def test_four_parts_one_board(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        parts = [make_part(id=f"p{i}") for i in range(4)]
        cut_list = generate_cut_list(parts, [plywood])

        assert len(cut_list.stock_boards) == 1
        assert len(cut_list.instructions) == 4
        assert cut_list.statistics.total_parts == 4
        assert cut_list.statistics.total_stock_boards == 1
        assert cut_list.statistics.waste_percentage == pytest.approx(75.0)
        assert not cut_list.is_stale
        assert cut_list.skipped_parts == ()

    def test_oversized_part_skipped(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        cut_list = generate_cut_list([make_part(length=100, width=10)], [plywood])

        assert cut_list.instructions == ()
        assert cut_list.stock_boards == ()
        assert [s.part_id for s in cut_list.skipped_parts] == ["p1"]
        assert cut_list.statistics.total_parts == 0

    def test_too_thick_part_skipped(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        cut_list = generate_cut_list([make_part(thickness=1.5)], [plywood])

        assert cut_list.instructions == ()
        assert "exceeds stock" in cut_list.skipped_parts[0].reason

    @pytest.mark.parametrize(
        ("stock_id", "reason"),
        [(None, "No stock assigned"), ("missing", "Assigned stock not found")],
    )
    def test_unassigned_parts_skipped(
        self,
        plywood: Stock,
        make_part: Callable[..., Part],
        stock_id: str | None,
        reason: str,
    ) -> None:
        cut_list = generate_cut_list([make_part(stock_id=stock_id)], [plywood])
        assert cut_list.skipped_parts[0].reason == reason

    def test_empty_input(self, plywood: Stock) -> None:
        cut_list = generate_cut_list([], [plywood])

        assert cut_list.instructions == ()
        assert cut_list.stock_boards == ()
        assert cut_list.statistics.total_stock_boards == 0
        assert cut_list.statistics.waste_percentage == 0.0

    def test_every_part_placed_or_skipped(
        self, plywood: Stock, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        parts = [
            make_part(id="a", length=30, width=20),
            make_part(id="b", length=120, width=20),
            make_part(id="c", stock_id=None),
            make_part(id="d", length=40, width=6, thickness=1, stock_id="oak"),
            make_part(id="e", thickness=2, stock_id="oak", width=6),
            make_part(
                id="f",
                length=30,
                width=20,
                thickness=1,
                stock_id="oak",
                glue_up_panel=GlueUpSpec(),
            ),
        ]
        cut_list = generate_cut_list(parts, [plywood, oak_board])

        placed = cut_list.placed_part_ids
        skipped = cut_list.skipped_part_ids
        assert placed | skipped == {p.id for p in parts}
        assert placed.isdisjoint(skipped)
        assert placed == {"a", "d", "f"}

    def test_instructions_follow_input_order(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        parts = [
            make_part(id="small", length=5, width=5),
            make_part(id="large", length=60, width=40),
            make_part(id="mid", length=20, width=20),
        ]
        cut_list = generate_cut_list(parts, [plywood])
        assert [i.part_id for i in cut_list.instructions] == ["small", "large", "mid"]

    def test_grain_sensitive_part_not_rotated(self, make_part: Callable[..., Part]) -> None:
        stock = Stock(id="s", name="Sheet", length=30, width=50, thickness=1)
        free = make_part(id="free", length=40, width=10, thickness=1, stock_id="s")
        locked = make_part(
            id="locked",
            length=40,
            width=10,
            thickness=1,
            stock_id="s",
            grain_sensitive=True,
        )
        cut_list = generate_cut_list([free, locked], [stock])

        assert [i.part_id for i in cut_list.instructions] == ["free"]
        assert cut_list.instructions[0].rotated
        assert cut_list.instructions[0].can_rotate
        assert cut_list.skipped_part_ids == {"locked"}

    def test_glue_up_strips_become_instructions(
        self, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        part = make_part(
            id="top",
            name="Table Top",
            length=36,
            width=20,
            thickness=1,
            stock_id="oak",
            glue_up_panel=GlueUpSpec(),
        )
        cut_list = generate_cut_list([part], [oak_board])
        strips = cut_list.instructions

        assert len(strips) == 3
        assert {i.part_id for i in strips} == {"top"}
        assert [i.strip_index for i in strips] == [1, 2, 3]
        assert all(i.strip_count == 3 and i.is_glue_up for i in strips)
        assert all(not i.rotated for i in strips)
        assert sum(i.cut_width for i in strips) == pytest.approx(20)
        assert "Glue-up panel" in strips[0].notes
        assert strips[1].notes is None
        assert cut_list.statistics.total_parts == 1

    @pytest.mark.parametrize(
        ("length", "width"),
        [
            (100, 20),
            # 50 strips of 60" each are still wider than the 8" board
            (36, 3000),
        ],
        ids=["longer_than_stock", "strip_cap_too_wide"],
    )
    def test_unplaceable_glue_up_skipped_whole(
        self,
        oak_board: Stock,
        make_part: Callable[..., Part],
        length: float,
        width: float,
    ) -> None:
        part = make_part(
            id="top",
            length=length,
            width=width,
            thickness=1,
            stock_id="oak",
            glue_up_panel=GlueUpSpec(),
        )
        cut_list = generate_cut_list([part], [oak_board])

        assert cut_list.instructions == ()
        assert cut_list.stock_boards == ()
        assert [s.part_id for s in cut_list.skipped_parts] == ["top"]
        assert "Does not fit" in cut_list.skipped_parts[0].reason

    def test_repeated_part_id_skips_only_unplaceable_part(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        fits = make_part(id="x", name="A", length=10, width=10)
        too_long = make_part(id="x", name="B", length=200, width=10)
        cut_list = generate_cut_list([fits, too_long], [plywood])

        assert [i.part_name for i in cut_list.instructions] == ["A"]
        assert [s.part_name for s in cut_list.skipped_parts] == ["B"]

    def test_boards_indexed_globally_with_per_stock_sequence(
        self, plywood: Stock, oak_board: Stock, make_part: Callable[..., Part]
    ) -> None:
        parts = [
            make_part(id="ply-a", length=90, width=40),
            make_part(id="ply-b", length=90, width=40),
            make_part(id="oak-a", length=90, width=7, thickness=1, stock_id="oak"),
        ]
        cut_list = generate_cut_list(parts, [plywood, oak_board])

        assert [b.index for b in cut_list.stock_boards] == [0, 1, 2]
        assert [(b.stock_id, b.sequence) for b in cut_list.stock_boards] == [
            ("ply", 1),
            ("ply", 2),
            ("oak", 1),
        ]
        by_part = {i.part_id: i.board_index for i in cut_list.instructions}
        assert by_part["oak-a"] == 2

    def test_placements_stay_on_board_without_overlap(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        sizes = [(30, 20), (45, 12), (10, 10), (60, 30), (22, 18), (8, 40), (70, 15)]
        parts = [
            make_part(id=f"p{i}", length=length, width=width)
            for i, (length, width) in enumerate(sizes * 3)
        ]
        cut_list = generate_cut_list(parts, [plywood])

        assert cut_list.skipped_parts == ()
        _assert_no_overlap(cut_list)

    def test_waste_percentage_matches_board_geometry(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        parts = [make_part(id=f"p{i}", length=30 + i, width=15) for i in range(9)]
        cut_list = generate_cut_list(parts, [plywood])

        assert cut_list.statistics.waste_percentage == pytest.approx(
            recompute_waste_percentage(cut_list.stock_boards)
        )
        assert 0 <= cut_list.statistics.waste_percentage <= 100

    def test_deterministic_layout(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        parts = [make_part(id=f"p{i}", length=12 + i, width=8 + i) for i in range(10)]
        first = generate_cut_list(parts, [plywood])
        second = generate_cut_list(parts, [plywood])

        assert first.instructions == second.instructions
        assert first.stock_boards == second.stock_boards
        assert first.id != second.id

    def test_settings_recorded(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        settings = CutListSettings(kerf_width=0.0625, overage_factor=0.2)
        cut_list = CutListOptimizer(settings).optimize([make_part()], [plywood])

        assert cut_list.kerf_width == 0.0625
        assert cut_list.overage_factor == 0.2
        assert cut_list.settings == settings

    def test_bypassed_issues_and_timestamp_recorded(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        issue = ValidationIssue(
            type=IssueType.GRAIN_MISMATCH,
            severity=IssueSeverity.WARNING,
            part_id="p1",
            part_name="Part p1",
            message="Grain direction (width) doesn't match stock (length)",
            can_bypass=True,
        )
        cut_list = generate_cut_list(
            [make_part()],
            [plywood],
            project_modified_at="2026-01-05T10:00:00+00:00",
            bypassed_issues=[issue],
        )

        assert cut_list.bypassed_issues == (issue,)
        assert cut_list.project_modified_at == "2026-01-05T10:00:00+00:00"

    def test_project_timestamp_defaults_to_generation_time(
        self, plywood: Stock, make_part: Callable[..., Part]
    ) -> None:
        cut_list = generate_cut_list([make_part()], [plywood])
        assert cut_list.project_modified_at == cut_list.generated_at
