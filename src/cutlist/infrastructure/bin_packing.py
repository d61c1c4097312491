"""Guillotine bin packing of parts onto stock boards.

This module nests parts onto the boards of their assigned stock and
assembles the resulting cut list. Each stock type is packed on its own;
parts are never shared across stock types.

Board state is immutable: placing a piece produces a new PackedBoard
with a regenerated tuple of free rectangles.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Sequence

from cutlist.domain.entities import (
    CutInstruction,
    CutList,
    CutPlacement,
    SkippedPart,
    StockBoard,
)
from cutlist.domain.services import CostEstimator, index_stocks
from cutlist.domain.services.geometry import Rect, choose_orientation, place_in_rect
from cutlist.domain.value_objects import CutListSettings, Part, Stock, ValidationIssue

logger = logging.getLogger(__name__)

# Upper bound on strips for a single glue-up panel
MAX_GLUE_UP_STRIPS = 50


@dataclass(frozen=True)
class PieceToPlace:
    """A single blank to nest: a whole part or one strip of a glue-up.

    Attributes:
        part: Source part.
        order: Position of the source part in the caller's input.
        name: Display name (strips carry a "strip i/n" suffix).
        length: Blank extent along the stock length when unrotated.
        width: Blank extent along the stock width when unrotated.
        can_rotate: Whether the blank may be turned 90 degrees.
        strip_index: 1-based strip number for glue-up strips, else None.
        strip_count: Number of strips in the glue-up, else None.
    """

    part: Part
    order: int
    name: str
    length: float
    width: float
    can_rotate: bool
    strip_index: int | None = None
    strip_count: int | None = None

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Piece dimensions must be positive")

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class PlacedPiece:
    """A piece placed at a position on a board.

    Attributes:
        piece: The piece being placed.
        x: Offset along the stock length in inches.
        y: Offset along the stock width in inches.
        rotated: True if the piece is turned 90 degrees.
    """

    piece: PieceToPlace
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Extent along the stock length as placed."""
        return self.piece.width if self.rotated else self.piece.length

    @property
    def placed_height(self) -> float:
        """Extent along the stock width as placed."""
        return self.piece.length if self.rotated else self.piece.width


@dataclass(frozen=True)
class PackedBoard:
    """State of one board during and after packing.

    Attributes:
        sequence: 1-based board number within its stock type.
        free_rects: Free rectangles still available, in creation order.
        placements: Pieces placed so far.
    """

    sequence: int
    free_rects: tuple[Rect, ...]
    placements: tuple[PlacedPiece, ...] = ()

    @classmethod
    def fresh(cls, stock: Stock, sequence: int) -> "PackedBoard":
        """An empty board of the given stock."""
        return cls(
            sequence=sequence,
            free_rects=(Rect(x=0.0, y=0.0, width=stock.length, height=stock.width),),
        )

    def find_fit(self, piece: PieceToPlace) -> tuple[int, bool] | None:
        """First free rectangle that fits the piece.

        Returns:
            (rectangle index, rotated) or None if nothing fits.
        """
        for index, rect in enumerate(self.free_rects):
            rotated = choose_orientation(rect, piece.length, piece.width, piece.can_rotate)
            if rotated is not None:
                return index, rotated
        return None

    def place(
        self,
        piece: PieceToPlace,
        index: int,
        rotated: bool,
        kerf: float,
    ) -> "PackedBoard":
        """Return a new board with the piece placed in ``free_rects[index]``."""
        rect = self.free_rects[index]
        placement = PlacedPiece(piece=piece, x=rect.x, y=rect.y, rotated=rotated)
        free_rects = place_in_rect(
            self.free_rects,
            index,
            placement.placed_width,
            placement.placed_height,
            kerf,
        )
        return replace(
            self,
            free_rects=free_rects,
            placements=self.placements + (placement,),
        )

    @property
    def used_area(self) -> float:
        return sum(p.placed_width * p.placed_height for p in self.placements)


@dataclass(frozen=True)
class StockPackingResult:
    """Result of packing the pieces of one stock type.

    Attributes:
        stock: The stock that was packed.
        boards: Boards used, in creation order.
        skipped: Parts that could not fit even on an empty board.
    """

    stock: Stock
    boards: tuple[PackedBoard, ...]
    skipped: tuple[SkippedPart, ...]

    @property
    def piece_count(self) -> int:
        return sum(len(board.placements) for board in self.boards)


class GuillotineBinPacker:
    """First-fit decreasing guillotine packing against free rectangles.

    Pieces are sorted by area (largest first, ties by part id) and each
    one goes into the first free rectangle that fits, scanning open boards
    in creation order. A new board is opened only when no open board has
    room. Every placement splits its rectangle with straight edge-to-edge
    cuts, so layouts can be cut on a panel saw or table saw.

    Attributes:
        kerf: Saw blade kerf width in inches.
    """

    def __init__(self, kerf: float = 0.125) -> None:
        """Initialize the packer.

        Args:
            kerf: Saw blade kerf width in inches.
        """
        if kerf < 0:
            raise ValueError("Kerf must be non-negative")
        self.kerf = kerf

    def pack(
        self,
        pieces: Sequence[PieceToPlace],
        stock: Stock,
    ) -> StockPackingResult:
        """Pack pieces onto boards of a single stock.

        Args:
            pieces: Pieces cut from this stock.
            stock: The stock all pieces belong to.

        Returns:
            StockPackingResult with boards and skipped parts.
        """
        placeable, skipped = self._split_unplaceable(pieces, stock)
        boards: list[PackedBoard] = []

        logger.debug(
            "Packing %d pieces onto stock '%s' (%sx%s)",
            len(placeable),
            stock.name,
            stock.length,
            stock.width,
        )

        for piece in self._sort_by_area(placeable):
            placed = False
            for board_pos, board in enumerate(boards):
                fit = board.find_fit(piece)
                if fit is not None:
                    boards[board_pos] = board.place(piece, fit[0], fit[1], self.kerf)
                    placed = True
                    break

            if not placed:
                board = PackedBoard.fresh(stock, sequence=len(boards) + 1)
                fit = board.find_fit(piece)
                if fit is None:
                    # Unplaceable pieces were filtered above
                    raise ValueError(
                        f"Piece '{piece.name}' ({piece.length}x{piece.width}) "
                        f"exceeds board ({stock.length}x{stock.width})"
                    )
                boards.append(board.place(piece, fit[0], fit[1], self.kerf))

        for board in boards:
            logger.debug(
                "Stock '%s' board %d: %d pieces, %.1f sq in used",
                stock.name,
                board.sequence,
                len(board.placements),
                board.used_area,
            )

        return StockPackingResult(
            stock=stock,
            boards=tuple(boards),
            skipped=tuple(skipped),
        )

    def _split_unplaceable(
        self,
        pieces: Sequence[PieceToPlace],
        stock: Stock,
    ) -> tuple[list[PieceToPlace], list[SkippedPart]]:
        """Separate pieces that cannot fit even on an empty board.

        A glue-up panel is skipped as a whole when any of its strips is
        unplaceable.
        """
        empty = PackedBoard.fresh(stock, sequence=1)
        # Keyed by input position so strips of one glue-up share a key
        # while distinct parts with a repeated id do not
        rejected: dict[int, PieceToPlace] = {}

        for piece in pieces:
            if empty.find_fit(piece) is None and piece.order not in rejected:
                rejected[piece.order] = piece

        skipped: list[SkippedPart] = []
        for piece in rejected.values():
            logger.warning(
                "Part '%s' (%s\" x %s\") doesn't fit on stock '%s' (%s\" x %s\")",
                piece.part.name,
                piece.length,
                piece.width,
                stock.name,
                stock.length,
                stock.width,
            )
            skipped.append(
                SkippedPart(
                    part_id=piece.part.id,
                    part_name=piece.part.name,
                    stock_id=stock.id,
                    reason=(
                        f'Does not fit on stock "{stock.name}" '
                        f'({stock.length}" x {stock.width}")'
                    ),
                )
            )

        placeable = [p for p in pieces if p.order not in rejected]
        return placeable, skipped

    def _sort_by_area(self, pieces: list[PieceToPlace]) -> list[PieceToPlace]:
        """Sort pieces by area (largest first), ties by part id then strip."""
        return sorted(
            pieces,
            key=lambda p: (-p.area, p.part.id, p.strip_index or 0),
        )


def expand_part(part: Part, stock: Stock, order: int) -> list[PieceToPlace]:
    """Turn a part into the blanks that are actually nested.

    Regular parts become a single blank. Glue-up panels become equal-width
    strips that add up exactly to the panel width.

    Args:
        part: The part to expand.
        stock: The part's stock.
        order: Input position of the part.

    Returns:
        List of pieces to place.
    """
    if not part.is_glue_up:
        return [
            PieceToPlace(
                part=part,
                order=order,
                name=part.name,
                length=part.cut_length,
                width=part.cut_width,
                can_rotate=not part.grain_sensitive,
            )
        ]

    strip_count = glue_up_strip_count(part, stock)
    strip_width = part.cut_width / strip_count
    return [
        PieceToPlace(
            part=part,
            order=order,
            name=f"{part.name} (strip {i}/{strip_count})",
            length=part.cut_length,
            width=strip_width,
            can_rotate=False,
            strip_index=i,
            strip_count=strip_count,
        )
        for i in range(1, strip_count + 1)
    ]


def glue_up_strip_count(part: Part, stock: Stock) -> int:
    """Number of strips needed for a glue-up panel on the given stock.

    n = ceil(cut_width / max_strip_width), where the maximum strip width is
    the stock width or the declared board width if narrower. A declared
    board count raises n to at least that count.
    """
    glue_up = part.glue_up_panel
    max_strip_width = stock.width
    minimum = 1
    if glue_up is not None:
        if glue_up.board_width is not None:
            max_strip_width = min(max_strip_width, glue_up.board_width)
        if glue_up.board_count is not None:
            minimum = glue_up.board_count

    # Round before ceil so 24 / 8 does not become 4 through float noise
    needed = math.ceil(round(part.cut_width / max_strip_width, 9))
    return min(max(needed, minimum, 1), MAX_GLUE_UP_STRIPS)


class CutListOptimizer:
    """Coordinates packing across stock types and builds the cut list.

    Parts are grouped by their assigned stock and each group is packed
    independently. Parts without a resolvable stock, or thicker than
    their stock, are reported as skipped instead of being nested.

    Attributes:
        settings: Kerf and overage used for this optimizer.
        packer: GuillotineBinPacker performing per-stock packing.
    """

    def __init__(self, settings: CutListSettings | None = None) -> None:
        """Initialize optimizer with settings.

        Args:
            settings: Kerf and overage settings. Defaults to 1/8" kerf
                and 10% overage.
        """
        self.settings = settings or CutListSettings()
        self.packer = GuillotineBinPacker(self.settings.kerf_width)

    def optimize(
        self,
        parts: Sequence[Part],
        stocks: Sequence[Stock],
        project_modified_at: str | None = None,
        bypassed_issues: Sequence[ValidationIssue] = (),
    ) -> CutList:
        """Nest parts onto stock boards and compute statistics.

        Args:
            parts: Parts the caller decided to include.
            stocks: Available stocks.
            project_modified_at: Project revision timestamp; defaults to
                the generation time.
            bypassed_issues: Validation issues the caller overrode.

        Returns:
            A fresh (non-stale) CutList.
        """
        generated_at = datetime.now(timezone.utc).isoformat()
        stock_index = index_stocks(stocks)

        groups, skipped = self._group_by_stock(parts, stock_index)

        logger.info(
            "Optimizing %d parts across %d stock groups",
            len(parts),
            len(groups),
        )

        results: list[StockPackingResult] = []
        for stock_id, group in groups.items():
            stock = stock_index[stock_id]
            pieces = [
                piece
                for order, part in group
                for piece in expand_part(part, stock, order)
            ]
            result = self.packer.pack(pieces, stock)
            logger.debug(
                "Stock '%s': %d parts -> %d boards",
                stock.name,
                len(group),
                len(result.boards),
            )
            results.append(result)
            skipped.extend(result.skipped)

        boards, instructions = self._build_layout(results)
        placed_parts = {instruction.part_id for instruction in instructions}

        statistics = CostEstimator(self.settings.overage_factor).estimate(
            boards, stock_index, total_parts=len(placed_parts)
        )

        logger.info(
            "Cut list: %d parts on %d boards, %d skipped, %.1f%% waste",
            len(placed_parts),
            len(boards),
            len(skipped),
            statistics.waste_percentage,
        )

        return CutList(
            id=str(uuid.uuid4()),
            generated_at=generated_at,
            project_modified_at=project_modified_at or generated_at,
            is_stale=False,
            instructions=tuple(instructions),
            stock_boards=tuple(boards),
            statistics=statistics,
            bypassed_issues=tuple(bypassed_issues),
            skipped_parts=tuple(skipped),
            kerf_width=self.settings.kerf_width,
            overage_factor=self.settings.overage_factor,
        )

    def _group_by_stock(
        self,
        parts: Sequence[Part],
        stock_index: dict[str, Stock],
    ) -> tuple[dict[str, list[tuple[int, Part]]], list[SkippedPart]]:
        """Group parts by stock id, diverting parts that cannot be nested.

        Returns:
            (stock id -> [(input order, part)], skipped parts)
        """
        groups: dict[str, list[tuple[int, Part]]] = {}
        skipped: list[SkippedPart] = []

        for order, part in enumerate(parts):
            stock = stock_index.get(part.stock_id) if part.stock_id else None
            reason: str | None = None
            if part.stock_id is None:
                reason = "No stock assigned"
            elif stock is None:
                reason = "Assigned stock not found"
            elif part.thickness > stock.thickness:
                reason = (
                    f'Thickness ({part.thickness}") exceeds stock ({stock.thickness}")'
                )

            if reason is not None:
                logger.warning("Skipping part '%s': %s", part.name, reason)
                skipped.append(
                    SkippedPart(
                        part_id=part.id,
                        part_name=part.name,
                        stock_id=part.stock_id,
                        reason=reason,
                    )
                )
                continue

            groups.setdefault(stock.id, []).append((order, part))

        return groups, skipped

    def _build_layout(
        self,
        results: Sequence[StockPackingResult],
    ) -> tuple[list[StockBoard], list[CutInstruction]]:
        """Convert packed boards into cut list boards and instructions.

        Boards are numbered globally in stock-group order. Instructions are
        ordered by the caller's part order, strips in strip order.
        """
        boards: list[StockBoard] = []
        keyed_instructions: list[tuple[tuple[int, int], CutInstruction]] = []

        for result in results:
            stock = result.stock
            for packed in result.boards:
                board_index = len(boards)
                boards.append(
                    StockBoard(
                        index=board_index,
                        stock_id=stock.id,
                        stock_name=stock.name,
                        sequence=packed.sequence,
                        stock_length=stock.length,
                        stock_width=stock.width,
                        placements=tuple(
                            self._to_placement(p) for p in packed.placements
                        ),
                    )
                )
                for placed in packed.placements:
                    piece = placed.piece
                    keyed_instructions.append(
                        (
                            (piece.order, piece.strip_index or 0),
                            self._to_instruction(placed, stock, board_index),
                        )
                    )

        keyed_instructions.sort(key=lambda item: item[0])
        return boards, [instruction for _, instruction in keyed_instructions]

    def _to_placement(self, placed: PlacedPiece) -> CutPlacement:
        piece = placed.piece
        return CutPlacement(
            part_id=piece.part.id,
            part_name=piece.name,
            x=placed.x,
            y=placed.y,
            width=placed.placed_width,
            height=placed.placed_height,
            rotated=placed.rotated,
            strip_index=piece.strip_index,
            color=piece.part.color,
        )

    def _to_instruction(
        self,
        placed: PlacedPiece,
        stock: Stock,
        board_index: int,
    ) -> CutInstruction:
        piece = placed.piece
        part = piece.part
        notes = part.notes
        if piece.strip_index == 1:
            glue_note = (
                f"Glue-up panel: {piece.strip_count} strips x "
                f'{piece.width:.2f}" = {part.cut_width}" final width'
            )
            notes = f"{glue_note}. {part.notes}" if part.notes else glue_note
        elif piece.strip_index is not None:
            notes = None

        return CutInstruction(
            part_id=part.id,
            part_name=piece.name,
            cut_length=piece.length,
            cut_width=piece.width,
            thickness=part.thickness,
            stock_id=stock.id,
            stock_name=stock.name,
            board_index=board_index,
            x=placed.x,
            y=placed.y,
            rotated=placed.rotated,
            grain_sensitive=part.grain_sensitive,
            can_rotate=piece.can_rotate,
            is_glue_up=part.is_glue_up,
            strip_index=piece.strip_index,
            strip_count=piece.strip_count,
            notes=notes,
        )


def generate_cut_list(
    parts: Sequence[Part],
    stocks: Sequence[Stock],
    settings: CutListSettings | None = None,
    project_modified_at: str | None = None,
    bypassed_issues: Sequence[ValidationIssue] = (),
) -> CutList:
    """Generate an optimized cut list.

    Args:
        parts: Parts to include (validated or explicitly bypassed).
        stocks: Available stocks.
        settings: Kerf and overage settings.
        project_modified_at: Project revision timestamp.
        bypassed_issues: Validation issues the caller overrode.

    Returns:
        The generated CutList.
    """
    return CutListOptimizer(settings).optimize(
        parts,
        stocks,
        project_modified_at=project_modified_at,
        bypassed_issues=bypassed_issues,
    )
