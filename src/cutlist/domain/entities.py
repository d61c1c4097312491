"""Cut list entities produced by the nesting optimizer."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .value_objects import CutListSettings, PricingUnit, ValidationIssue


@dataclass(frozen=True)
class CutPlacement:
    """A part (or glue-up strip) positioned on a stock board.

    Coordinates are measured from the board origin, x along the stock
    length and y along the stock width.

    Attributes:
        part_id: Source part id.
        part_name: Display name (strips carry a "strip i/n" suffix).
        x: Offset along the stock length in inches.
        y: Offset along the stock width in inches.
        width: Extent along the stock length as placed.
        height: Extent along the stock width as placed.
        rotated: True if turned 90 degrees from the part's own orientation.
        strip_index: 1-based strip number for glue-up strips, else None.
        color: Display color.
    """

    part_id: str
    part_name: str
    x: float
    y: float
    width: float
    height: float
    rotated: bool = False
    strip_index: int | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def top_edge(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class StockBoard:
    """One physical board of a stock type and the parts cut from it.

    Attributes:
        index: Zero-based position of this board in the cut list.
        stock_id: Stock the board is cut from.
        stock_name: Stock display name.
        sequence: 1-based board number within its stock type.
        stock_length: Board length in inches.
        stock_width: Board width in inches.
        placements: Parts placed on the board.
    """

    index: int
    stock_id: str
    stock_name: str
    sequence: int
    stock_length: float
    stock_width: float
    placements: tuple[CutPlacement, ...]

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Board index must be non-negative")

    @property
    def area(self) -> float:
        """Board face area in square inches."""
        return self.stock_length * self.stock_width

    @property
    def used_area(self) -> float:
        """Area covered by placed parts in square inches."""
        return sum(p.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        """Board area not covered by parts, kerf included."""
        return self.area - self.used_area

    @property
    def utilization_percent(self) -> float:
        if self.area == 0:
            return 0.0
        return self.used_area / self.area * 100

    @property
    def part_ids(self) -> tuple[str, ...]:
        return tuple(p.part_id for p in self.placements)


@dataclass(frozen=True)
class CutInstruction:
    """What to cut, from which board, and where.

    One instruction is produced per placed part, or per strip for a
    glue-up panel.
    """

    part_id: str
    part_name: str
    cut_length: float
    cut_width: float
    thickness: float
    stock_id: str
    stock_name: str
    board_index: int
    x: float
    y: float
    rotated: bool
    grain_sensitive: bool
    can_rotate: bool
    is_glue_up: bool = False
    strip_index: int | None = None
    strip_count: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class SkippedPart:
    """A part left out of the layout.

    Attributes:
        part_id: Part that was not placed.
        part_name: Part display name.
        stock_id: Assigned stock id, if any.
        reason: Why the part could not be placed.
    """

    part_id: str
    part_name: str
    stock_id: str | None
    reason: str


@dataclass(frozen=True)
class StockSummary:
    """Shopping-list summary for one stock type."""

    stock_id: str
    stock_name: str
    stock_length: float
    stock_width: float
    stock_thickness: float
    pricing_unit: PricingUnit
    price_per_unit: float
    actual_boards_used: int
    boards_needed: int
    board_feet: float
    linear_feet: float
    cost: float
    waste_square_inches: float
    waste_cost: float
    average_utilization: float


@dataclass(frozen=True)
class CutListStatistics:
    """Totals across every stock type in a cut list."""

    total_parts: int
    total_stock_boards: int
    total_board_feet: float
    total_waste_square_inches: float
    waste_percentage: float
    estimated_cost: float
    total_waste_cost: float
    by_stock: tuple[StockSummary, ...]

    def __post_init__(self) -> None:
        if self.waste_percentage < 0 or self.waste_percentage > 100:
            raise ValueError("Waste percentage must be between 0 and 100")

    @classmethod
    def empty(cls) -> "CutListStatistics":
        return cls(
            total_parts=0,
            total_stock_boards=0,
            total_board_feet=0.0,
            total_waste_square_inches=0.0,
            waste_percentage=0.0,
            estimated_cost=0.0,
            total_waste_cost=0.0,
            by_stock=(),
        )


@dataclass(frozen=True)
class CutList:
    """A generated cut list and the settings it was built with.

    Attributes:
        id: Unique id of this generation run.
        generated_at: ISO-8601 timestamp of generation.
        project_modified_at: Project revision the list was generated from.
        is_stale: True once parts or stocks changed after generation.
        instructions: Cut instructions, one per placed part or strip.
        stock_boards: Boards used, in creation order.
        statistics: Waste, board count and cost totals.
        bypassed_issues: Validation issues the caller chose to override.
        skipped_parts: Parts that could not be placed.
        kerf_width: Kerf used for packing.
        overage_factor: Overage used for board counts and cost.
    """

    id: str
    generated_at: str
    project_modified_at: str
    is_stale: bool
    instructions: tuple[CutInstruction, ...]
    stock_boards: tuple[StockBoard, ...]
    statistics: CutListStatistics
    bypassed_issues: tuple[ValidationIssue, ...]
    skipped_parts: tuple[SkippedPart, ...]
    kerf_width: float
    overage_factor: float

    @property
    def settings(self) -> CutListSettings:
        return CutListSettings(
            kerf_width=self.kerf_width, overage_factor=self.overage_factor
        )

    @property
    def placed_part_ids(self) -> frozenset[str]:
        return frozenset(i.part_id for i in self.instructions)

    @property
    def skipped_part_ids(self) -> frozenset[str]:
        return frozenset(s.part_id for s in self.skipped_parts)

    def mark_stale(self) -> "CutList":
        """Return this cut list flagged as out of date with its project."""
        if self.is_stale:
            return self
        return replace(self, is_stale=True)

    def needs_regeneration(
        self,
        project_modified_at: str,
        settings: CutListSettings | None = None,
    ) -> bool:
        """Check whether the layout no longer reflects the project.

        Args:
            project_modified_at: Current project revision timestamp.
            settings: Current project settings, if they should be compared.

        Returns:
            True if stale, built from another revision, or built with
            different kerf/overage settings.
        """
        if self.is_stale or project_modified_at != self.project_modified_at:
            return True
        return settings is not None and settings != self.settings
