"""Value objects for the cut list domain.

Parts and stocks arrive from the design layer as flat records. Everything
here is frozen so the validator and optimizer can share instances across
worker threads without copying.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class GrainDirection(str, Enum):
    """Direction the grain runs on a part or stock.

    Attributes:
        LENGTH: Grain runs along the length axis.
        WIDTH: Grain runs along the width axis.
        NONE: No grain (sheet goods such as MDF). Only valid for stock.
    """

    LENGTH = "length"
    WIDTH = "width"
    NONE = "none"


class PricingUnit(str, Enum):
    """How a stock material is priced."""

    PER_ITEM = "per_item"
    BOARD_FOOT = "board_foot"


class IssueType(str, Enum):
    """Problems the validator can report for a part."""

    NO_STOCK = "no_stock"
    EXCEEDS_THICKNESS = "exceeds_thickness"
    EXCEEDS_DIMENSIONS = "exceeds_dimensions"
    GRAIN_MISMATCH = "grain_mismatch"


class IssueSeverity(str, Enum):
    """Errors block cutting, warnings are advisory."""

    ERROR = "error"
    WARNING = "warning"


def _require_positive(value: float, message: str) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(message)


def _require_non_negative(value: float, message: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise ValueError(message)


@dataclass(frozen=True)
class GlueUpSpec:
    """Edge-glued panel built from several narrower boards.

    Both fields are optional hints. When absent the strip count is derived
    from the stock width.

    Attributes:
        board_count: Minimum number of boards in the glue-up.
        board_width: Maximum width of a single board in inches.
    """

    board_count: int | None = None
    board_width: float | None = None

    def __post_init__(self) -> None:
        if self.board_count is not None and self.board_count < 1:
            raise ValueError("Glue-up board count must be at least 1")
        if self.board_width is not None:
            _require_positive(self.board_width, "Glue-up board width must be positive")


@dataclass(frozen=True)
class Part:
    """A rectangular part to be cut from stock.

    Attributes:
        id: Stable identifier of the part.
        name: Display name used in messages and instructions.
        length: Finished length in inches.
        width: Finished width in inches.
        thickness: Finished thickness in inches.
        stock_id: Assigned stock, or None when unassigned.
        grain_sensitive: True when the part must keep its grain orientation.
        grain_direction: Which part axis the grain should follow.
        extra_length: Joinery allowance added to the cut length.
        extra_width: Joinery allowance added to the cut width.
        glue_up_panel: Glue-up description when the part is an edge-glued panel.
        ignore_overlap: Carried for the collision system, unused here.
        notes: Free-form fabrication notes.
        color: Display color for diagrams.
    """

    id: str
    name: str
    length: float
    width: float
    thickness: float
    stock_id: str | None = None
    grain_sensitive: bool = False
    grain_direction: GrainDirection = GrainDirection.LENGTH
    extra_length: float = 0.0
    extra_width: float = 0.0
    glue_up_panel: GlueUpSpec | None = None
    ignore_overlap: bool = False
    notes: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        _require_positive(self.length, "Part length must be positive")
        _require_positive(self.width, "Part width must be positive")
        _require_positive(self.thickness, "Part thickness must be positive")
        _require_non_negative(self.extra_length, "Extra length must be non-negative")
        _require_non_negative(self.extra_width, "Extra width must be non-negative")
        if self.grain_direction == GrainDirection.NONE:
            raise ValueError("Part grain direction must be 'length' or 'width'")

    @property
    def cut_length(self) -> float:
        """Length to cut, including joinery allowance."""
        return self.length + self.extra_length

    @property
    def cut_width(self) -> float:
        """Width to cut, including joinery allowance."""
        return self.width + self.extra_width

    @property
    def cut_area(self) -> float:
        """Area of the cut blank in square inches."""
        return self.cut_length * self.cut_width

    @property
    def is_glue_up(self) -> bool:
        return self.glue_up_panel is not None


@dataclass(frozen=True)
class Stock:
    """A purchasable board or sheet that parts are cut from.

    Attributes:
        id: Stable identifier of the stock.
        name: Display name.
        length: Board length in inches.
        width: Board width in inches.
        thickness: Board thickness in inches.
        grain_direction: Grain of the board, NONE for sheet goods.
        pricing_unit: Whether the price is per board or per board foot.
        price_per_unit: Price for one pricing unit.
        color: Display color for diagrams.
    """

    id: str
    name: str
    length: float
    width: float
    thickness: float
    grain_direction: GrainDirection = GrainDirection.LENGTH
    pricing_unit: PricingUnit = PricingUnit.PER_ITEM
    price_per_unit: float = 0.0
    color: str | None = None

    def __post_init__(self) -> None:
        _require_positive(self.length, "Stock length must be positive")
        _require_positive(self.width, "Stock width must be positive")
        _require_positive(self.thickness, "Stock thickness must be positive")
        _require_non_negative(self.price_per_unit, "Stock price must be non-negative")

    @property
    def area(self) -> float:
        """Face area of one board in square inches."""
        return self.length * self.width

    @property
    def board_feet(self) -> float:
        """Board feet in one board: length x width x thickness / 144."""
        return board_feet(self.length, self.width, self.thickness)


@dataclass(frozen=True)
class ValidationIssue:
    """A problem found while checking a part against its stock.

    Attributes:
        type: Category of the problem.
        severity: ERROR blocks cutting, WARNING is advisory.
        part_id: Part the issue belongs to.
        part_name: Part name at the time of validation.
        message: Human-readable description.
        can_bypass: True when the caller may knowingly proceed anyway.
    """

    type: IssueType
    severity: IssueSeverity
    part_id: str
    part_name: str
    message: str
    can_bypass: bool = False

    @property
    def is_blocking(self) -> bool:
        """Errors block generation unless explicitly bypassable."""
        return self.severity == IssueSeverity.ERROR and not self.can_bypass


@dataclass(frozen=True)
class CutListSettings:
    """Project settings that affect cut list generation.

    Attributes:
        kerf_width: Saw blade kerf in inches (default 1/8").
        overage_factor: Purchase safety margin as a fraction (0.1 = 10%).
    """

    kerf_width: float = 0.125
    overage_factor: float = 0.1

    def __post_init__(self) -> None:
        if not math.isfinite(self.kerf_width) or not 0 <= self.kerf_width <= 0.5:
            raise ValueError("Kerf must be between 0 and 0.5 inches")
        if not math.isfinite(self.overage_factor) or not 0 <= self.overage_factor <= 1:
            raise ValueError("Overage factor must be between 0 and 1")


def board_feet(length: float, width: float, thickness: float) -> float:
    """Board feet for the given dimensions in inches."""
    return (length * width * thickness) / 144
