"""Stock constraint validation for parts before cut list generation.

Each part is checked against its assigned stock for:
- a stock assignment that resolves to a known stock
- thickness not exceeding the stock thickness
- cut dimensions fitting the stock, rotated only when grain allows
- grain direction matching the stock grain (advisory)

Problems are returned as ValidationIssue records, never raised.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..value_objects import (
    GrainDirection,
    IssueSeverity,
    IssueType,
    Part,
    Stock,
    ValidationIssue,
)
from .geometry import EPSILON, fits_within

logger = logging.getLogger(__name__)

__all__ = [
    "PartValidator",
    "index_stocks",
    "partition_issues",
    "validate_parts",
]


def index_stocks(stocks: Iterable[Stock]) -> dict[str, Stock]:
    """Build an id -> stock lookup. Later duplicates win."""
    return {stock.id: stock for stock in stocks}


class PartValidator:
    """Checks parts against the geometric and grain limits of their stock.

    Errors (no_stock, exceeds_thickness, exceeds_dimensions) describe cuts
    that cannot be made. Grain mismatches are warnings the user may accept.
    """

    @property
    def name(self) -> str:
        """Return the validator name."""
        return "stock_constraints"

    def validate(
        self,
        parts: Sequence[Part],
        stocks: Sequence[Stock],
    ) -> list[ValidationIssue]:
        """Validate every part against its assigned stock.

        Args:
            parts: Parts to check.
            stocks: Available stocks.

        Returns:
            Issues in part order, rule order within a part.
        """
        stock_index = index_stocks(stocks)
        issues: list[ValidationIssue] = []

        for part in parts:
            issues.extend(self.validate_part(part, stock_index))

        logger.debug(
            "Validated %d parts against %d stocks: %d issues",
            len(parts),
            len(stock_index),
            len(issues),
        )
        return issues

    def validate_part(
        self,
        part: Part,
        stock_index: dict[str, Stock],
    ) -> list[ValidationIssue]:
        """Validate a single part using a prebuilt stock index."""
        if part.stock_id is None:
            return [self._issue(part, IssueType.NO_STOCK, "No stock assigned")]

        stock = stock_index.get(part.stock_id)
        if stock is None:
            return [
                self._issue(
                    part,
                    IssueType.NO_STOCK,
                    f"{part.name}: assigned stock not found",
                )
            ]

        issues: list[ValidationIssue] = []

        if part.thickness > stock.thickness:
            issues.append(
                self._issue(
                    part,
                    IssueType.EXCEEDS_THICKNESS,
                    f'Thickness ({part.thickness}") exceeds stock ({stock.thickness}")',
                )
            )

        if not self._fits_stock(part, stock):
            issues.append(
                self._issue(
                    part,
                    IssueType.EXCEEDS_DIMENSIONS,
                    f'Dimensions ({part.cut_length}" x {part.cut_width}") exceed '
                    f'stock ({stock.length}" x {stock.width}")',
                )
            )

        if (
            part.grain_sensitive
            and stock.grain_direction != GrainDirection.NONE
            and part.grain_direction != stock.grain_direction
        ):
            issues.append(
                ValidationIssue(
                    type=IssueType.GRAIN_MISMATCH,
                    severity=IssueSeverity.WARNING,
                    part_id=part.id,
                    part_name=part.name,
                    message=(
                        f"Grain direction ({part.grain_direction.value}) doesn't "
                        f"match stock ({stock.grain_direction.value})"
                    ),
                    can_bypass=True,
                )
            )

        return issues

    def _fits_stock(self, part: Part, stock: Stock) -> bool:
        """Check the planar dimensions of a part against its stock.

        Glue-up panels are assembled edge to edge, so only their length is
        limited by the stock. Other parts may use the rotated orientation
        unless they are grain sensitive.
        """
        if part.is_glue_up:
            return part.cut_length <= stock.length + EPSILON

        if fits_within(part.cut_length, part.cut_width, stock.length, stock.width):
            return True
        if part.grain_sensitive:
            return False
        return fits_within(part.cut_width, part.cut_length, stock.length, stock.width)

    def _issue(self, part: Part, issue_type: IssueType, message: str) -> ValidationIssue:
        return ValidationIssue(
            type=issue_type,
            severity=IssueSeverity.ERROR,
            part_id=part.id,
            part_name=part.name,
            message=message,
        )


def validate_parts(
    parts: Sequence[Part],
    stocks: Sequence[Stock],
) -> list[ValidationIssue]:
    """Validate parts for cut list generation.

    Args:
        parts: Parts with resolved stock assignments.
        stocks: Available stocks.

    Returns:
        List of validation issues, empty when every part can be cut.
    """
    return PartValidator().validate(parts, stocks)


def partition_issues(
    issues: Iterable[ValidationIssue],
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Split issues into (blocking, bypassable).

    Blocking issues are errors without the can_bypass flag.
    """
    blocking: list[ValidationIssue] = []
    bypassable: list[ValidationIssue] = []
    for issue in issues:
        if issue.is_blocking:
            blocking.append(issue)
        else:
            bypassable.append(issue)
    return blocking, bypassable
