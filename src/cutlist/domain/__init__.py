"""Domain layer - cut list value objects, entities and services."""

from .entities import (
    CutInstruction,
    CutList,
    CutListStatistics,
    CutPlacement,
    SkippedPart,
    StockBoard,
    StockSummary,
)
from .services import (
    CostEstimator,
    PartValidator,
    partition_issues,
    validate_parts,
)
from .value_objects import (
    CutListSettings,
    GlueUpSpec,
    GrainDirection,
    IssueSeverity,
    IssueType,
    Part,
    PricingUnit,
    Stock,
    ValidationIssue,
    board_feet,
)

__all__ = [
    "CostEstimator",
    "CutInstruction",
    "CutList",
    "CutListSettings",
    "CutListStatistics",
    "CutPlacement",
    "GlueUpSpec",
    "GrainDirection",
    "IssueSeverity",
    "IssueType",
    "Part",
    "PartValidator",
    "PricingUnit",
    "SkippedPart",
    "Stock",
    "StockBoard",
    "StockSummary",
    "ValidationIssue",
    "board_feet",
    "partition_issues",
    "validate_parts",
]
