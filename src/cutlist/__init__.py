"""Cut list optimizer for woodworking projects.

Validates parts against their assigned stock and nests them onto stock
boards with guillotine cuts, producing cut instructions, board layouts and
waste and cost statistics.
"""

from cutlist.domain import (
    CutInstruction,
    CutList,
    CutListSettings,
    CutListStatistics,
    CutPlacement,
    GlueUpSpec,
    GrainDirection,
    IssueSeverity,
    IssueType,
    Part,
    PricingUnit,
    SkippedPart,
    Stock,
    StockBoard,
    StockSummary,
    ValidationIssue,
    validate_parts,
)
from cutlist.infrastructure import generate_cut_list

__version__ = "0.1.0"

__all__ = [
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
    "PricingUnit",
    "SkippedPart",
    "Stock",
    "StockBoard",
    "StockSummary",
    "ValidationIssue",
    "generate_cut_list",
    "validate_parts",
]
