"""Infrastructure layer - packing engine and output formatters."""

from .bin_packing import (
    CutListOptimizer,
    GuillotineBinPacker,
    PackedBoard,
    PieceToPlace,
    PlacedPiece,
    StockPackingResult,
    expand_part,
    generate_cut_list,
    glue_up_strip_count,
)
from .formatters import CutListFormatter, JsonExporter, ValidationReportFormatter

__all__ = [
    # Bin packing
    "CutListOptimizer",
    "GuillotineBinPacker",
    "PackedBoard",
    "PieceToPlace",
    "PlacedPiece",
    "StockPackingResult",
    "expand_part",
    "generate_cut_list",
    "glue_up_strip_count",
    # Formatters
    "CutListFormatter",
    "JsonExporter",
    "ValidationReportFormatter",
]
