"""Domain services for cut list validation, geometry and costing."""

from .cost_estimator import CostEstimator, recompute_waste_percentage
from .geometry import (
    EPSILON,
    Rect,
    choose_orientation,
    fits_within,
    guillotine_split,
    kerf_extent,
    place_in_rect,
)
from .validation import PartValidator, index_stocks, partition_issues, validate_parts

__all__ = [
    "CostEstimator",
    "EPSILON",
    "PartValidator",
    "Rect",
    "choose_orientation",
    "fits_within",
    "guillotine_split",
    "index_stocks",
    "kerf_extent",
    "partition_issues",
    "place_in_rect",
    "recompute_waste_percentage",
    "validate_parts",
]
