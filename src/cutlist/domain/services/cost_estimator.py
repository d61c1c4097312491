"""Waste, board count and cost statistics for a packed cut list."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Mapping, Sequence

from ..entities import CutListStatistics, StockSummary
from ..value_objects import PricingUnit

if TYPE_CHECKING:
    from ..entities import StockBoard
    from ..value_objects import Stock

__all__ = ["CostEstimator", "recompute_waste_percentage"]


class CostEstimator:
    """Builds cut list statistics from packed boards.

    Overage inflates the number of boards to buy (and therefore cost and
    board feet), never the packed geometry.
    """

    def __init__(self, overage_factor: float = 0.1) -> None:
        """Initialize with overage factor (default 10%)."""
        self.overage_factor = overage_factor

    def estimate(
        self,
        boards: Sequence[StockBoard],
        stock_index: Mapping[str, Stock],
        total_parts: int,
    ) -> CutListStatistics:
        """Summarize boards per stock type and across the whole cut list."""
        if not boards:
            return CutListStatistics.empty()

        boards_by_stock: dict[str, list[StockBoard]] = {}
        for board in boards:
            boards_by_stock.setdefault(board.stock_id, []).append(board)

        summaries = [
            self.summarize_stock(stock_index[stock_id], stock_boards)
            for stock_id, stock_boards in boards_by_stock.items()
        ]

        total_area = sum(board.area for board in boards)
        total_waste = sum(s.waste_square_inches for s in summaries)

        return CutListStatistics(
            total_parts=total_parts,
            total_stock_boards=len(boards),
            total_board_feet=sum(s.board_feet for s in summaries),
            total_waste_square_inches=total_waste,
            waste_percentage=_percentage(total_waste, total_area),
            estimated_cost=sum(s.cost for s in summaries),
            total_waste_cost=sum(s.waste_cost for s in summaries),
            by_stock=tuple(summaries),
        )

    def summarize_stock(
        self,
        stock: Stock,
        boards: Sequence[StockBoard],
    ) -> StockSummary:
        """Shopping-list summary for the boards of one stock type."""
        actual_boards = len(boards)
        boards_needed = self.boards_to_buy(actual_boards)
        board_feet = stock.board_feet * boards_needed

        if stock.pricing_unit == PricingUnit.BOARD_FOOT:
            cost = board_feet * stock.price_per_unit
        else:
            cost = boards_needed * stock.price_per_unit

        waste = sum(board.waste_area for board in boards)
        average_utilization = (
            sum(board.utilization_percent for board in boards) / actual_boards
            if actual_boards
            else 0.0
        )

        return StockSummary(
            stock_id=stock.id,
            stock_name=stock.name,
            stock_length=stock.length,
            stock_width=stock.width,
            stock_thickness=stock.thickness,
            pricing_unit=stock.pricing_unit,
            price_per_unit=stock.price_per_unit,
            actual_boards_used=actual_boards,
            boards_needed=boards_needed,
            board_feet=board_feet,
            linear_feet=(stock.length / 12) * boards_needed,
            cost=cost,
            waste_square_inches=waste,
            waste_cost=self.waste_cost(stock, waste, actual_boards),
            average_utilization=average_utilization,
        )

    def boards_to_buy(self, boards_used: int) -> int:
        """Boards to purchase once the overage margin is added."""
        # Round before ceil so 10 * 1.1 does not become 12
        return math.ceil(round(boards_used * (1 + self.overage_factor), 9))

    def waste_cost(self, stock: Stock, waste_area: float, boards_used: int) -> float:
        """Cost of the material that ends up as waste."""
        if boards_used == 0:
            return 0.0
        if stock.pricing_unit == PricingUnit.BOARD_FOOT:
            waste_board_feet = (waste_area * stock.thickness) / 144
            return waste_board_feet * stock.price_per_unit
        waste_ratio = waste_area / (stock.area * boards_used)
        return waste_ratio * boards_used * stock.price_per_unit


def recompute_waste_percentage(boards: Sequence[StockBoard]) -> float:
    """Waste percentage derived directly from board geometry."""
    total_area = sum(board.area for board in boards)
    total_waste = sum(board.area - board.used_area for board in boards)
    return _percentage(total_waste, total_area)


def _percentage(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return min(max(part / whole * 100, 0.0), 100.0)
