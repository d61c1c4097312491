"""Output formatters and exporters for cut lists and validation results."""

from __future__ import annotations

import json
from typing import Any, Sequence

from cutlist.domain import (
    CutInstruction,
    CutList,
    CutListStatistics,
    IssueSeverity,
    SkippedPart,
    StockBoard,
    StockSummary,
    ValidationIssue,
)


class CutListFormatter:
    """Formats a cut list as fixed-width text tables."""

    def format(self, cut_list: CutList) -> str:
        """Format instructions, boards, skipped parts and statistics."""
        if not cut_list.instructions and not cut_list.skipped_parts:
            return "No parts in cut list."

        sections = [self._format_instructions(cut_list.instructions)]
        if cut_list.stock_boards:
            sections.append(self._format_boards(cut_list.stock_boards))
        if cut_list.skipped_parts:
            sections.append(self._format_skipped(cut_list.skipped_parts))
        sections.append(self.format_statistics(cut_list.statistics))
        if cut_list.is_stale:
            sections.append("NOTE: This cut list is stale. Regenerate to reflect changes.")
        return "\n\n".join(sections)

    def _format_instructions(self, instructions: Sequence[CutInstruction]) -> str:
        lines = [
            "CUT LIST",
            "=" * 90,
            f"{'Part':<28} {'Length':<9} {'Width':<9} {'Thick':<7} "
            f"{'Stock':<18} {'Board':<6} {'Rot':<4}",
            "-" * 90,
        ]
        for instruction in instructions:
            lines.append(
                f"{instruction.part_name:<28.28} {instruction.cut_length:<9.3f} "
                f"{instruction.cut_width:<9.3f} {instruction.thickness:<7.3f} "
                f"{instruction.stock_name:<18.18} {instruction.board_index + 1:<6} "
                f"{'yes' if instruction.rotated else 'no':<4}"
            )
            if instruction.notes:
                lines.append(f"    {instruction.notes}")
        return "\n".join(lines)

    def _format_boards(self, boards: Sequence[StockBoard]) -> str:
        lines = [
            "STOCK BOARDS",
            "=" * 70,
            f"{'#':<4} {'Stock':<20} {'Size':<16} {'Parts':<6} {'Waste (sq in)':<14} {'Used'}",
            "-" * 70,
        ]
        for board in boards:
            size = f"{board.stock_length:g} x {board.stock_width:g}"
            lines.append(
                f"{board.index + 1:<4} {board.stock_name:<20.20} {size:<16} "
                f"{len(board.placements):<6} {board.waste_area:<14.1f} "
                f"{board.utilization_percent:.1f}%"
            )
        return "\n".join(lines)

    def _format_skipped(self, skipped: Sequence[SkippedPart]) -> str:
        lines = ["SKIPPED PARTS", "-" * 70]
        for part in skipped:
            lines.append(f"  {part.part_name}: {part.reason}")
        return "\n".join(lines)

    def format_statistics(self, statistics: CutListStatistics) -> str:
        """Format totals and the per-stock shopping list."""
        lines = [
            "SUMMARY",
            "=" * 70,
            f"  Parts placed:      {statistics.total_parts}",
            f"  Boards used:       {statistics.total_stock_boards}",
            f"  Board feet:        {statistics.total_board_feet:.2f}",
            f"  Waste:             {statistics.total_waste_square_inches:.1f} sq in "
            f"({statistics.waste_percentage:.1f}%)",
            f"  Estimated cost:    ${statistics.estimated_cost:.2f}",
            f"  Waste cost:        ${statistics.total_waste_cost:.2f}",
        ]
        if statistics.by_stock:
            lines.append("")
            lines.append("SHOPPING LIST")
            lines.append("-" * 70)
            for summary in statistics.by_stock:
                lines.append(self._format_summary(summary))
        return "\n".join(lines)

    def _format_summary(self, summary: StockSummary) -> str:
        return (
            f"  {summary.stock_name}: buy {summary.boards_needed} "
            f"({summary.actual_boards_used} used, "
            f"{summary.average_utilization:.0f}% avg utilization) "
            f"- ${summary.cost:.2f}"
        )


class ValidationReportFormatter:
    """Formats validation issues grouped by severity."""

    def format(self, issues: Sequence[ValidationIssue]) -> str:
        if not issues:
            return "All parts can be cut from their assigned stock."

        lines: list[str] = []
        errors = [i for i in issues if i.severity == IssueSeverity.ERROR]
        warnings = [i for i in issues if i.severity == IssueSeverity.WARNING]

        if errors:
            lines.append("Errors:")
            for issue in errors:
                lines.append(f"  {issue.part_name} [{issue.type.value}]: {issue.message}")
        if warnings:
            if lines:
                lines.append("")
            lines.append("Warnings:")
            for issue in warnings:
                lines.append(f"  {issue.part_name} [{issue.type.value}]: {issue.message}")
        return "\n".join(lines)


class JsonExporter:
    """Exports cut lists and validation issues as JSON."""

    def export(self, cut_list: CutList) -> str:
        """Export a cut list as a JSON string."""
        return json.dumps(self.cut_list_to_dict(cut_list), indent=2)

    def cut_list_to_dict(self, cut_list: CutList) -> dict[str, Any]:
        """Convert a cut list into JSON-compatible primitives."""
        return {
            "id": cut_list.id,
            "generated_at": cut_list.generated_at,
            "project_modified_at": cut_list.project_modified_at,
            "is_stale": cut_list.is_stale,
            "instructions": [self._instruction(i) for i in cut_list.instructions],
            "stock_boards": [self._board(b) for b in cut_list.stock_boards],
            "statistics": self._statistics(cut_list.statistics),
            "bypassed_issues": [self.issue_to_dict(i) for i in cut_list.bypassed_issues],
            "skipped_parts": [
                {
                    "part_id": s.part_id,
                    "part_name": s.part_name,
                    "stock_id": s.stock_id,
                    "reason": s.reason,
                }
                for s in cut_list.skipped_parts
            ],
            "kerf_width": cut_list.kerf_width,
            "overage_factor": cut_list.overage_factor,
        }

    def issue_to_dict(self, issue: ValidationIssue) -> dict[str, Any]:
        return {
            "type": issue.type.value,
            "severity": issue.severity.value,
            "part_id": issue.part_id,
            "part_name": issue.part_name,
            "message": issue.message,
            "can_bypass": issue.can_bypass,
        }

    def _instruction(self, instruction: CutInstruction) -> dict[str, Any]:
        result: dict[str, Any] = {
            "part_id": instruction.part_id,
            "part_name": instruction.part_name,
            "cut_length": instruction.cut_length,
            "cut_width": instruction.cut_width,
            "thickness": instruction.thickness,
            "stock_id": instruction.stock_id,
            "stock_name": instruction.stock_name,
            "board_index": instruction.board_index,
            "x": instruction.x,
            "y": instruction.y,
            "rotated": instruction.rotated,
            "grain_sensitive": instruction.grain_sensitive,
            "can_rotate": instruction.can_rotate,
            "is_glue_up": instruction.is_glue_up,
        }
        if instruction.strip_index is not None:
            result["strip_index"] = instruction.strip_index
            result["strip_count"] = instruction.strip_count
        if instruction.notes:
            result["notes"] = instruction.notes
        return result

    def _board(self, board: StockBoard) -> dict[str, Any]:
        return {
            "index": board.index,
            "stock_id": board.stock_id,
            "stock_name": board.stock_name,
            "sequence": board.sequence,
            "stock_length": board.stock_length,
            "stock_width": board.stock_width,
            "part_ids": list(board.part_ids),
            "placements": [
                {
                    "part_id": p.part_id,
                    "part_name": p.part_name,
                    "x": p.x,
                    "y": p.y,
                    "width": p.width,
                    "height": p.height,
                    "rotated": p.rotated,
                    "strip_index": p.strip_index,
                    "color": p.color,
                }
                for p in board.placements
            ],
            "used_area": board.used_area,
            "waste_area": board.waste_area,
            "utilization_percent": board.utilization_percent,
        }

    def _statistics(self, statistics: CutListStatistics) -> dict[str, Any]:
        return {
            "total_parts": statistics.total_parts,
            "total_stock_boards": statistics.total_stock_boards,
            "total_board_feet": statistics.total_board_feet,
            "total_waste_square_inches": statistics.total_waste_square_inches,
            "waste_percentage": statistics.waste_percentage,
            "estimated_cost": statistics.estimated_cost,
            "total_waste_cost": statistics.total_waste_cost,
            "by_stock": [
                {
                    "stock_id": s.stock_id,
                    "stock_name": s.stock_name,
                    "stock_length": s.stock_length,
                    "stock_width": s.stock_width,
                    "stock_thickness": s.stock_thickness,
                    "pricing_unit": s.pricing_unit.value,
                    "price_per_unit": s.price_per_unit,
                    "actual_boards_used": s.actual_boards_used,
                    "boards_needed": s.boards_needed,
                    "board_feet": s.board_feet,
                    "linear_feet": s.linear_feet,
                    "cost": s.cost,
                    "waste_square_inches": s.waste_square_inches,
                    "waste_cost": s.waste_cost,
                    "average_utilization": s.average_utilization,
                }
                for s in statistics.by_stock
            ],
        }
