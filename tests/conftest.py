"""Pytest configuration and shared fixtures for cut list tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from cutlist.domain import GrainDirection, Part, PricingUnit, Stock


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that exercise the CLI or REST API end to end"
    )


# =============================================================================
# Shared domain fixtures
# =============================================================================


@pytest.fixture
def plywood() -> Stock:
    """3/4\" plywood sheet, 96\" x 48\", no grain constraint."""
    return Stock(
        id="ply",
        name="3/4 Plywood",
        length=96.0,
        width=48.0,
        thickness=0.75,
        grain_direction=GrainDirection.NONE,
        pricing_unit=PricingUnit.PER_ITEM,
        price_per_unit=60.0,
    )


@pytest.fixture
def oak_board() -> Stock:
    """4/4 oak board, 96\" x 8\", priced by the board foot."""
    return Stock(
        id="oak",
        name="4/4 Oak",
        length=96.0,
        width=8.0,
        thickness=1.0,
        grain_direction=GrainDirection.LENGTH,
        pricing_unit=PricingUnit.BOARD_FOOT,
        price_per_unit=9.0,
    )


@pytest.fixture
def make_part() -> Callable[..., Part]:
    """Factory for parts with sensible defaults."""

    def _make(
        id: str = "p1",
        length: float = 24.0,
        width: float = 12.0,
        thickness: float = 0.75,
        stock_id: str | None = "ply",
        **kwargs: Any,
    ) -> Part:
        kwargs.setdefault("name", f"Part {id}")
        return Part(
            id=id,
            length=length,
            width=width,
            thickness=thickness,
            stock_id=stock_id,
            **kwargs,
        )

    return _make


# =============================================================================
# Project file fixtures
# =============================================================================


@pytest.fixture
def project_data() -> dict[str, Any]:
    """A small valid project: one plywood stock and four 24x12 parts."""
    return {
        "version": "1.0",
        "name": "Bookcase",
        "modified_at": "2026-01-05T10:00:00+00:00",
        "settings": {"kerf_width": 0.125, "overage_factor": 0.1},
        "stocks": [
            {
                "id": "ply",
                "name": "3/4 Plywood",
                "length": 96,
                "width": 48,
                "thickness": 0.75,
                "grain_direction": "none",
                "pricing_unit": "per_item",
                "price_per_unit": 60,
            }
        ],
        "parts": [
            {
                "id": f"shelf-{i}",
                "name": f"Shelf {i}",
                "length": 24,
                "width": 12,
                "thickness": 0.75,
                "stock_id": "ply",
            }
            for i in range(1, 5)
        ],
    }


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a project dict to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "project.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
