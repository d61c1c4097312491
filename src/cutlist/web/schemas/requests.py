"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ProjectValidateRequest(BaseModel):
    """Request for validating a project's parts against their stock."""

    project: dict[str, Any] = Field(..., description="Project JSON (stocks, parts, settings)")


class GenerateCutListRequest(BaseModel):
    """Request for generating a cut list from a project."""

    project: dict[str, Any] = Field(..., description="Project JSON (stocks, parts, settings)")
    kerf_width: float | None = Field(
        default=None, ge=0, le=0.5, description="Kerf override in inches"
    )
    overage_factor: float | None = Field(
        default=None, ge=0, le=1.0, description="Overage override as a fraction"
    )
    force: bool = Field(
        default=False,
        description="Generate even when some parts cannot be cut; they are skipped",
    )
