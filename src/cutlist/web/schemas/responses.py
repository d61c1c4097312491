"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ValidationIssueSchema(BaseModel):
    """A single validation issue for a part."""

    type: str = Field(..., description="Issue type, e.g. exceeds_thickness")
    severity: str = Field(..., description="error or warning")
    part_id: str = Field(..., description="Affected part id")
    part_name: str = Field(..., description="Affected part name")
    message: str = Field(..., description="Human-readable description")
    can_bypass: bool = Field(default=False, description="Whether the issue may be overridden")


class ValidationResultSchema(BaseModel):
    """Response for part validation."""

    is_valid: bool = Field(..., description="Whether every part can be cut")
    errors: list[ValidationIssueSchema] = Field(default_factory=list)
    warnings: list[ValidationIssueSchema] = Field(default_factory=list)


class CutListResponseSchema(BaseModel):
    """Response for cut list generation."""

    cut_list: dict[str, Any] = Field(..., description="Generated cut list")
    issues: list[ValidationIssueSchema] = Field(
        default_factory=list, description="Validation issues found before generation"
    )
