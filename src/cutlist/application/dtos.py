"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from cutlist.domain import CutList, IssueSeverity, ValidationIssue


@dataclass
class ValidationOutput:
    """Output DTO from part validation.

    Attributes:
        issues: All issues in part order.
        errors: Configuration or settings errors that prevented validation.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def error_issues(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @property
    def warning_issues(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        """True when no error-severity issues were found."""
        return not self.errors and not self.error_issues


@dataclass
class GenerateCutListOutput:
    """Output DTO from cut list generation.

    Attributes:
        cut_list: Generated cut list, or None when generation was blocked.
        issues: Every validation issue found before generation.
        blocking_issues: Issues that stopped generation (only set when not forced).
        errors: Human-readable error messages if generation failed.
    """

    cut_list: CutList | None = None
    issues: list[ValidationIssue] = field(default_factory=list)
    blocking_issues: list[ValidationIssue] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the cut list was generated successfully."""
        return self.cut_list is not None and not self.errors
