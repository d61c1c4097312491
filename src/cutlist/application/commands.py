"""Application commands (use cases) for validation and cut list generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cutlist.domain import (
    CutListSettings,
    Part,
    PartValidator,
    Stock,
    ValidationIssue,
    partition_issues,
)
from cutlist.infrastructure import CutListOptimizer

from .config import (
    ProjectConfiguration,
    config_to_parts,
    config_to_settings,
    config_to_stocks,
)
from .dtos import GenerateCutListOutput, ValidationOutput
from .worker import DEFAULT_TIMEOUT_SECONDS, CutListWorker

logger = logging.getLogger(__name__)


class ValidatePartsCommand:
    """Command to check every part of a project against its stock."""

    def __init__(self, validator: PartValidator | None = None) -> None:
        self.validator = validator or PartValidator()

    def execute(self, config: ProjectConfiguration) -> ValidationOutput:
        try:
            parts = config_to_parts(config)
            stocks = config_to_stocks(config)
        except ValueError as e:
            return ValidationOutput(errors=[str(e)])
        return ValidationOutput(issues=self.validator.validate(parts, stocks))


@dataclass(frozen=True)
class _GenerationPlan:
    parts: list[Part]
    stocks: list[Stock]
    settings: CutListSettings
    issues: list[ValidationIssue]
    bypassed: list[ValidationIssue]


class GenerateCutListCommand:
    """Command to validate a project and generate its cut list.

    Warnings (bypassable issues) never block; they are recorded on the cut
    list as bypassed. Blocking errors stop generation unless force is set,
    in which case they are recorded as bypassed as well and the optimizer
    reports the affected parts as skipped.
    """

    def __init__(
        self,
        validator: PartValidator | None = None,
        worker: CutListWorker | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.validator = validator or PartValidator()
        self.worker = worker
        self.timeout = timeout

    def execute(
        self,
        config: ProjectConfiguration,
        kerf_width: float | None = None,
        overage_factor: float | None = None,
        force: bool = False,
    ) -> GenerateCutListOutput:
        """Validate and generate synchronously.

        Args:
            config: Loaded project.
            kerf_width: Optional override of the project's kerf.
            overage_factor: Optional override of the project's overage.
            force: Generate even when blocking errors are present.

        Returns:
            GenerateCutListOutput with the cut list or the reasons it is missing.

        Raises:
            CutListTimeoutError: If a worker is configured and the job times out.
        """
        plan = self._plan(config, kerf_width, overage_factor, force)
        if isinstance(plan, GenerateCutListOutput):
            return plan

        if self.worker is not None:
            cut_list = self.worker.generate(
                plan.parts,
                plan.stocks,
                plan.settings,
                config.modified_at,
                plan.bypassed,
                timeout=self.timeout,
            )
        else:
            cut_list = CutListOptimizer(plan.settings).optimize(
                plan.parts,
                plan.stocks,
                project_modified_at=config.modified_at,
                bypassed_issues=plan.bypassed,
            )
        return GenerateCutListOutput(cut_list=cut_list, issues=plan.issues)

    async def execute_async(
        self,
        config: ProjectConfiguration,
        kerf_width: float | None = None,
        overage_factor: float | None = None,
        force: bool = False,
    ) -> GenerateCutListOutput:
        """Validate and generate on the worker pool from async code."""
        plan = self._plan(config, kerf_width, overage_factor, force)
        if isinstance(plan, GenerateCutListOutput):
            return plan

        worker = self.worker or CutListWorker(max_workers=1)
        try:
            cut_list = await worker.generate_async(
                plan.parts,
                plan.stocks,
                plan.settings,
                config.modified_at,
                plan.bypassed,
                timeout=self.timeout,
            )
        finally:
            if worker is not self.worker:
                worker.shutdown(wait=False)
        return GenerateCutListOutput(cut_list=cut_list, issues=plan.issues)

    def _plan(
        self,
        config: ProjectConfiguration,
        kerf_width: float | None,
        overage_factor: float | None,
        force: bool,
    ) -> _GenerationPlan | GenerateCutListOutput:
        try:
            settings = config_to_settings(config, kerf_width, overage_factor)
            parts = config_to_parts(config)
            stocks = config_to_stocks(config)
        except ValueError as e:
            return GenerateCutListOutput(errors=[str(e)])

        issues = self.validator.validate(parts, stocks)
        blocking, bypassable = partition_issues(issues)

        if blocking and not force:
            logger.info("Cut list generation blocked by %d errors", len(blocking))
            return GenerateCutListOutput(
                issues=issues,
                blocking_issues=blocking,
                errors=[f"{i.part_name}: {i.message}" for i in blocking],
            )

        if blocking:
            logger.warning("Forcing generation past %d blocking errors", len(blocking))

        bypassed = issues if force else bypassable
        return _GenerationPlan(
            parts=parts,
            stocks=stocks,
            settings=settings,
            issues=issues,
            bypassed=bypassed,
        )
