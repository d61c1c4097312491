"""Cut list generation endpoints."""

from fastapi import APIRouter

from cutlist.application.config import load_project_from_dict
from cutlist.infrastructure import JsonExporter
from cutlist.web.dependencies import GenerateCommandDep
from cutlist.web.exceptions import CutListBlockedError
from cutlist.web.schemas.requests import GenerateCutListRequest
from cutlist.web.schemas.responses import CutListResponseSchema, ValidationIssueSchema

router = APIRouter(prefix="/cut-lists", tags=["cut-lists"])


@router.post("", response_model=CutListResponseSchema)
async def create_cut_list(
    request: GenerateCutListRequest,
    command: GenerateCommandDep,
) -> CutListResponseSchema:
    """Validate a project and generate its cut list on the worker pool.

    Raises:
        ConfigError: Project fails schema validation (422).
        CutListBlockedError: Blocking issues and force not set (422).
        CutListTimeoutError: Generation exceeded the timeout (504).
    """
    config = load_project_from_dict(request.project)
    result = await command.execute_async(
        config,
        kerf_width=request.kerf_width,
        overage_factor=request.overage_factor,
        force=request.force,
    )

    if result.blocking_issues:
        raise CutListBlockedError(result.blocking_issues)
    if result.cut_list is None:
        raise ValueError("; ".join(result.errors) or "Cut list generation failed")

    exporter = JsonExporter()
    return CutListResponseSchema(
        cut_list=exporter.cut_list_to_dict(result.cut_list),
        issues=[ValidationIssueSchema(**exporter.issue_to_dict(i)) for i in result.issues],
    )
