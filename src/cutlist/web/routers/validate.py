"""Part validation endpoints."""

from fastapi import APIRouter

from cutlist.application.config import load_project_from_dict
from cutlist.infrastructure import JsonExporter
from cutlist.web.dependencies import ValidateCommandDep
from cutlist.web.schemas.requests import ProjectValidateRequest
from cutlist.web.schemas.responses import ValidationIssueSchema, ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_project(
    request: ProjectValidateRequest,
    command: ValidateCommandDep,
) -> ValidationResultSchema:
    """Check every part against its assigned stock without generating.

    Raises:
        ConfigError: If the project fails schema validation (422).
    """
    config = load_project_from_dict(request.project)
    result = command.execute(config)

    exporter = JsonExporter()
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[
            ValidationIssueSchema(**exporter.issue_to_dict(i)) for i in result.error_issues
        ],
        warnings=[
            ValidationIssueSchema(**exporter.issue_to_dict(i)) for i in result.warning_issues
        ],
    )
