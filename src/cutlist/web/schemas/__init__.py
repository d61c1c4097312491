"""Request and response schemas for the REST API."""

from cutlist.web.schemas.requests import GenerateCutListRequest, ProjectValidateRequest
from cutlist.web.schemas.responses import (
    CutListResponseSchema,
    ValidationIssueSchema,
    ValidationResultSchema,
)

__all__ = [
    "CutListResponseSchema",
    "GenerateCutListRequest",
    "ProjectValidateRequest",
    "ValidationIssueSchema",
    "ValidationResultSchema",
]
