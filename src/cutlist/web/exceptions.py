"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cutlist.application import ConfigError, CutListTimeoutError
from cutlist.domain import ValidationIssue
from cutlist.infrastructure import JsonExporter


class CutListBlockedError(Exception):
    """Raised when blocking validation errors prevent generation."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(f"Cut list generation blocked by {len(issues)} issue(s)")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details,
            },
        )

    @app.exception_handler(CutListBlockedError)
    async def blocked_error_handler(
        request: Request, exc: CutListBlockedError
    ) -> JSONResponse:
        exporter = JsonExporter()
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "blocked",
                "details": [exporter.issue_to_dict(i) for i in exc.issues],
            },
        )

    @app.exception_handler(CutListTimeoutError)
    async def timeout_error_handler(
        request: Request, exc: CutListTimeoutError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=504,
            content={
                "error": str(exc),
                "error_type": "timeout",
                "details": {"timeout": exc.timeout},
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "invalid_value",
                "details": None,
            },
        )
