"""Reading cut list project files.

A project file is a JSON object with ``version``, ``settings``, ``stocks``
and ``parts``. Every way a project can fail to load (missing file,
unreadable file, malformed JSON, schema violation) surfaces as a single
ConfigError whose ``error_type`` tells the CLI and the API how to report it.
"""

import json
import math
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutlist.application.config.schemas import ProjectConfiguration


class ConfigError(Exception):
    """A project file or request body that could not be turned into a project.

    Attributes:
        message: Summary shown to the user.
        error_type: One of file_not_found, permission_denied, file_read_error,
            json_parse or validation.
        path: Project file involved, None for request bodies.
        details: Per-problem records. JSON errors carry line/column,
            schema errors carry path/message/value/error_type.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location the way it reads in the project file.

    Examples:
        >>> _format_json_path(("settings", "kerf_width"))
        'settings.kerf_width'
        >>> _format_json_path(("parts", 2, "length"))
        'parts[2].length'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _reportable(value: Any) -> Any:
    # inf and nan have no strict JSON form, so API error bodies get their repr
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    return value


def _schema_error(error: PydanticValidationError, path: Path | None) -> ConfigError:
    """Build a ConfigError listing every schema problem by its project path."""
    details = [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": _reportable(err.get("input")),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]

    lines = ["Project validation failed:"]
    for detail in details:
        line = f"  - {detail['path']}: {detail['message']}"
        value = detail["value"]
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got: {value!r})"
        lines.append(line)

    return ConfigError(
        message="\n".join(lines),
        error_type="validation",
        path=path,
        details=details,
    )


def _read_project_json(path: Path) -> Any:
    """Read a project file and parse its JSON, without schema checks."""
    if not path.exists():
        raise ConfigError(
            message=f"Project file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading project file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Could not read project file {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Project file {path} is not valid JSON "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate_project(data: Any, path: Path | None = None) -> ProjectConfiguration:
    try:
        return ProjectConfiguration.model_validate(data)
    except PydanticValidationError as e:
        raise _schema_error(e, path)


def load_project(path: Path) -> ProjectConfiguration:
    """Load the stocks, parts and settings of a project file.

    Args:
        path: JSON project file.

    Returns:
        The validated project.

    Raises:
        ConfigError: With ``error_type`` set to file_not_found,
            permission_denied, file_read_error, json_parse or validation.
    """
    return _validate_project(_read_project_json(path), path)


def load_project_from_dict(data: dict[str, Any]) -> ProjectConfiguration:
    """Validate an already parsed project, such as an API request body.

    Raises:
        ConfigError: With ``error_type`` "validation".
    """
    return _validate_project(data)
