"""Application layer - use cases, DTOs and the generation worker pool."""

from .commands import GenerateCutListCommand, ValidatePartsCommand
from .config import ConfigError, ProjectConfiguration, load_project, load_project_from_dict
from .dtos import GenerateCutListOutput, ValidationOutput
from .worker import CutListTimeoutError, CutListWorker

__all__ = [
    "ConfigError",
    "CutListTimeoutError",
    "CutListWorker",
    "GenerateCutListCommand",
    "GenerateCutListOutput",
    "ProjectConfiguration",
    "ValidatePartsCommand",
    "ValidationOutput",
    "load_project",
    "load_project_from_dict",
]
