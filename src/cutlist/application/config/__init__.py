"""Project file configuration: schemas, loading and conversion to domain objects."""

from cutlist.application.config.adapter import (
    config_to_parts,
    config_to_settings,
    config_to_stocks,
)
from cutlist.application.config.loader import (
    ConfigError,
    load_project,
    load_project_from_dict,
)
from cutlist.application.config.schemas import (
    SUPPORTED_VERSIONS,
    GlueUpSchema,
    PartSchema,
    ProjectConfiguration,
    SettingsSchema,
    StockSchema,
)

__all__ = [
    "ConfigError",
    "GlueUpSchema",
    "PartSchema",
    "ProjectConfiguration",
    "SUPPORTED_VERSIONS",
    "SettingsSchema",
    "StockSchema",
    "config_to_parts",
    "config_to_settings",
    "config_to_stocks",
    "load_project",
    "load_project_from_dict",
]
