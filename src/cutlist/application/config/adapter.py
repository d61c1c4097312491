"""Adapter functions converting project schemas to domain value objects."""

from cutlist.application.config.schemas import (
    GlueUpSchema,
    PartSchema,
    ProjectConfiguration,
    StockSchema,
)
from cutlist.domain.value_objects import CutListSettings, GlueUpSpec, Part, Stock


def config_to_stocks(config: ProjectConfiguration) -> list[Stock]:
    """Convert the project's stock entries to Stock value objects."""
    return [_stock_to_domain(stock) for stock in config.stocks]


def config_to_parts(config: ProjectConfiguration) -> list[Part]:
    """Convert the project's part entries to Part value objects, in order."""
    return [_part_to_domain(part) for part in config.parts]


def config_to_settings(
    config: ProjectConfiguration,
    kerf_width: float | None = None,
    overage_factor: float | None = None,
) -> CutListSettings:
    """Build generation settings, letting explicit overrides win over the file.

    Raises:
        ValueError: If an override is out of range.
    """
    return CutListSettings(
        kerf_width=(
            config.settings.kerf_width if kerf_width is None else kerf_width
        ),
        overage_factor=(
            config.settings.overage_factor
            if overage_factor is None
            else overage_factor
        ),
    )


def _stock_to_domain(stock: StockSchema) -> Stock:
    return Stock(
        id=stock.id,
        name=stock.name,
        length=stock.length,
        width=stock.width,
        thickness=stock.thickness,
        grain_direction=stock.grain_direction,
        pricing_unit=stock.pricing_unit,
        price_per_unit=stock.price_per_unit,
        color=stock.color,
    )


def _glue_up_to_domain(glue_up: bool | GlueUpSchema) -> GlueUpSpec | None:
    if isinstance(glue_up, GlueUpSchema):
        return GlueUpSpec(
            board_count=glue_up.board_count,
            board_width=glue_up.board_width,
        )
    return GlueUpSpec() if glue_up else None


def _part_to_domain(part: PartSchema) -> Part:
    return Part(
        id=part.id,
        name=part.name,
        length=part.length,
        width=part.width,
        thickness=part.thickness,
        stock_id=part.stock_id,
        grain_sensitive=part.grain_sensitive,
        grain_direction=part.grain_direction,
        extra_length=part.extra_length,
        extra_width=part.extra_width,
        glue_up_panel=_glue_up_to_domain(part.glue_up_panel),
        ignore_overlap=part.ignore_overlap,
        notes=part.notes,
        color=part.color,
    )
