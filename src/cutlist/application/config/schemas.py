"""Pydantic schemas for cut list project files.

A project file is a JSON document holding the stocks, the flat list of
parts (each with its resolved stock assignment) and the settings used
for cut list generation.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cutlist.domain.value_objects import GrainDirection, PricingUnit

# Supported schema versions for project files
# Version 1.0: Initial schema with parts, stocks and settings
# Version 1.1: Added glue-up board count/width and part notes
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class SettingsSchema(BaseModel):
    """Cut list generation settings.

    Attributes:
        kerf_width: Saw blade kerf in inches (1/8" typical).
        overage_factor: Purchase safety margin as a fraction (0.1 = 10%).
    """

    model_config = ConfigDict(extra="forbid")

    kerf_width: float = Field(
        default=0.125, ge=0, le=0.5, description="Saw kerf width in inches"
    )
    overage_factor: float = Field(
        default=0.1, ge=0, le=1.0, description="Material overage fraction"
    )


class StockSchema(BaseModel):
    """A stock material (board or sheet)."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    length: float = Field(..., gt=0, allow_inf_nan=False)
    width: float = Field(..., gt=0, allow_inf_nan=False)
    thickness: float = Field(..., gt=0, allow_inf_nan=False)
    grain_direction: GrainDirection = GrainDirection.LENGTH
    pricing_unit: PricingUnit = PricingUnit.PER_ITEM
    price_per_unit: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    color: str | None = None


class GlueUpSchema(BaseModel):
    """Glue-up panel details.

    Attributes:
        board_count: Minimum number of boards edge-glued into the panel.
        board_width: Maximum width of each board in inches.
    """

    model_config = ConfigDict(extra="forbid")

    board_count: int | None = Field(default=None, ge=1, le=50)
    board_width: float | None = Field(default=None, gt=0, allow_inf_nan=False)


class PartSchema(BaseModel):
    """A rectangular part with its resolved stock assignment."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    length: float = Field(..., gt=0, allow_inf_nan=False)
    width: float = Field(..., gt=0, allow_inf_nan=False)
    thickness: float = Field(..., gt=0, allow_inf_nan=False)
    stock_id: str | None = None
    grain_sensitive: bool = False
    grain_direction: GrainDirection = GrainDirection.LENGTH
    extra_length: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    extra_width: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    glue_up_panel: bool | GlueUpSchema = False
    ignore_overlap: bool = False
    notes: str | None = None
    color: str | None = None

    @field_validator("grain_direction")
    @classmethod
    def validate_part_grain(cls, v: GrainDirection) -> GrainDirection:
        """Parts always have a grain axis; 'none' only applies to stock."""
        if v == GrainDirection.NONE:
            raise ValueError("Part grain direction must be 'length' or 'width'")
        return v


class ProjectConfiguration(BaseModel):
    """Root model for a cut list project file.

    Attributes:
        version: Version string in format "major.minor" (e.g., "1.0")
        name: Project name
        modified_at: Project revision timestamp, used for staleness checks
        settings: Kerf and overage settings
        stocks: Available stock materials
        parts: Parts to cut

    Example:
        >>> config = ProjectConfiguration(
        ...     version="1.0",
        ...     stocks=[StockSchema(id="ply", name="Plywood", length=96, width=48, thickness=0.75)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    name: str = "Untitled Project"
    modified_at: str | None = None
    settings: SettingsSchema = Field(default_factory=SettingsSchema)
    stocks: list[StockSchema] = Field(default_factory=list)
    parts: list[PartSchema] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major = v.split(".")[0]
        supported_majors = {s.split(".")[0] for s in SUPPORTED_VERSIONS}
        if major in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version: {v}. "
            f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
        )

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "ProjectConfiguration":
        """Stock ids and part ids must each be unique."""
        for label, ids in (
            ("stock", [s.id for s in self.stocks]),
            ("part", [p.id for p in self.parts]),
        ):
            seen: set[str] = set()
            duplicates = sorted({i for i in ids if i in seen or seen.add(i)})
            if duplicates:
                raise ValueError(f"Duplicate {label} ids: {', '.join(duplicates)}")
        return self
