import logging
from typing import Annotated, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, ValidationError, field_validator

from .densities import DEFAULT_DENSITIES, clamp_density
from .models import (
    LengthMode, LoadRounding, Material, ShapeKind, SlopeField,
    TapeMode, TapeSide, ThicknessUnit,
)

logger = logging.getLogger(__name__)

FRACTION_PRECISIONS = (16, 8, 4)


def _check_precision(value: int) -> int:
    if value not in FRACTION_PRECISIONS:
        raise ValueError(f"fraction precision must be one of {FRACTION_PRECISIONS}")
    return value


Density = Annotated[float, AfterValidator(clamp_density)]
Precision = Annotated[int, AfterValidator(_check_precision)]


# --- Settings snapshot ---
# Persisted settings may be partial (older app versions) or hand-edited.
# Every field falls back to its own default instead of failing the whole load.

class _SettingsGroup(BaseModel):
    class Config:
        frozen = True

    @field_validator("*", mode="wrap")
    @classmethod
    def _fall_back_to_default(cls, value, handler, info):
        try:
            return handler(value)
        except ValidationError:
            default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
            logger.warning("Invalid setting %s.%s=%r — using default %r",
                           cls.__name__, info.field_name, value, default)
            return default


class UnitSettings(_SettingsGroup):
    length_mode: LengthMode = LengthMode.FEET_INCHES
    thickness_unit: ThicknessUnit = ThicknessUnit.INCHES
    volume_unit: Literal["yd3"] = "yd3"
    weight_unit: Literal["tons"] = "tons"


class RoundingSettings(_SettingsGroup):
    loads_default: LoadRounding = LoadRounding.ASK
    tape_mode: TapeMode = TapeMode.EXACT
    frac_precision: Precision = 16


class TruckSettings(_SettingsGroup):
    default_capacity: float = Field(10.0, gt=0)
    over_order_pct: float = Field(5.0, ge=0)


class MaterialDensities(_SettingsGroup):
    """Tons per cubic yard. Concrete is never sold by weight here."""
    rock: Density = DEFAULT_DENSITIES[Material.ROCK]
    sand: Density = DEFAULT_DENSITIES[Material.SAND]
    topsoil: Density = DEFAULT_DENSITIES[Material.TOPSOIL]
    asphalt: Density = DEFAULT_DENSITIES[Material.ASPHALT]

    def as_dict(self) -> dict:
        return {Material(name): value for name, value in self.model_dump().items()}


class FeatureSettings(_SettingsGroup):
    enable_bags: bool = False
    bag_size_lbs: int = 80


class SettingsSnapshot(_SettingsGroup):
    """Immutable settings for one calculation pass."""
    units: UnitSettings = Field(default_factory=UnitSettings)
    rounding: RoundingSettings = Field(default_factory=RoundingSettings)
    trucks: TruckSettings = Field(default_factory=TruckSettings)
    materials: MaterialDensities = Field(default_factory=MaterialDensities)
    features: FeatureSettings = Field(default_factory=FeatureSettings)

    @classmethod
    def from_partial(cls, payload) -> "SettingsSnapshot":
        """Merge a partial persisted payload over the defaults, field by field."""
        if not isinstance(payload, dict):
            if payload is not None:
                logger.warning("Stored settings are not an object (%s) — using defaults",
                               type(payload).__name__)
            return cls()
        return cls.model_validate(payload)


class DensityUpdate(BaseModel):
    value: float


# --- Calculator API ---

RawValue = Optional[Union[float, str]]


class VolumeRequest(BaseModel):
    shape: ShapeKind
    fields: dict = {}
    material: Material = Material.CONCRETE
    waste_pct: float = 0.0
    continuous: bool = False


class VolumeResult(BaseModel):
    shape: ShapeKind
    cubic_feet: float
    adjusted_cubic_feet: float
    waste_pct: float
    cubic_yards: float
    display: str


class ShapeOption(BaseModel):
    shape: ShapeKind
    label: str


class LoadsRequest(BaseModel):
    total_yards: float = Field(0.0, ge=0)
    material: Material = Material.CONCRETE
    truck_capacity: Optional[float] = None   # None -> settings default
    over_order_pct: Optional[float] = None   # None -> settings default
    round_up: Optional[bool] = None          # only used when settings say "ask"
    bag_size_lbs: Optional[int] = None


class LoadsResult(BaseModel):
    display_yards: float
    trucks: Optional[int] = None
    remainder_yards: float
    remainder_label: Optional[str] = None
    round_up: bool
    total_text: str
    trucks_text: str
    remainder_text: str
    tons: Optional[float] = None
    tons_text: str = ""
    bags: Optional[int] = None
    bags_text: str = ""


class PourAddRequest(BaseModel):
    cubic_yards: Optional[float] = None     # explicit volume, or
    volume: Optional[VolumeRequest] = None  # compute it from a shape


class PourStatus(BaseModel):
    total_yards: float
    material: Material
    totals: LoadsResult


# --- Converter API ---

class TapeRequest(BaseModel):
    side: TapeSide = TapeSide.ENGINEER
    decimal_feet: RawValue = None
    feet: RawValue = None
    inches: RawValue = None
    fraction: RawValue = None
    round_up: Optional[bool] = None          # None -> settings tape mode
    snap_denominator: Optional[int] = None   # None -> settings precision


class TapeResult(BaseModel):
    engineer: str
    feet: str
    inches: str
    fraction: str
    pretty: str
    last_edited: TapeSide
    auto_fields: list[str]
    decimal_feet: Optional[float] = None
    parts: Optional[dict] = None


class SlopeRequest(BaseModel):
    grade: RawValue = None
    run: RawValue = None
    rise: RawValue = None
    last_edited: Optional[SlopeField] = None


class SlopeResult(BaseModel):
    grade: str
    run: str
    rise: str
    derived: Optional[SlopeField] = None
    auto_fields: list[SlopeField]


class TonsRequest(BaseModel):
    yards: RawValue = None
    material: Material = Material.ROCK


class TonsResult(BaseModel):
    tons: Optional[float] = None
    display: str
