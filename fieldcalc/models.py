from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime
from .database import Base
import enum


# --- Enums (closed sets — the engine never accepts values outside these) ---

class ShapeKind(str, enum.Enum):
    SLAB = "slab"
    FOOTING = "footing"
    WALL = "wall"
    CURB = "curb"
    APPROACH = "approach"
    COLUMN = "column"


class Material(str, enum.Enum):
    CONCRETE = "concrete"
    ROCK = "rock"
    SAND = "sand"
    TOPSOIL = "topsoil"
    ASPHALT = "asphalt"


class LoadRounding(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    ASK = "ask"     # per-calc toggle decides


class TapeMode(str, enum.Enum):
    UP = "up"       # ceiling to the snap step, never understates
    EXACT = "exact"  # nearest snap step


class LengthMode(str, enum.Enum):
    FEET_INCHES = "ftin"
    DECIMAL_FEET = "decft"


class ThicknessUnit(str, enum.Enum):
    INCHES = "in"
    FEET = "ft"


class TapeSide(str, enum.Enum):
    ENGINEER = "engineer"
    TAPE = "tape"


class SlopeField(str, enum.Enum):
    GRADE = "grade"
    RUN = "run"
    RISE = "rise"


class ConverterMode(str, enum.Enum):
    TAPE = "tape"
    SLOPE = "slope"
    TONS = "tons"


# Waste allowance only makes sense for placed materials.
# Rock / sand / topsoil use the over-order buffer instead.
WASTE_MATERIALS = frozenset({Material.CONCRETE, Material.ASPHALT})

# Shapes hidden when ordering by the truck (not concrete)
CONCRETE_ONLY_SHAPES = frozenset({ShapeKind.WALL, ShapeKind.CURB})


# --- Tables ---

class StoredSettings(Base):
    """Persisted user settings — one JSON payload per key."""
    __tablename__ = "stored_settings"

    key = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
