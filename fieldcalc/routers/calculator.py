"""
Calculator API — shape volumes, truck loads, and the active pour.

POST /api/calculator/volume      — one shape -> yd³ (stateless)
POST /api/calculator/loads       — a total -> trucks / tons / bags (stateless)
GET  /api/calculator/shapes      — shapes + labels for a material
GET  /api/calculator/pour        — current pour total + totals block
POST /api/calculator/pour/add    — add an item to the pour
POST /api/calculator/pour/clear  — clear the pour
POST /api/calculator/resync      — reload settings, recompute
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..calculator_session import CalculatorSession, order_summary
from ..calculators.registry import get_calculator, shape_label, shapes_for_material
from ..database import get_db
from ..load_planner import resolve_round_up
from ..models import Material
from ..settings_store import SettingsStore

router = APIRouter(prefix="/calculator", tags=["calculator"])

# Single active session (one crew, one phone)
_session: Optional[CalculatorSession] = None


def get_session(db: Session = Depends(get_db)) -> CalculatorSession:
    global _session
    if _session is None:
        _session = CalculatorSession(SettingsStore(db).load())
    return _session


def reset_session() -> None:
    global _session
    _session = None


def _pour_status(session: CalculatorSession) -> dict:
    return {
        "total_yards": session.pour.total(),
        "material": session.material,
        "totals": session.totals(),
    }


@router.get("/shapes", response_model=list[schemas.ShapeOption])
def list_shapes(material: Material = Material.CONCRETE):
    return [{"shape": s, "label": shape_label(s, material)} for s in shapes_for_material(material)]


@router.post("/volume", response_model=schemas.VolumeResult)
def calculate_volume(request: schemas.VolumeRequest):
    if request.shape not in shapes_for_material(request.material):
        raise HTTPException(
            status_code=400,
            detail=f"{request.shape.value} is concrete-only",
        )
    calculator = get_calculator(request.shape)
    return calculator.calculate(
        request.fields,
        material=request.material,
        waste_pct=request.waste_pct,
        continuous=request.continuous,
    )


@router.post("/loads", response_model=schemas.LoadsResult)
def calculate_loads(request: schemas.LoadsRequest, db: Session = Depends(get_db)):
    settings = SettingsStore(db).load()
    round_up = resolve_round_up(
        settings.rounding.loads_default,
        True if request.round_up is None else request.round_up,
    )
    return order_summary(
        request.total_yards,
        request.material,
        request.truck_capacity if request.truck_capacity is not None else settings.trucks.default_capacity,
        request.over_order_pct if request.over_order_pct is not None else settings.trucks.over_order_pct,
        round_up,
        densities=settings.materials.as_dict(),
        bags_enabled=settings.features.enable_bags,
        bag_size_lbs=request.bag_size_lbs or settings.features.bag_size_lbs,
    )


@router.get("/pour", response_model=schemas.PourStatus)
def get_pour(session: CalculatorSession = Depends(get_session)):
    return _pour_status(session)


@router.post("/pour/add", response_model=schemas.PourStatus)
def add_to_pour(request: schemas.PourAddRequest, session: CalculatorSession = Depends(get_session)):
    if request.volume is not None:
        volume = request.volume
        if volume.shape not in shapes_for_material(volume.material):
            raise HTTPException(status_code=400, detail=f"{volume.shape.value} is concrete-only")
        session.set_material(volume.material)
        if volume.continuous != session.continuous:
            session.toggle_continuous()
        session.set_waste_pct(volume.waste_pct)
        session.set_shape(volume.shape)
        session.set_fields(volume.fields, shape=volume.shape)
        session.add_current()
    elif request.cubic_yards is not None:
        session.add_volume(request.cubic_yards)
    return _pour_status(session)


@router.post("/pour/clear", response_model=schemas.PourStatus)
def clear_pour(session: CalculatorSession = Depends(get_session)):
    session.clear_pour()
    return _pour_status(session)


@router.post("/resync", response_model=schemas.PourStatus)
def resync(db: Session = Depends(get_db), session: CalculatorSession = Depends(get_session)):
    session.resync(SettingsStore(db).load())
    return _pour_status(session)
