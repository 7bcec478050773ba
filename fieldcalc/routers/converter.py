"""
Converter API — each call replays the input events on a fresh converter
built from the current settings, so the response is what the screen shows.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..converter.session import yards_to_tons
from ..converter.slope import SlopeSolver
from ..converter.tape import TapeConverter
from ..database import get_db
from ..models import SlopeField, TapeSide
from ..settings_store import SettingsStore

router = APIRouter(prefix="/converter", tags=["converter"])


@router.post("/tape", response_model=schemas.TapeResult)
def convert_tape(request: schemas.TapeRequest, db: Session = Depends(get_db)):
    converter = TapeConverter.from_settings(SettingsStore(db).load())
    if request.round_up is not None:
        converter.round_up = request.round_up
    if request.snap_denominator is not None:
        converter.set_snap_override(request.snap_denominator)

    if request.side == TapeSide.ENGINEER:
        return converter.edit_engineer(request.decimal_feet)

    converter.edit_feet(request.feet)
    converter.edit_inches(request.inches)
    return converter.edit_fraction(request.fraction)


@router.post("/slope", response_model=schemas.SlopeResult)
def solve_slope(request: schemas.SlopeRequest):
    solver = SlopeSolver()
    values = {
        SlopeField.GRADE: request.grade,
        SlopeField.RUN: request.run,
        SlopeField.RISE: request.rise,
    }
    for field, value in values.items():
        solver.values[field] = "" if value is None else str(value)
    solver.last_edited = request.last_edited
    return solver.solve()


@router.post("/tons", response_model=schemas.TonsResult)
def convert_tons(request: schemas.TonsRequest, db: Session = Depends(get_db)):
    settings = SettingsStore(db).load()
    tons, display = yards_to_tons(request.yards, request.material, settings.materials.as_dict())
    return {"tons": tons, "display": display}
