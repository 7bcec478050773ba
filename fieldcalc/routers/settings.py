from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..models import Material
from ..settings_store import SettingsStore

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=schemas.SettingsSnapshot)
def get_settings(db: Session = Depends(get_db)):
    return SettingsStore(db).load()


@router.put("/", response_model=schemas.SettingsSnapshot)
def replace_settings(payload: dict, db: Session = Depends(get_db)):
    """Save settings. Missing or invalid fields fall back to defaults."""
    snapshot = schemas.SettingsSnapshot.from_partial(payload)
    return SettingsStore(db).save(snapshot)


@router.post("/reset", response_model=schemas.SettingsSnapshot)
def reset_settings(db: Session = Depends(get_db)):
    return SettingsStore(db).reset()


@router.patch("/materials/{material}", response_model=schemas.SettingsSnapshot)
def update_density(material: Material, update: schemas.DensityUpdate, db: Session = Depends(get_db)):
    """Material preset slider — write-through, clamped to 0.50..2.00."""
    try:
        return SettingsStore(db).set_density(material, update.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
