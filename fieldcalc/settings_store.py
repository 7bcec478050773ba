"""
Settings Provider — persisted user settings with defaults.

One JSON payload per key (config.SETTINGS_KEY). Loading never fails: a missing
row, a partial payload from an older version, or junk values all fall back to
defaults field by field (see schemas.SettingsSnapshot).

The engine only ever calls load(). The one write-through is the material
preset slider (set_density), which persists immediately.
"""

import logging

from sqlalchemy.orm import Session

from . import models
from .config import settings as app_settings
from .densities import clamp_density
from .models import Material
from .schemas import SettingsSnapshot

logger = logging.getLogger(__name__)


class SettingsStore:

    def __init__(self, db: Session, key: str = None):
        self.db = db
        self.key = key or app_settings.SETTINGS_KEY

    def _row(self):
        return self.db.query(models.StoredSettings).filter(
            models.StoredSettings.key == self.key
        ).first()

    def load(self) -> SettingsSnapshot:
        row = self._row()
        if row is None:
            return SettingsSnapshot()
        return SettingsSnapshot.from_partial(row.payload)

    def save(self, snapshot: SettingsSnapshot) -> SettingsSnapshot:
        payload = snapshot.model_dump(mode="json")
        row = self._row()
        if row is None:
            row = models.StoredSettings(key=self.key, payload=payload)
            self.db.add(row)
        else:
            row.payload = payload
        self.db.commit()
        logger.info("Settings saved (%s)", self.key)
        return snapshot

    def reset(self) -> SettingsSnapshot:
        """Back to factory defaults."""
        return self.save(SettingsSnapshot())

    def set_density(self, material: Material, value: float) -> SettingsSnapshot:
        """Material preset slider — clamp to 0.50..2.00 (0.05 steps) and save now."""
        material = Material(material)
        if material == Material.CONCRETE:
            raise ValueError("Concrete has no density — it is ordered by the yard")
        current = self.load()
        materials = current.materials.model_copy(update={material.value: clamp_density(value)})
        return self.save(current.model_copy(update={"materials": materials}))
