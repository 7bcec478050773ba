"""
Slope mode — 3-way solver. Any 2 of the 3 fills the 3rd:
    rise + run   -> grade (%)
    grade + run  -> rise
    grade + rise -> run

If all 3 are present nothing is written: the user is either reviewing
consistent values or pasted all three, and we don't fight them.
"""

import logging
import math
from typing import Optional

from ..models import SlopeField
from ..rounding import format_fixed

logger = logging.getLogger(__name__)


def _value_or_none(raw) -> Optional[float]:
    if raw is None:
        return None
    text = str(raw).strip()
    if text == "":
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def solve_missing(grade: Optional[float], run: Optional[float],
                  rise: Optional[float]) -> Optional[tuple]:
    """
    Pure solve step. Returns (field, value) for the one missing value, or None
    when there is nothing to do (fewer than 2, all 3, a zero divisor, or a
    result too large to represent).
    """
    present = sum(v is not None for v in (grade, run, rise))
    if present != 2:
        return None

    if grade is None:
        if run == 0:
            return None
        field, value = SlopeField.GRADE, (rise / run) * 100
    elif rise is None:
        field, value = SlopeField.RISE, (grade / 100) * run
    else:
        if grade == 0:
            return None
        field, value = SlopeField.RUN, (rise * 100) / grade

    if not math.isfinite(value):
        logger.debug("Slope: %s overflowed, nothing derived", field.value)
        return None
    return field, value


class SlopeSolver:

    def __init__(self):
        self.clear()

    def edit(self, field, value) -> dict:
        """User typed into a field — it is never "auto" after this."""
        field = SlopeField(field)
        self.last_edited = field
        self.values[field] = "" if value is None else str(value)
        self.auto.discard(field)
        return self.solve()

    def solve(self) -> dict:
        self.derived = None

        # Only the field we write this pass keeps the auto mark
        if self.last_edited is not None:
            self.auto.discard(self.last_edited)

        result = solve_missing(
            _value_or_none(self.values[SlopeField.GRADE]),
            _value_or_none(self.values[SlopeField.RUN]),
            _value_or_none(self.values[SlopeField.RISE]),
        )
        if result is None:
            return self.state()

        field, value = result
        self.values[field] = format_fixed(value, 2)
        self.auto.add(field)
        self.derived = field
        logger.debug("Slope: derived %s = %s", field.value, self.values[field])
        return self.state()

    def clear(self) -> dict:
        self.values = {field: "" for field in SlopeField}
        self.auto = set()
        self.last_edited = None
        self.derived = None
        return self.state()

    def state(self) -> dict:
        return {
            "grade": self.values[SlopeField.GRADE],
            "run": self.values[SlopeField.RUN],
            "rise": self.values[SlopeField.RISE],
            "derived": self.derived,
            "auto_fields": sorted(self.auto, key=lambda f: f.value),
        }
