"""
Shared rounding helpers.

Two different policies live in this app and must never be mixed up:
- Ordering (calculator): loads round per material policy, bags always round up.
- Building (converter): lengths snap to a fractional-inch step, up or nearest.

Display formatting rounds half-up on the decimal value (0.25 -> "0.3"),
not Python's round-half-even.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

# Floating noise allowance when snapping. 12.0 / 0.0625 must stay 192, not 192.0000001 -> 193.
SNAP_EPSILON = 1e-9

# Shown instead of a number that cannot be displayed (empty, infinite)
PLACEHOLDER = "—"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def snap_nearest(value: float, step: float) -> float:
    """Round to the nearest step, halves away from zero."""
    return round_half_up(value / step) * step


def snap_steps(value: float, step: float, round_up: bool) -> int:
    """Snap and return the whole number of steps instead of the length."""
    if round_up:
        return math.ceil(value / step - SNAP_EPSILON)
    return round_half_up(value / step)


def format_fixed(value: float, places: int) -> str:
    """Fixed-point text with half-up rounding, e.g. format_fixed(1.296, 2) -> '1.30'."""
    if not math.isfinite(value):
        return PLACEHOLDER
    number = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-places)
    # Precision has to cover every digit of the whole part plus the decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        text = str(number.quantize(quantum, rounding=ROUND_HALF_UP))
    if text.startswith("-") and Decimal(text) == 0:
        return text[1:]
    return text


def round_to_step(value: float, step: float, places: int = 2) -> float:
    """Round to the nearest step and strip float noise (1.35000000000000008 -> 1.35)."""
    return round(snap_nearest(value, step), places)
