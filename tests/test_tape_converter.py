"""
Tape mode tests — engineer's rule <-> tape measure.
"""

import pytest

from fieldcalc.converter.tape import (
    PLACEHOLDER, TapeConverter, format_tape, parse_fraction, parts_from_steps,
)
from fieldcalc.models import TapeSide
from fieldcalc.rounding import snap_steps
from fieldcalc.schemas import SettingsSnapshot


# ============================================================
# Helpers
# ============================================================

@pytest.mark.parametrize("raw,expected", [
    ("3/16", 0.1875),
    ("1/32", 0.03125),
    ("0.125", 0.125),
    ("", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("1/0", 0.0),
    ("1/2/3", 0.0),
    ("-1/4", 0.0),
    ("3/2", 0.999999),
])
def test_parse_fraction(raw, expected):
    assert parse_fraction(raw) == pytest.approx(expected)


def test_inch_carry_never_shows_sixteen_sixteenths():
    """11.9999" at 1/16 -> 1' 0", not 0' 11 16/16"."""
    parts = parts_from_steps(snap_steps(11.9999, 1 / 16, round_up=False), 16)
    assert (parts["feet"], parts["inches"], parts["fraction_numerator"]) == (1, 0, 0)
    assert format_tape(parts) == "1' 0\""
    assert TapeConverter(frac_precision=16).edit_inches("11.9999")["pretty"] == "1' 0\""


def test_foot_carry_at_eighths():
    state = TapeConverter(frac_precision=8).edit_inches("23.99")
    assert (state["parts"]["feet"], state["parts"]["inches"]) == (2, 0)
    assert state["pretty"] == "2' 0\""


def test_fraction_is_reduced():
    parts = parts_from_steps(196, 16)
    assert (parts["fraction_numerator"], parts["fraction_denominator"]) == (1, 4)
    assert format_tape(parts) == "1' 0 1/4\""


def test_snap_exact_step_does_not_round_up_on_noise():
    assert snap_steps(12.0, 1 / 16, round_up=True) == 192
    assert snap_steps(12.0 + 1e-12, 1 / 16, round_up=True) == 192
    assert snap_steps(12.01, 1 / 16, round_up=True) == 193


# ============================================================
# Engineer -> tape
# ============================================================

def test_example_round_up_sixteenths():
    """1.02 ft, Round Up, 1/16 -> 1' 0 1/4"."""
    converter = TapeConverter(frac_precision=16, round_up=True)
    state = converter.edit_engineer("1.02")
    assert state["pretty"] == "1' 0 1/4\""
    assert (state["feet"], state["inches"], state["fraction"]) == ("1", "0", "1/4")
    assert state["engineer"] == "1.02"
    assert state["auto_fields"] == ["feet", "fraction", "inches", "pretty"]
    assert state["decimal_feet"] == pytest.approx(12.25 / 12)


def test_exact_vs_round_up():
    converter = TapeConverter(frac_precision=16, round_up=False)
    assert converter.edit_engineer("1.001")["pretty"] == "1' 0\""
    assert converter.toggle_round_up()["pretty"] == "1' 0 1/16\""


def test_zero_is_not_empty():
    state = TapeConverter().edit_engineer("0")
    assert state["pretty"] == "0' 0\""
    assert (state["feet"], state["inches"], state["fraction"]) == ("0", "0", "")


def test_clearing_engineer_clears_tape():
    converter = TapeConverter()
    converter.edit_engineer("3.5")
    state = converter.edit_engineer("")
    assert (state["feet"], state["inches"], state["fraction"]) == ("", "", "")
    assert state["pretty"] == PLACEHOLDER
    assert state["auto_fields"] == []
    assert state["decimal_feet"] is None


def test_invalid_engineer_keeps_last_result():
    converter = TapeConverter()
    converter.edit_engineer("1.5")
    state = converter.edit_engineer("abc")
    assert (state["feet"], state["inches"]) == ("1", "6")
    assert state["engineer"] == "abc"


def test_negative_engineer_ignored():
    converter = TapeConverter()
    state = converter.edit_engineer("-2")
    assert state["feet"] == ""
    assert state["pretty"] == PLACEHOLDER


@pytest.mark.parametrize("denominator", [16, 8, 4])
@pytest.mark.parametrize("round_up", [True, False])
@pytest.mark.parametrize("value", ["1.02", "3.14159", "7.77", "0.4"])
def test_snapped_value_is_stable(value, denominator, round_up):
    """Feeding a snapped result back in gives the same tape reading."""
    first = TapeConverter(frac_precision=denominator, round_up=round_up).edit_engineer(value)
    second = TapeConverter(frac_precision=denominator, round_up=round_up).edit_engineer(
        repr(first["decimal_feet"]))
    assert second["decimal_feet"] == pytest.approx(first["decimal_feet"])
    assert second["parts"] == first["parts"]


# ============================================================
# Tape -> engineer
# ============================================================

def test_tape_to_engineer_tenths():
    converter = TapeConverter()
    converter.edit_feet("5")
    state = converter.edit_inches("6")
    assert state["engineer"] == "5.5"
    assert state["pretty"] == "5' 6\""
    assert state["auto_fields"] == ["engineer", "pretty"]
    assert state["last_edited"] == TapeSide.TAPE


def test_typed_fraction_snaps_but_is_not_rewritten():
    converter = TapeConverter(frac_precision=16, round_up=False)
    state = converter.edit_fraction("1/32")
    assert state["fraction"] == "1/32"
    assert state["pretty"] == "0' 0 1/16\""
    assert state["engineer"] == "0.0"


def test_typed_tape_text_left_as_typed():
    converter = TapeConverter()
    state = converter.edit_feet("05")
    assert state["feet"] == "05"
    assert state["engineer"] == "5.0"


def test_clearing_tape_clears_engineer():
    converter = TapeConverter()
    converter.edit_feet("4")
    state = converter.edit_feet("")
    assert state["engineer"] == ""
    assert state["pretty"] == PLACEHOLDER
    assert "engineer" not in state["auto_fields"]


def test_tape_reading_to_decimal_feet():
    """3' 7.3" at 1/16 snaps to 3' 7 5/16" = 3.609375 ft."""
    converter = TapeConverter(frac_precision=16, round_up=False)
    converter.edit_feet("3")
    state = converter.edit_inches("7.3")
    assert state["pretty"] == "3' 7 5/16\""
    assert state["decimal_feet"] == pytest.approx(3.609375)
    assert state["engineer"] == "3.6"


@pytest.mark.parametrize("denominator", [16, 8, 4])
@pytest.mark.parametrize("round_up", [True, False])
@pytest.mark.parametrize("feet,inches", [("3", "7.3"), ("0", "11.97"), ("12", "0.4")])
def test_tape_reading_stable_through_decimal_feet(feet, inches, denominator, round_up):
    """Tape -> decimal feet -> tape lands on the same reading."""
    converter = TapeConverter(frac_precision=denominator, round_up=round_up)
    converter.edit_feet(feet)
    first = converter.edit_inches(inches)
    second = TapeConverter(frac_precision=denominator, round_up=round_up).edit_engineer(
        repr(first["decimal_feet"]))
    assert second["parts"] == first["parts"]
    assert second["pretty"] == first["pretty"]


# ============================================================
# Oversized input
# ============================================================

@pytest.mark.parametrize("value", ["1e308", "1e307"])
def test_engineer_too_large_to_snap_is_ignored(value):
    converter = TapeConverter()
    converter.edit_engineer("1.5")
    state = converter.edit_engineer(value)
    assert state["engineer"] == value
    assert (state["feet"], state["inches"]) == ("1", "6")
    assert state["pretty"] == "1' 6\""


def test_tape_feet_too_large_to_snap_is_ignored():
    converter = TapeConverter()
    converter.edit_feet("2")
    state = converter.edit_feet("1e308")
    assert state["feet"] == "1e308"
    assert state["engineer"] == "2.0"
    assert state["pretty"] == "2' 0\""


def test_tape_feet_too_large_from_blank_stays_blank():
    state = TapeConverter().edit_feet("1e308")
    assert state["engineer"] == ""
    assert state["pretty"] == PLACEHOLDER


def test_large_but_countable_length_still_converts():
    converter = TapeConverter()
    state = converter.edit_feet("1e30")
    assert state["engineer"].endswith(".0")
    assert len(state["engineer"]) > 30
    assert state["parts"]["feet"] > 10 ** 29


# ============================================================
# Preferences
# ============================================================

def test_snap_override():
    converter = TapeConverter(frac_precision=16)
    assert converter.edit_engineer("1.01")["pretty"] == "1' 0 1/8\""
    assert converter.set_snap_override(4)["pretty"] == "1' 0\""
    assert converter.set_snap_override(None)["pretty"] == "1' 0 1/8\""


def test_unknown_snap_override_ignored():
    converter = TapeConverter(frac_precision=16)
    converter.set_snap_override(3)
    assert converter.snap_denominator == 16


def test_settings_drive_precision_and_mode():
    settings = SettingsSnapshot.from_partial({"rounding": {"frac_precision": 8, "tape_mode": "up"}})
    converter = TapeConverter.from_settings(settings)
    assert converter.round_up is True
    assert converter.snap_denominator == 8
    assert converter.edit_engineer("1.02")["pretty"] == "1' 0 1/4\""


def test_reset():
    converter = TapeConverter()
    converter.edit_engineer("2.5")
    state = converter.reset()
    assert state["engineer"] == ""
    assert state["pretty"] == PLACEHOLDER
