"""
HTTP API tests — settings, calculator, converter.
"""

import pytest


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "app": "fieldcalc"}


# ============================================================
# Settings
# ============================================================

def test_get_default_settings(client):
    resp = client.get("/api/settings/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["trucks"] == {"default_capacity": 10.0, "over_order_pct": 5.0}
    assert data["rounding"]["loads_default"] == "ask"
    assert data["rounding"]["frac_precision"] == 16


def test_put_partial_settings(client):
    resp = client.put("/api/settings/", json={"trucks": {"default_capacity": 9}, "rounding": {"frac_precision": 5}})
    assert resp.status_code == 200
    data = resp.json()
    assert data["trucks"]["default_capacity"] == 9.0
    assert data["rounding"]["frac_precision"] == 16
    assert client.get("/api/settings/").json()["trucks"]["default_capacity"] == 9.0


def test_reset_settings(client):
    client.put("/api/settings/", json={"trucks": {"over_order_pct": 10}})
    resp = client.post("/api/settings/reset")
    assert resp.json()["trucks"]["over_order_pct"] == 5.0


def test_patch_density(client):
    resp = client.patch("/api/settings/materials/rock", json={"value": 1.62})
    assert resp.status_code == 200
    assert resp.json()["materials"]["rock"] == pytest.approx(1.6)


def test_patch_concrete_density_rejected(client):
    resp = client.patch("/api/settings/materials/concrete", json={"value": 2.0})
    assert resp.status_code == 400


def test_patch_unknown_material(client):
    resp = client.patch("/api/settings/materials/gravel", json={"value": 1.4})
    assert resp.status_code == 422


# ============================================================
# Calculator
# ============================================================

def test_shapes_for_rock(client):
    resp = client.get("/api/calculator/shapes", params={"material": "rock"})
    assert resp.status_code == 200
    shapes = {item["shape"]: item["label"] for item in resp.json()}
    assert "wall" not in shapes
    assert shapes["slab"] == "Pad / Area"


def test_volume_slab(client):
    resp = client.post("/api/calculator/volume", json={
        "shape": "slab",
        "fields": {"length": 10, "width": 10, "thickness": 4},
        "material": "concrete",
        "waste_pct": 5,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["display"] == "1.30 yd³"
    assert data["cubic_yards"] == pytest.approx(35.0 / 27)


def test_volume_wall_not_for_rock(client):
    resp = client.post("/api/calculator/volume", json={
        "shape": "wall", "fields": {"length": 10, "height": 8, "thickness": 8}, "material": "rock",
    })
    assert resp.status_code == 400


def test_loads_rock_example(client):
    resp = client.post("/api/calculator/loads", json={
        "total_yards": 10, "material": "rock", "truck_capacity": 9,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["display_yards"] == pytest.approx(10.5)
    assert data["trucks"] == 2
    assert data["remainder_text"] == "Last load: 1.50 yd³"
    assert data["tons_text"] == "Estimated: 14.2 tons"


def test_loads_follow_settings_policy(client):
    client.put("/api/settings/", json={"rounding": {"loads_default": "down"}})
    resp = client.post("/api/calculator/loads", json={
        "total_yards": 10, "material": "rock", "truck_capacity": 9, "round_up": True,
    })
    data = resp.json()
    assert data["trucks"] == 1
    assert data["remainder_label"] == "unassigned"


def test_loads_negative_total_rejected(client):
    resp = client.post("/api/calculator/loads", json={"total_yards": -1})
    assert resp.status_code == 422


def test_pour_add_and_clear(client):
    resp = client.post("/api/calculator/pour/add", json={"volume": {
        "shape": "slab",
        "fields": {"length": 10, "width": 10, "thickness": 4},
        "material": "concrete",
        "waste_pct": 5,
    }})
    assert resp.status_code == 200
    assert resp.json()["total_yards"] == pytest.approx(35.0 / 27)

    resp = client.post("/api/calculator/pour/add", json={"cubic_yards": 1})
    assert resp.json()["total_yards"] == pytest.approx(35.0 / 27 + 1)

    resp = client.post("/api/calculator/pour/clear")
    assert resp.json()["total_yards"] == 0.0
    assert resp.json()["totals"]["trucks"] == 0


def test_pour_add_concrete_only_shape_rejected(client):
    resp = client.post("/api/calculator/pour/add", json={"volume": {
        "shape": "curb", "fields": {"curb_type": "curb_6x12", "length": 10}, "material": "sand",
    }})
    assert resp.status_code == 400


def test_resync_picks_up_new_capacity(client):
    resp = client.post("/api/calculator/pour/add", json={"cubic_yards": 10})
    assert resp.json()["totals"]["trucks"] == 1

    client.put("/api/settings/", json={"trucks": {"default_capacity": 9}})
    resp = client.post("/api/calculator/resync")
    assert resp.status_code == 200
    assert resp.json()["totals"]["trucks"] == 2
    assert resp.json()["total_yards"] == pytest.approx(10.0)


# ============================================================
# Converter
# ============================================================

def test_tape_engineer_side(client):
    resp = client.post("/api/converter/tape", json={"decimal_feet": "1.02", "round_up": True})
    assert resp.status_code == 200
    data = resp.json()
    assert data["pretty"] == "1' 0 1/4\""
    assert data["last_edited"] == "engineer"


def test_tape_tape_side(client):
    resp = client.post("/api/converter/tape", json={"side": "tape", "feet": "5", "inches": "6"})
    data = resp.json()
    assert data["engineer"] == "5.5"
    assert data["pretty"] == "5' 6\""


def test_tape_uses_saved_precision(client):
    client.put("/api/settings/", json={"rounding": {"frac_precision": 4}})
    resp = client.post("/api/converter/tape", json={"decimal_feet": "1.01"})
    assert resp.json()["pretty"] == "1' 0\""


def test_slope(client):
    resp = client.post("/api/converter/slope", json={"grade": "10", "run": "20"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["rise"] == "2.00"
    assert data["derived"] == "rise"
    assert data["auto_fields"] == ["rise"]


def test_tons(client):
    resp = client.post("/api/converter/tons", json={"yards": "10", "material": "rock"})
    assert resp.json() == {"tons": pytest.approx(13.5), "display": "13.5 tons"}

    resp = client.post("/api/converter/tons", json={"yards": "10", "material": "concrete"})
    assert resp.json()["tons"] is None


# ============================================================
# Oversized input
# ============================================================

def test_volume_with_huge_dimensions(client):
    resp = client.post("/api/calculator/volume", json={
        "shape": "slab", "fields": {"length": "1e20", "width": "1e10", "thickness": "12"},
    })
    assert resp.status_code == 200
    assert resp.json()["display"].endswith(" yd³")


def test_volume_overflow_resets(client):
    resp = client.post("/api/calculator/volume", json={
        "shape": "slab", "fields": {"length": "1e200", "width": "1e200", "thickness": "4"},
    })
    assert resp.status_code == 200
    assert resp.json()["display"] == "0.00 yd³"


def test_slope_overflow(client):
    resp = client.post("/api/converter/slope", json={"rise": "1e307", "run": "1e-10"})
    assert resp.status_code == 200
    assert resp.json()["grade"] == ""


def test_tape_overflow(client):
    resp = client.post("/api/converter/tape", json={"decimal_feet": "1e308"})
    assert resp.status_code == 200
    assert resp.json()["pretty"] == "—"
