import math

import pytest

from propatten.earth_space_cloud import cloud_attenuation

BASE = dict(ts=288.15, ps=1013.0, rho0=7.5, rain_h=1000.0, f=30.0)


def run(h1, h2, theta0, lw=1.0, **overrides):
    params = dict(BASE, **overrides)
    return cloud_attenuation(params["ts"], params["ps"], params["rho0"], params["rain_h"],
                             h1, h2, params["f"], theta0, lw)


def test_both_platforms_below_rain_top_give_zero():
    assert run(100.0, 500.0, 30.0) == 0.0


def test_both_platforms_above_cloud_top_give_zero():
    assert run(7000.0, 9000.0, 30.0) == 0.0


def test_cloud_fraction_scales_attenuation():
    inside = run(2000.0, 4000.0, 30.0)
    through_top = run(2000.0, 7000.0, 30.0)
    assert inside > 0
    assert through_top == pytest.approx(2 * inside)


def test_equal_heights_use_full_liquid_water():
    partial = run(2000.0, 4000.0, 30.0)
    full = run(2000.0, 2000.0, 30.0)
    assert full == pytest.approx(2.5 * partial)


def test_order_of_platforms_does_not_change_water_fraction():
    assert run(4000.0, 2000.0, 30.0) == pytest.approx(run(2000.0, 4000.0, 30.0))


def test_elevation_dependence_is_cosecant():
    low = run(2000.0, 4000.0, 30.0)
    high = run(2000.0, 4000.0, 90.0)
    assert low / high == pytest.approx(1 / math.sin(math.radians(30.0)), rel=1e-6)


def test_linear_in_liquid_water_at_low_elevation():
    single = run(2000.0, 2000.0, 3.0, lw=1.0)
    double = run(2000.0, 2000.0, 3.0, lw=2.0)
    assert single > 0
    assert double == pytest.approx(2 * single)


def test_low_elevation_reduces_to_long_path():
    low = run(2000.0, 2000.0, 3.0)
    assert low > run(2000.0, 2000.0, 30.0)


def test_attenuation_grows_with_frequency():
    assert run(2000.0, 4000.0, 30.0, f=40.0) > run(2000.0, 4000.0, 30.0, f=20.0)


def test_station_below_rain_top_uses_refracted_elevation():
    value = run(500.0, 3000.0, 30.0)
    assert value > 0
    assert math.isfinite(value)