import math

import pytest

from propatten.fading import fade_depth, interpolated_fade, scintillation_fade

ATMOS = dict(ts=288.15, rho0=7.5)


def scint(p0, theta=30.0, season=1, lat=36.0, f=10.0, d=1.0, eta=0.5):
    return scintillation_fade(season, ATMOS["ts"], ATMOS["rho0"], lat, theta, f, p0, d, eta)


def interp(pout, theta=30.0):
    return interpolated_fade(1, ATMOS["ts"], ATMOS["rho0"], 36.0, theta, 10.0, pout, 1.0, 0.5)


def test_high_elevation_keeps_probability():
    result = scint(1.0)
    assert result.probability == 1.0
    assert result.attenuation > 0


def test_high_elevation_fade_decreases_with_time_percentage():
    assert scint(0.01).attenuation > scint(1.0).attenuation > scint(10.0).attenuation


def test_time_factor_ratio_between_one_and_ten_percent():
    ratio = scint(1.0).attenuation / scint(10.0).attenuation
    assert ratio == pytest.approx(3.0 / 1.301)


def test_high_elevation_fade_grows_with_frequency():
    assert scint(1.0, f=20.0).attenuation > scint(1.0, f=10.0).attenuation


def test_low_elevation_reports_mapped_probability():
    result = scint(1.0, theta=2.0)
    assert math.isfinite(result.attenuation)
    assert 0 < result.probability < 100
    assert result.probability != 1.0


def test_low_elevation_unknown_season_raises():
    with pytest.raises(ValueError):
        scint(1.0, theta=2.0, season=7)


def test_interpolated_exact_grid_point_matches_direct():
    assert interp(99.0) == pytest.approx(scint(1.0).attenuation)


def test_interpolated_between_grid_points_is_bracketed():
    low = scint(1.0).attenuation
    high = scint(0.5).attenuation
    value = interp(99.25)
    assert low < value < high


def test_interpolated_beyond_grid_uses_nearest():
    assert interp(99.9995) == pytest.approx(scint(0.001).attenuation)


def test_fade_depth_zero_when_exceeded_often():
    assert fade_depth(7.5, 288.15, 1, 10.0, 36.0, 30.0, 10.0, 40.0, 1.0, 0.5) == 0.0


def test_fade_depth_high_elevation_matches_scintillation():
    value = fade_depth(7.5, 288.15, 1, 10.0, 36.0, 30.0, 10.0, 99.0, 1.0, 0.5)
    assert value == pytest.approx(scint(1.0).attenuation)


def test_fade_depth_low_elevation_is_positive():
    value = fade_depth(7.5, 288.15, 1, 10.0, 36.0, 2.0, 10.0, 99.0, 1.0, 0.5)
    assert math.isfinite(value)
    assert value > 0


def test_fade_depth_low_elevation_unknown_season_raises():
    with pytest.raises(ValueError):
        fade_depth(7.5, 288.15, 0, 10.0, 36.0, 2.0, 10.0, 99.0, 1.0, 0.5)