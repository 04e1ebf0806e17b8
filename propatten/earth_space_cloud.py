"""Cloud attenuation on slant paths between two platforms."""

from __future__ import annotations

import math

_PI = 3.1415926
_CLOUD_TEMPERATURE = 273.15
_CLOUD_TOP_KM = 6.0
_EQUIVALENT_EARTH_RADIUS_KM = 8500.0
_EARTH_RADIUS_M = 6371000.0


def _rad(degrees: float) -> float:
    return degrees * _PI / 180


def _refractive_index(ts: float, ps: float, rho0: float, height_km: float) -> float:
    temperature = ts - 6.5 * height_km
    pressure = ps * (ts / (ts - 6.5 * height_km)) ** (-34.163 / 6.5)
    density = rho0 * math.exp(-height_km * 0.5)
    vapour = density * temperature / 216.7
    refractivity = 77.6 / temperature * (pressure + 4810.0 * vapour / temperature)
    return 1 + refractivity * 1e-6


def _liquid_water_coefficient(f: float) -> float:
    """Specific attenuation coefficient (dB/km per g/m^3) of cloud liquid water."""
    theta = 300 / _CLOUD_TEMPERATURE
    e0 = 77.6 + 103.3 * (theta - 1)
    e1 = 5.48
    e2 = 3.51
    fp = 20.09 - 142.4 * (theta - 1) + 294 * (theta - 1) ** 2
    fs = 590 - 1500 * (theta - 1)
    fpp = (f / fp) ** 2
    fss = (f / fs) ** 2
    real = (e0 - e1) / (1 + fpp) + (e1 - e2) / (1 + fss) + e2
    imag = f * (e0 - e1) / (fp * (1 + fpp)) + f * (e1 - e2) / (fs * (1 + fss))
    eta = (2 + real) / imag
    return 0.819 * f / (imag * (1 + eta ** 2))


def _water_in_path(lower: float, upper: float, rain_h: float, lw: float):
    """Liquid water and effective thickness between a lower and an upper platform."""
    cloud_h = _CLOUD_TOP_KM
    if lower > cloud_h and upper > cloud_h:
        return 0.0, cloud_h - rain_h
    if lower < rain_h and upper < rain_h:
        return 0.0, cloud_h - rain_h
    if lower < rain_h < upper < cloud_h:
        return (upper - rain_h) / (cloud_h - rain_h) * lw, upper - rain_h
    if rain_h <= lower <= cloud_h and rain_h <= upper <= cloud_h:
        return (upper - lower) / (cloud_h - rain_h) * lw, upper - lower
    if rain_h < lower < cloud_h < upper:
        return (cloud_h - lower) / (cloud_h - rain_h) * lw, cloud_h - lower
    return lw, cloud_h - rain_h


def cloud_attenuation(ts: float, ps: float, rho0: float, rain_h: float, plat_h1: float,
                      plat_h2: float, f: float, theta0: float, lw: float) -> float:
    """Cloud attenuation (dB) on the path between two platforms.

    ``ts`` (K), ``ps`` (hPa) and ``rho0`` (g/m^3) are surface values;
    ``rain_h``, ``plat_h1`` and ``plat_h2`` are the rain-top and platform
    heights in metres; ``f`` in GHz, ``theta0`` elevation in degrees and
    ``lw`` the columnar liquid water (kg/m^2). The cloud lies between the
    rain top and 6 km. Raises ValueError when the refracted elevation at the
    rain top has no real value.
    """
    rain_km = rain_h / 1000
    h1 = plat_h1 / 1000
    h2 = plat_h2 / 1000

    coefficient = _liquid_water_coefficient(f)
    if h2 > h1:
        water, thickness = _water_in_path(h1, h2, rain_km, lw)
    elif h2 < h1:
        water, thickness = _water_in_path(h2, h1, rain_km, lw)
    else:
        water, thickness = lw, _CLOUD_TOP_KM - rain_km

    if h1 < rain_km:
        n_top = _refractive_index(ts, ps, rho0, rain_km)
        n_station = _refractive_index(ts, ps, rho0, h1)
        cos_refracted = (n_station * (_EARTH_RADIUS_M + h1 * 1000) * math.cos(_rad(theta0))
                         / (n_top * (_EARTH_RADIUS_M + h2 * 1000)))
        if not -1.0 <= cos_refracted <= 1.0:
            raise ValueError("refracted elevation at the rain top is undefined")
        path_elevation = math.acos(cos_refracted) * 180 / _PI
    else:
        path_elevation = theta0

    sin_elev = math.sin(_rad(path_elevation))
    if theta0 >= 5:
        return coefficient * water / sin_elev
    water = 2 * water / (math.sqrt(sin_elev * sin_elev
                                   + 2 * thickness / _EQUIVALENT_EARTH_RADIUS_KM) + sin_elev)
    return coefficient * water