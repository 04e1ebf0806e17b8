"""Rain attenuation on earth-space slant paths from the 0.01 % rain rate."""

from __future__ import annotations

import math
from typing import NamedTuple

from .rain import specific_attenuation

_PI = 3.1415926
_EQUIVALENT_EARTH_RADIUS_KM = 8500.0
_TILT_BY_POLARISATION = {0: 0.0, 1: 90.0, 2: 45.0}


class RainLaw(NamedTuple):
    """Power-law coefficients k and alpha of specific rain attenuation."""

    k: float
    alpha: float


def _rad(degrees: float) -> float:
    return degrees * _PI / 180.0


def rain_coefficients(f: float, theta0: float, tau: float) -> RainLaw:
    """Coefficients k and alpha at ``f`` GHz for path elevation ``theta0`` and
    polarisation tilt ``tau`` (both degrees)."""
    coefficients = specific_attenuation(theta0, tau, f, 1.0)
    return RainLaw(coefficients.k, coefficients.alpha)


def earth_space_rain_attenuation(lats: float, theta0: float, ipol: int, f: float,
                                 hs: float, hr: float, ha: float, r001: float,
                                 p: float) -> float:
    """Rain attenuation (dB) exceeded on the slant path to an airborne platform.

    ``lats`` is the station latitude and ``theta0`` the elevation (degrees),
    ``ipol`` the polarisation (0 horizontal, 1 vertical, 2 circular), ``f`` the
    frequency in GHz, ``hs``, ``hr`` and ``ha`` the station, rain-top and
    platform heights in metres, ``r001`` the rain rate exceeded for 0.01 % of
    time (mm/h) and ``p`` the percentage of time the attenuation is not
    exceeded. Attenuation is zero when it is exceeded more than 5 % of time.
    Raises ValueError for an unknown polarisation or a probability of 100 %.
    """
    exceeded = 100 - p
    if exceeded > 5:
        return 0.0
    if exceeded <= 0:
        raise ValueError(f"time percentage {p} leaves no exceedance probability")
    try:
        tilt = _TILT_BY_POLARISATION[int(ipol)]
    except KeyError:
        raise ValueError(f"unknown polarisation {ipol}") from None

    hs_km = hs / 1000
    ha_km = ha / 1000
    hr_km = min(hr / 1000, ha_km)

    k, alpha = rain_coefficients(f, theta0, tilt)
    specific = k * r001 ** alpha

    sin_theta = math.sin(_rad(theta0))
    cos_theta = math.cos(_rad(theta0))
    depth = hr_km - hs_km
    if theta0 >= 5:
        slant = depth / sin_theta
    else:
        slant = 2 * depth / (
            math.sqrt(sin_theta ** 2 + 2 * depth / _EQUIVALENT_EARTH_RADIUS_KM) + sin_theta
        )
    ground = slant * cos_theta

    horizontal = 1 / (1 + 0.78 * math.sqrt(ground * specific / f)
                      - 0.38 * (1 - math.exp(-2 * ground)))
    chi = 36 - lats if lats < 36 else 0.0
    kesi = math.atan(depth / (ground * horizontal)) * 180.0 / _PI
    if kesi > theta0:
        path = ground * horizontal / cos_theta
    else:
        path = depth / sin_theta

    vertical = 1.0 / (1.0 + math.sqrt(sin_theta) * (
        31.0 * (1.0 - math.exp(-theta0 / (1.0 + chi))) * math.sqrt(path * specific) / f ** 2
        - 0.45))
    a001 = specific * path * vertical

    if exceeded >= 1 or lats >= 36:
        beta = 0.0
    elif theta0 >= 25:
        beta = -0.005 * (lats - 36.0)
    else:
        beta = -0.005 * (lats - 36.0) + 1.8 - 4.25 * sin_theta

    exponent = -(0.655 + 0.033 * math.log(exceeded) - 0.045 * math.log(a001)
                 - beta * (1.0 - exceeded) * sin_theta)
    return a001 * (exceeded / 0.01) ** exponent