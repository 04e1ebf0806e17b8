"""Scintillation and multipath fading on low- and high-elevation earth-space links."""

from __future__ import annotations

import math
from typing import NamedTuple

_PI = 3.1415926
_SEASON_FACTORS = {1: 20.0, 2: 5.0, 3: 5.0, 4: 1.0}
_REFERENCE_FADE = 25.0
_PROBABILITY_GRID = (
    99.999, 99.998, 99.997, 99.995, 99.99, 99.98, 99.97, 99.95, 99.9, 99.8, 99.7,
    99.5, 99, 98, 97, 95, 90, 80, 70, 60, 50, 30, 20, 10, 5, 3, 2, 1, 0.5, 0.3, 0.2,
    0.1, 0.05, 0.03, 0.02, 0.01, 0.005, 0.003, 0.002, 0.001)


class FadeResult(NamedTuple):
    """Fade depth (dB) and the time percentage it applies to."""

    attenuation: float
    probability: float


def _rad(degrees: float) -> float:
    return degrees * _PI / 180


def _season_factor(season: int) -> float:
    try:
        return _SEASON_FACTORS[season]
    except KeyError:
        raise ValueError(f"unknown season {season}") from None


def _latitude_correction(lat: float) -> float:
    if lat <= 53:
        return 0.0
    if lat < 60:
        return lat - 53
    return 7.0


def _wet_refractivity(rho0: float, ts: float) -> float:
    vapour = rho0 * ts / 216.7
    return 3.732e5 * vapour / (ts * ts)


def _path_length(theta: float) -> float:
    sin_theta = math.sin(_rad(theta))
    return 2 * 1000 / (math.sqrt(sin_theta ** 2 + 2.35e-4) + sin_theta)


def _averaging_factor(x: float) -> float:
    value = 3.86 * (x * x + 1.0) ** (11.0 / 12.0) * math.sin(math.atan(1.0 / x) * 11.0 / 6.0) \
        - 7.08 * x ** (5.0 / 6.0)
    if value < 0:
        raise ValueError("antenna averaging factor is undefined for this aperture")
    return math.sqrt(value)


def _time_factor(p0: float) -> float:
    lg = math.log10(p0)
    return -0.061 * lg ** 3 + 0.072 * lg ** 2 - 1.71 * lg + 3.0


def _tropospheric_scintillation(rho0: float, ts: float, theta: float, f: float,
                                p0: float, d: float, eta: float) -> float:
    sigma_ref = 3.6e-3 + 1e-4 * _wet_refractivity(rho0, ts)
    diameter = math.sqrt(eta) * d
    x = 1.22 * diameter ** 2 * f / _path_length(theta)
    sigma = sigma_ref * f ** (7.0 / 12.0) * _averaging_factor(x) \
        / math.sin(_rad(theta)) ** 1.2
    return _time_factor(p0) * sigma


def _geoclimatic(season: int, lat: float) -> float:
    return _season_factor(season) ** 1.5 * 10 ** (0.1 * (76 + _latitude_correction(lat)))


def _latitude_term(lat: float) -> float:
    cos_term = abs(math.cos(2 * lat * _PI / 180)) ** 0.7
    if lat <= 45:
        return -1.8 - 5.6 * math.log10(1.1 + cos_term)
    return -1.8 - 5.6 * math.log10(1.1 - cos_term)


def _shape_factor(kw_term: float, f: float, theta_m: float, at: float,
                  a63: float, angle: float):
    pt = kw_term * f ** 0.9 * (1 + theta_m) ** -5.5 * 10 ** (-at / 10)
    p = 10 ** (-0.1 * a63 + math.log10(pt))
    qq = -20 * math.log10(-math.log((100 - p) / 100)) / at
    s0 = -1.6 - 3.2 * math.log10(f) + 4.2 * angle
    qt = (qq - 2) / ((1 + 0.3 * 10 ** (-at / 20)) * 10 ** (-0.016 * at)) \
        - s0 * (10 ** (-at / 20) + at / 800)
    return qt, s0


def scintillation_fade(season: int, ts: float, rho0: float, lat: float, theta: float,
                       f: float, p0: float, d: float, eta: float) -> FadeResult:
    """Fade depth exceeded for ``p0`` % of time and the percentage it maps to.

    Below 5 degrees elevation the multipath/scintillation model is used and
    the returned probability may differ from ``p0``; above it the tropospheric
    scintillation model applies. ``season`` is 1 winter, 2 spring, 3 summer,
    4 autumn; ``ts`` surface temperature (K), ``rho0`` vapour density
    (g/m^3), ``lat`` and ``theta`` in degrees, ``f`` in GHz, ``d`` antenna
    diameter (m) and ``eta`` its efficiency.
    Raises ValueError for an unknown season on a low-elevation path.
    """
    if theta >= 5:
        return FadeResult(_tropospheric_scintillation(rho0, ts, theta, f, p0, d, eta), p0)

    theta_m = theta * 1000 * _PI / 180
    angle = math.log10(1 + theta_m)
    a63 = 2.27 - 1.16 * angle
    kw = _geoclimatic(season, lat)
    dg = _latitude_term(lat) + 4.5 * angle
    gw = 10 * math.log10(kw) - 92 - dg
    attenuation = gw + 92 + 9 * math.log10(f) - 55 * angle - 10 * math.log10(p0)
    probability = p0

    at = _REFERENCE_FADE
    if attenuation < a63 + at:
        qt, s0 = _shape_factor(kw * 10 ** (-0.1 * dg), f, theta_m, at, a63, angle)
        if qt < 0:
            at = 35.0
            qt, s0 = _shape_factor(kw, f, theta_m, at, a63, angle)
        excess = attenuation - a63
        if excess > 0:
            q = 2 + 10 ** (-0.016 * excess) * (1 + 0.3 * 10 ** (-excess / 20)) \
                * (qt + s0 * (10 ** (-excess / 20) + excess / 800))
            probability = 100 * (1 - math.exp(-10 ** (-q * excess / 20)))
        else:
            enhancement = -excess
            a001 = gw + 92 + 9 * math.log10(f) - 55 * angle - 10 * math.log10(0.01)
            if enhancement > 10:
                probability = 10 ** ((-1.7 + 0.2 * a001 - enhancement) / 3.5)
            elif enhancement > 0:
                pw1 = 100 - 10 ** ((-1.7 + 0.2 * a001 - 10) / 3.5)
                qe1 = -20 * math.log10(-math.log(1 - (100 - pw1) / 58.21)) / 10
                qs = 2.05 * qe1 - 20.3
                qe = 8 + (1 + 0.3 * 10 ** (-enhancement / 20)) \
                    * 10 ** (-0.7 * enhancement / 20) \
                    * (qs + 12 * (10 ** (-enhancement / 20) + enhancement / 800))
                probability = 58.21 * (1 - math.exp(-10 ** (-qe * enhancement / 20)))
            attenuation = -enhancement
    return FadeResult(attenuation, probability)


def interpolated_fade(season: int, ts: float, rho0: float, lat: float, theta: float,
                      f: float, pout: float, d: float, eta: float) -> float:
    """Fade depth (dB) not exceeded for ``pout`` % of time.

    The fade is evaluated on a fixed grid of time percentages and
    interpolated linearly; outside the grid the nearest entry is used.
    """
    probabilities = list(_PROBABILITY_GRID)
    fades = [0.0] * len(probabilities)
    result = 0.0
    found = False
    for index, p0 in enumerate(_PROBABILITY_GRID):
        fade, new_p = scintillation_fade(season, ts, rho0, lat, theta, f, p0, d, eta)
        fades[index] = fade
        probabilities[index] = new_p
        if 100 - pout == new_p:
            result = fade
            found = True
            break

    for (p_prev, a_prev), (p_cur, a_cur) in zip(zip(probabilities, fades),
                                                zip(probabilities[1:], fades[1:])):
        if 100 - p_prev < pout < 100 - p_cur:
            result = (a_cur - a_prev) * (pout - 100 + p_prev) / (p_prev - p_cur) + a_prev
            found = True
            break

    if not found:
        _, result = min(((abs(100 - p - pout), fade)
                         for p, fade in zip(probabilities, fades)),
                        key=lambda pair: pair[0])
    return result


def fade_depth(rho0: float, ts: float, season: int, hs: float, lat: float, theta: float,
               f: float, p0: float, d: float, eta: float) -> float:
    """Scintillation/multipath fade (dB) not exceeded for ``p0`` % of time.

    Zero when the fade is exceeded more than 50 % of time. Below 5 degrees the
    deep-fade model is joined smoothly to the scintillation model at 5 degrees;
    ``hs`` is the station height in metres. Other units as in
    :func:`scintillation_fade`. Raises ValueError for an unknown season on a
    low-elevation path.
    """
    exceeded = 100 - p0
    if exceeded > 50:
        return 0.0
    if theta >= 5:
        return _tropospheric_scintillation(rho0, ts, theta, f, exceeded, d, eta)

    sigma_ref = 3.6e-3 + 1e-4 * _wet_refractivity(rho0, ts)
    diameter = math.sqrt(eta) * d
    kw = _geoclimatic(season, lat)
    v = _latitude_term(lat)
    theta_m = theta * 1000 * _PI / 180
    attenuation = 10 * math.log10(kw) - v + 9 * math.log10(f) \
        - 59 * math.log10(1 + theta_m) - 10 * math.log10(exceeded)
    a1 = _REFERENCE_FADE
    if attenuation >= a1:
        return attenuation

    theta1 = (kw * 10 ** (-0.1 * v) * f ** 0.9 / (exceeded * 10 ** (a1 / 10))) ** 0.1681 - 1
    a11 = -59.5 * math.log10(2.7183) / (1 + theta1)

    five = _rad(5)
    sin5 = math.sin(five)
    x5 = 1.22 * diameter ** 2 * f / _path_length(5)
    gx5 = _averaging_factor(x5)
    a2 = _time_factor(exceeded) * sigma_ref * f ** (7.0 / 12.0) * gx5 / sin5 ** 1.2

    cc = math.atan(1 / x5) * 11 / 6
    x_sq = x5 * x5 + 1
    dgg = (1770 * x_sq + 2123 * x5 ** 0.1667 * x_sq ** 0.9167 * (math.cos(cc) - x5 * math.sin(cc))) \
        / (12 * x5 ** 0.1667 * x_sq * (354 * x5 ** 0.8333 - 193 * x_sq ** 0.9167 * math.sin(cc)))
    dxth = 1.22 * diameter * diameter * f * math.cos(five) \
        * (sin5 / math.sqrt(sin5 ** 2 + 2.35e-4) + 1) / (2 * 1000)
    a21 = a2 * (dgg * dxth - 1.2 / math.tan(five)) / 1000

    refraction = 1 / (1.728 + 0.5411 * 5 + 0.03723 * 25
                      + hs / 1000 * (0.1815 + 0.06272 * 5 + 0.0138 * 25)
                      + hs * hs * (0.01727 + 0.008288 * 5) / 1000000)
    theta2 = (5 + refraction) * 1000 * _PI / 180

    span = theta2 - theta1
    alpha = a11 / a1
    beta = (math.log(a2 / a1) - alpha * span) / span ** 2
    gamma = (a21 - a2 * (alpha + 2 * beta * span)) / (a2 * span * span)
    offset = theta_m - theta1
    return a1 * math.exp(alpha * offset + beta * offset ** 2
                         + gamma * offset ** 2 * (theta_m - theta2))