"""Atmospheric gas absorption: line-by-line specific attenuation and layered slant paths."""

from __future__ import annotations

import math

_PI = 3.1415926
_EARTH_RADIUS_KM = 6371.0
_MAX_LAYERS = 1000
_HIGH_BAND_FREQUENCY = 118.750343
_HIGH_BAND_FIRST_LINE = 19

_OXYGEN_FREQUENCIES = (
    50.474238, 50.987749, 51.503350, 52.02141, 52.542394, 53.066907, 53.595749, 54.13,
    54.671159, 55.221367, 55.783802, 56.264775, 56.363389, 56.968206, 57.612484,
    58.323877, 58.44659, 59.164207, 59.590983, 60.306061, 60.434776, 61.15056,
    61.800154, 62.411215, 62.48626, 62.997977, 63.568518, 64.127767, 64.678903,
    65.224071, 65.764772, 66.302091, 66.83683, 67.369598, 67.900867, 68.431005,
    68.960311, 118.750343, 368.498350, 424.763124, 487.249370, 715.393150,
    773.839675, 834.14533)
_OXYGEN_A1 = (
    0.94, 2.46, 6.08, 14.14, 31.02, 64.10, 124.7, 228.00, 391.80, 631.6, 953.5, 548.9,
    1344.00, 1763.00, 2141.00, 2386.0, 1457.0, 2404.0, 2112.0, 2124.0, 2461.0, 2504.0,
    2298.0, 1933.0, 1517.0, 1503.0, 1087.0, 733.0, 463.0, 274.0, 153.0, 80.09, 39.46,
    18.32, 8.01, 3.30, 1.28, 945.0, 67.9, 638.0, 235.0, 99.60, 671.0, 180.0)
_OXYGEN_A2 = (
    9.694, 8.694, 7.744, 6.844, 6.004, 5.224, 4.484, 3.814, 3.194, 2.624, 2.119, 0.015,
    1.66, 1.26, 0.915, 0.626, 0.084, 0.391, 0.212, 0.212, 0.391, 0.626, 0.915, 1.26,
    0.083, 1.665, 2.115, 2.62, 3.195, 3.815, 4.485, 5.225, 6.005, 6.845, 7.745, 8.695,
    9.695, 0.009, 0.049, 0.044, 0.049, 0.145, 0.13, 0.147)
_OXYGEN_A3 = (
    8.9, 9.1, 9.4, 9.7, 9.9, 10.2, 10.5, 10.7, 11, 11.3, 11.7, 17.3, 12.0, 12.4, 12.8,
    13.3, 15.2, 13.9, 14.3, 14.5, 13.6, 13.1, 12.7, 12.3, 15.4, 12.0, 11.7, 11.3, 11.0,
    10.7, 10.5, 10.2, 9.9, 9.7, 9.4, 9.2, 9.0, 16.3, 19.2, 19.3, 19.2, 18.1, 18.2, 18.1)
_OXYGEN_A4 = (0.0,) * 38 + (0.6,) * 6
_OXYGEN_A5 = (
    2.4, 2.2, 1.97, 1.66, 1.36, 1.31, 2.3, 3.35, 3.74, 2.58, -1.66, 3.90, -2.97, -4.16,
    -6.13, -2.05, 7.48, -7.22, 7.65, -7.05, 6.97, 1.04, 5.7, 3.6, -4.98, 2.39, 1.08,
    -3.11, -4.21, -3.75, -2.67, -1.68, -1.69, -2.0, -2.28, -2.40, -2.5, -0.36,
    0, 0, 0, 0, 0, 0)
_OXYGEN_A6 = (
    7.9, 7.8, 7.74, 7.64, 7.51, 7.14, 5.84, 4.31, 3.05, 3.39, 7.05, -1.13, 7.53, 7.42,
    6.97, 0.51, -1.46, 2.66, -0.9, 0.81, -3.24, -0.67, -7.61, -7.77, 0.97, -7.68,
    -7.06, -3.32, -2.98, -4.23, -5.75, -7.0, -7.35, -7.44, -7.53, -7.6, -7.65, 0.09,
    0, 0, 0, 0, 0, 0)
_OXYGEN_LINES = tuple(zip(_OXYGEN_FREQUENCIES, _OXYGEN_A1, _OXYGEN_A2, _OXYGEN_A3,
                          _OXYGEN_A4, _OXYGEN_A5, _OXYGEN_A6))

_WATER_FREQUENCIES = (
    22.23508, 67.80396, 119.99594, 183.310091, 321.225644, 325.152919, 336.222601,
    380.197372, 390.134508, 437.346667, 439.150812, 443.018295, 448.001075,
    470.888947, 474.689127, 488.491133, 503.569532, 504.482692, 547.67644, 552.02096,
    556.936002, 620.700807, 645.866155, 658.00528, 752.033227, 841.053973,
    859.962313, 899.306675, 902.616173, 906.207325, 916.171582, 923.118427,
    970.315022, 987.926764, 1780.0)
_WATER_B1 = (
    0.113, 0.0012, 0.0008, 2.42, 0.0483, 1.499, 0.0011, 11.52, 0.0046, 0.065, 0.9218,
    0.1976, 10.32, 0.3297, 1.262, 0.252, 0.039, 0.013, 9.701, 14.77, 487.4, 5.012,
    0.0713, 0.3022, 239.6, 0.014, 0.1472, 0.0605, 0.0426, 0.1876, 8.34, 0.0869, 8.972,
    132.1, 22300.0)
_WATER_B2 = (
    2.143, 8.735, 8.356, 0.668, 6.181, 1.54, 9.829, 1.048, 7.35, 5.05, 3.596, 5.05,
    1.405, 3.599, 2.381, 2.853, 6.733, 6.733, 0.114, 0.114, 0.159, 2.20, 8.58, 7.82,
    0.396, 8.18, 7.989, 7.917, 8.432, 5.111, 1.442, 10.22, 1.92, 0.258, 0.952)
_WATER_B3 = (
    28.11, 28.58, 29.48, 30.50, 23.03, 27.83, 26.93, 28.73, 21.52, 18.45, 21.00, 18.60,
    26.32, 21.52, 23.55, 26.02, 16.12, 16.12, 26.00, 26.00, 32.10, 24.38, 18.00, 32.10,
    30.6, 15.9, 30.6, 29.85, 28.65, 24.08, 26.7, 29.0, 25.5, 29.85, 176.2)
_WATER_B4 = (
    0.69, 0.69, 0.7, 0.64, 0.67, 0.68, 0.69, 0.54, 0.63, 0.6, 0.63, 0.6, 0.66, 0.66,
    0.65, 0.69, 0.61, 0.61, 0.7, 0.7, 0.69, 0.71, 0.6, 0.69, 0.68, 0.33, 0.68, 0.68,
    0.7, 0.7, 0.7, 0.7, 0.64, 0.68, 0.5)
_WATER_B5 = (
    4.8, 4.93, 4.78, 5.3, 4.69, 4.85, 4.74, 5.38, 4.81, 4.23, 4.29, 4.23, 4.84, 4.57,
    4.65, 5.04, 3.89, 4.01, 4.5, 4.5, 4.11, 4.68, 4.0, 4.14, 4.09, 5.76, 4.09, 4.53,
    5.1, 4.7, 4.78, 5.0, 4.94, 4.55, 30.5)
_WATER_B6 = (
    1.0, 0.82, 0.79, 0.85, 0.54, 0.74, 0.61, 0.89, 0.55, 0.48, 0.52, 0.5, 0.67, 0.65,
    0.64, 0.72, 0.43, 0.45, 1.0, 1.0, 1.0, 0.68, 0.5, 1.0, 0.84, 0.45, 0.84, 0.9, 0.95,
    0.53, 0.78, 0.8, 0.67, 0.9, 1.0)
_WATER_LINES = tuple(zip(_WATER_FREQUENCIES, _WATER_B1, _WATER_B2, _WATER_B3,
                         _WATER_B4, _WATER_B5, _WATER_B6))


def specific_gas_attenuation(freq: float, t: float, rho: float, p: float) -> float:
    """Specific attenuation (dB/km) of oxygen and water vapour.

    ``freq`` in GHz, temperature ``t`` in K, water-vapour density ``rho`` in
    g/m^3 and total pressure ``p`` in hPa.
    """
    theta = 300 / t
    vapour = rho * t / 216.7
    dry = p - vapour

    lines = _OXYGEN_LINES if freq <= _HIGH_BAND_FREQUENCY else _OXYGEN_LINES[_HIGH_BAND_FIRST_LINE:]
    oxygen = 0.0
    for f0, a1, a2, a3, a4, a5, a6 in lines:
        width = a3 * 1e-4 * (dry * theta ** (0.8 - a4) + 1.1 * vapour * theta)
        width = math.sqrt(width ** 2 + 2.25e-6)
        correction = (a5 + a6 * theta) * 1e-4 * p * theta ** 0.8
        below = (width - correction * (f0 - freq)) / ((f0 - freq) ** 2 + width ** 2)
        above = (width - correction * (f0 + freq)) / ((f0 + freq) ** 2 + width ** 2)
        shape = freq / f0 * (below + above)
        strength = a1 * 1e-7 * dry * theta ** 3 * math.exp(a2 * (1 - theta))
        oxygen += strength * shape

    water = 0.0
    for fw, b1, b2, b3, b4, b5, b6 in _WATER_LINES:
        raw = b3 * 1e-4 * (dry * theta ** b4 + b5 * vapour * theta ** b6)
        width = 0.535 * raw + math.sqrt(0.217 * raw ** 2 + 2.1316e-12 * fw ** 2 / theta)
        below = width / ((fw - freq) ** 2 + width ** 2)
        above = width / ((fw + freq) ** 2 + width ** 2)
        shape = freq / fw * (below + above)
        strength = b1 * 1e-1 * vapour * theta ** 3.5 * math.exp(b2 * (1 - theta))
        water += strength * shape

    d = 5.6e-4 * p * theta ** 0.8
    c1 = 6.14e-5 / (d * (1 + (freq / d) ** 2))
    c2 = 1.4e-12 * dry * theta ** 1.5 / (1 + 1.9e-5 * freq ** 1.5)
    continuum = freq * dry * theta ** 2 * (c1 + c2)

    return 0.1820 * freq * (oxygen + water + continuum)


def _layer_thickness(index: int) -> float:
    return 0.0001 * math.exp(index * 1e-2)


def _layer_count(h_s: float, h_aero: float) -> int:
    total = h_s
    for index in range(_MAX_LAYERS):
        total += _layer_thickness(index)
        if total >= h_aero:
            return index + 1
    raise ValueError(f"platform height {h_aero} km lies above the layered atmosphere")


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


def slant_gas_attenuation(elevation: float, h_s: float, h_aero: float, f: float,
                          t: float, p: float, rho0: float) -> float:
    """Gas attenuation (dB) along a refracted slant path through thin layers.

    ``elevation`` in degrees, station and platform heights in metres, ``f``
    in GHz; ``t`` (K), ``p`` (hPa) and ``rho0`` (g/m^3) are ground values.
    Raises ValueError when the platform is above the topmost layer.
    """
    h_s_km = h_s / 1000
    h_aero_km = h_aero / 1000
    layers = _layer_count(h_s_km, h_aero_km)

    radius = _EARTH_RADIUS_KM + h_s_km
    beta = _PI / 2 - elevation * _PI / 180
    previous_index = 0.0
    previous_alpha = 0.0
    previous_delta = 0.0
    total = 0.0
    for index in range(layers):
        delta = _layer_thickness(index)
        if index > 0:
            radius += previous_delta
        height = radius - _EARTH_RADIUS_KM
        temperature = t - 6.5 * height
        pressure = p * (t / (t - 6.5 * height)) ** (-34.163 / 6.5)
        density = rho0 * math.exp(-height * 0.5)
        vapour = density * temperature / 216.7
        refractivity = 77.6 / temperature * (pressure + 4810.0 * vapour / temperature)
        refractive_index = 1 + refractivity * 1e-6
        if index > 0:
            beta = math.asin(_clamp_unit(previous_index / refractive_index
                                         * math.sin(previous_alpha)))

        cos_beta = math.cos(beta)
        length = -radius * cos_beta + 0.5 * math.sqrt(
            4 * radius ** 2 * cos_beta ** 2 + 8.0 * radius * delta + 4.0 * delta ** 2)
        ratio = -(length ** 2 + 2 * radius * delta + delta ** 2) / (
            2 * length * radius + 2 * length * delta)
        alpha = _PI - math.acos(_clamp_unit(ratio))

        total += length * specific_gas_attenuation(f, temperature, density, pressure)
        previous_index, previous_alpha, previous_delta = refractive_index, alpha, delta
    return total