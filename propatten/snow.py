"""Snow attenuation on a link, from a snowfall class and path length."""

from __future__ import annotations

import math
from typing import List

from .geometry import ParameterError

_MAX_FREQUENCY_GHZ = 20.0
_SNOW_RATES = {0: 0.1, 1: 0.5}
_HEAVY_SNOW_RATE = 1.0


def _round_tenth(value: float) -> float:
    """Round to one decimal, halves away from zero."""
    scaled = value * 10
    if math.isnan(scaled) or math.isinf(scaled):
        return value
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / 10


def specific_attenuation(f: float, snow_type: int) -> float:
    """Specific snow attenuation (dB/km) at ``f`` GHz for a snowfall class.

    Class 0 is light, 1 moderate and anything else heavy snow.
    Raises ParameterError above 20 GHz.
    """
    if f > _MAX_FREQUENCY_GHZ:
        raise ParameterError(f"snow: frequency={f} GHz above {_MAX_FREQUENCY_GHZ} GHz")
    wavelength_cm = 30 / f
    rate = _SNOW_RATES.get(int(snow_type), _HEAVY_SNOW_RATE)
    return 0.00349 * rate ** 1.6 / wavelength_cm ** 4 + 0.00224 * rate / wavelength_cm


def check_parameters(f: float, pp: float, satlon: float, satlat: float, satalt: float,
                     send_polar: int, lon: float, lat: float, alt: float,
                     receive_polar: int, dia: float, antenna_efficiency: float) -> None:
    """Validate the inputs of :func:`snow_attenuation`; ``f`` is in Hz.

    Raises ParameterError listing every problem found up to the first fatal one.
    """
    problems: List[str] = []

    def fail(message: str) -> None:
        problems.append(message)
        raise ParameterError("; ".join(problems))

    ghz = f / 1e9
    if ghz < 12 or ghz > 18:
        problems.append(f"snow_att: frequency={ghz} GHz outside 12..18")
    if satlon < -180 or satlon > 180:
        problems.append(f"snow_att: source longitude={satlon} outside -180..180")
    if satlat < -90 or satlat > 90:
        problems.append(f"snow_att: source latitude={satlat} outside -90..90")
    height = satlat / 1000
    if height < 0 or height > 36000:
        problems.append(f"snow_att: source height={height} km outside 0..36000")
    if lon < -180 or lon > 180:
        problems.append(f"snow_att: sink longitude={lon} outside -180..180")
    if lat < -90 or lat > 90:
        problems.append(f"snow_att: sink latitude={lat} outside -90..90")
    if dia < 0 or dia > 5:
        fail(f"snow_att: antenna diameter={dia} outside 0..5")
    if antenna_efficiency < 0 or antenna_efficiency > 1:
        fail(f"snow_att: antenna efficiency={antenna_efficiency} outside 0..1")
    if problems:
        raise ParameterError("; ".join(problems))


def check_area_parameters(f: float, lat1: float, lon1: float, lat2: float, lon2: float,
                          lata: float, lona: float, latb: float, lonb: float) -> None:
    """Validate a link and a snow area's corners; ``f`` is in GHz.

    Raises ParameterError listing every problem found.
    """
    problems: List[str] = []
    if f < 12 or f > 18:
        problems.append(f"frequency={f} GHz outside 12..18")
    longitudes = (("point 1", lon1), ("point 2", lon2),
                  ("lower-left", lona), ("upper-right", lonb))
    latitudes = (("point 1", lat1), ("point 2", lat2),
                 ("lower-left", lata), ("upper-right", latb))
    for name, value in longitudes:
        if value < -180 or value > 180:
            problems.append(f"{name} longitude={value} outside -180..180")
    for name, value in latitudes:
        if value < -90 or value > 90:
            problems.append(f"{name} latitude={value} outside -90..90")
    if problems:
        raise ParameterError("; ".join(problems))


def snow_attenuation(f: float, pp: float, satlon: float, satlat: float, satalt: float,
                     send_polar: int, lon: float, lat: float, alt: float,
                     receive_polar: int, dia: float, antenna_efficiency: float,
                     snow_type: int, start_distance: float, end_distance: float) -> float:
    """Snow attenuation (dB, one decimal) over the snow stretch of a link.

    ``f`` in Hz; the snow stretch runs between two distances in metres.
    Raises ParameterError for out-of-range inputs.
    """
    check_parameters(f, pp, satlon, satlat, satalt, send_polar, lon, lat, alt,
                     receive_polar, dia, antenna_efficiency)
    alpha = specific_attenuation(f / 1e9, snow_type)
    distance_km = abs(end_distance - start_distance) / 1000
    return _round_tenth(2 * alpha * distance_km)