"""Rain attenuation on slant paths: specific attenuation, path reduction and XPD."""

from __future__ import annotations

import math
from os import PathLike
from typing import Iterator, List, NamedTuple, Sequence, Tuple, Union

from .geometry import ParameterError, Position, link_elevation

PathArg = Union[str, "PathLike[str]"]

_EQUIVALENT_EARTH_RADIUS_KM = 8500.0

_KH = ((-5.3398, -0.10008, 1.13098), (-0.35351, 1.2697, 0.454),
       (-0.23789, 0.86036, 0.15354), (-0.94158, 0.64552, 0.16817))
_KH_M, _KH_C = -0.18961, 0.71147

_AH = ((-0.14318, 1.82442, -0.55187), (0.29591, 0.77564, 0.19822),
       (0.32177, 0.63773, 0.13164), (-5.3761, -0.9623, 1.47828),
       (16.1721, -3.2998, 3.4399))
_AH_M, _AH_C = 0.67849, -1.95537

_KV = ((-3.80595, 0.56934, 0.81061), (-3.44965, -0.22911, 0.51059),
       (-0.39902, 0.73042, 0.11899), (0.50167, 1.07319, 0.27195))
_KV_M, _KV_C = -0.16398, 0.63297

_AV = ((-0.07771, 2.3384, -0.76284), (0.56727, 0.95545, 0.54039),
       (-0.20238, 1.1452, 0.26809), (-48.2991, 0.791669, 0.116226),
       (48.5833, 0.791459, 0.116479))
_AV_M, _AV_C = -0.053739, 0.83433

_XPD_PROBABILITIES = (1.0, 0.1, 0.01, 0.01)
_XPD_SIGMAS = (0.0, 5.0, 10.0, 15.0)

_RAIN_RATE_FLOORS = {0: 4.0, 1: 14.0}
_HEAVY_RAIN_FLOOR = 40.0


class RainCoefficients(NamedTuple):
    """Power-law coefficients and the resulting specific attenuation (dB/km)."""

    k: float
    alpha: float
    attenuation: float


def _round_tenth(value: float) -> float:
    """Round to one decimal, halves away from zero."""
    scaled = value * 10
    if math.isnan(scaled) or math.isinf(scaled):
        return value
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / 10


def _gaussian_sum(terms: Sequence[Tuple[float, float, float]], log_f: float) -> float:
    return sum(a * math.exp(-(((log_f - b) / c) ** 2)) for a, b, c in terms)


def specific_attenuation(theta: float, tau: float, f: float, rate: float) -> RainCoefficients:
    """Specific rain attenuation for elevation ``theta`` and polarisation tilt ``tau``
    (both degrees), frequency ``f`` in GHz and rain rate in mm/h."""
    log_f = math.log10(f)
    kh = 10 ** (_gaussian_sum(_KH, log_f) + _KH_M * log_f + _KH_C)
    kv = 10 ** (_gaussian_sum(_KV, log_f) + _KV_M * log_f + _KV_C)
    ah = _gaussian_sum(_AH, log_f) + _AH_M * log_f + _AH_C
    av = _gaussian_sum(_AV, log_f) + _AV_M * log_f + _AV_C

    cos_theta = math.cos(math.radians(theta))
    tilt = cos_theta * cos_theta * math.cos(math.radians(2 * tau))
    k = (kh + kv + (kh - kv) * tilt) / 2
    alpha = (kh * ah + kv * av + (kh * ah - kv * av) * tilt) / (2 * k)
    return RainCoefficients(k, alpha, k * rate ** alpha)


def slant_length(theta: float, altitude: float, rain_height: float) -> float:
    """Slant path length (km) below the rain height; ``theta`` in degrees, heights in km."""
    sin_theta = math.sin(math.radians(theta))
    depth = rain_height - altitude
    if theta < 5:
        return 2 * depth / (
            sin_theta + math.sqrt(sin_theta ** 2 + 2 * depth / _EQUIVALENT_EARTH_RADIUS_KM)
        )
    return depth / sin_theta


def nearest_extrapolate(pn: Sequence[float], sign: Sequence[float], p: float) -> float:
    """Table lookup used for the XPD rain-tilt spread.

    Below the first abscissa the first value is returned, above the last the
    last value; inside the table the scan keeps the last entry it visits.
    Raises ValueError for empty or mismatched tables.
    """
    if not pn or not sign or len(pn) != len(sign):
        raise ValueError("tables must be non-empty and of equal length")
    if p < pn[0]:
        return sign[0]
    if p > pn[-1]:
        return sign[-1]
    closest = sign[0]
    for value in sign:
        closest = value
    return closest


def _frequency_factor(f: float) -> float:
    if 6 <= f < 9:
        return 60 * math.log10(f) - 28.3
    if f < 36:
        return 26 * math.log10(f) + 4.1
    if f <= 55:
        return 35.9 * math.log10(f) - 11.3
    return 0.0


def _attenuation_factor(f: float) -> float:
    if 6 <= f < 9:
        return 30.8 * f ** -0.21
    if f < 20:
        return 12.8 * f ** 0.19
    if f < 40:
        return 22.6
    if f < 55:
        return 13.0 * f ** 0.15
    return 0.0


def xpd(f: float, p: float, th: float, tau: float, ap: float) -> float:
    """Rain cross-polarisation discrimination (dB).

    ``f`` in GHz, ``p`` time percentage, ``th`` elevation and ``tau`` tilt in
    degrees, ``ap`` co-polar rain attenuation in dB.
    """
    cf = _frequency_factor(f)
    ca = _attenuation_factor(f) * math.log10(ap)
    ct = -10 * math.log10(1 - 0.484 * (1 + math.cos(math.radians(4 * tau))))
    cth = -40 * math.log10(math.cos(math.radians(th)))
    sigma = nearest_extrapolate(_XPD_PROBABILITIES, _XPD_SIGMAS, p)
    csig = 0.0053 * sigma * sigma
    xpd_rain = cf - ca + ct + cth + csig
    ice = xpd_rain * (0.3 + 0.1 * math.log10(p)) / 2
    return xpd_rain - ice


def check_parameters(f: float, pp: float, satlon: float, satlat: float, satalt: float,
                     send_polar: int, lon: float, lat: float, alt: float,
                     receive_polar: int, dia: float, antenna_efficiency: float,
                     rainrate: float, rain_height: float) -> None:
    """Validate the inputs of :func:`rain_attenuation`; ``f`` is in Hz.

    Raises ParameterError listing every problem found up to the first fatal one.
    """
    problems: List[str] = []

    def fail(message: str) -> None:
        problems.append(message)
        raise ParameterError("; ".join(problems))

    ghz = f / 1e9
    if ghz < 12 or ghz > 18:
        problems.append(f"rain_att: frequency={ghz} GHz outside 12..18")
    if satlon < -180 or satlon > 180:
        problems.append(f"rain_att: source longitude={satlon} outside -180..180")
    if satlat < -90 or satlat > 90:
        problems.append(f"rain_att: source latitude={satlat} outside -90..90")
    height = satlat / 1000
    if height < 0 or height > 36000:
        problems.append(f"rain_att: source height={height} km outside 0..36000")
    if lon < -180 or lon > 180:
        problems.append(f"rain_att: sink longitude={lon} outside -180..180")
    if lat < -90 or lat > 90:
        problems.append(f"rain_att: sink latitude={lat} outside -90..90")
    if dia < 0 or dia > 5:
        fail(f"rain_att: antenna diameter={dia} outside 0..5")
    if antenna_efficiency < 0 or antenna_efficiency > 1:
        fail(f"rain_att: antenna efficiency={antenna_efficiency} outside 0..1")
    if rainrate < 0 or rainrate > 150:
        fail(f"rain_att: rain rate={rainrate} outside 0..150")
    if rain_height < 0 or rain_height > 20000:
        fail(f"rain_att: rain height={rain_height} m outside 0..20000")
    if problems:
        raise ParameterError("; ".join(problems))


def _numbers(line: str) -> Iterator[float]:
    for token in line.split():
        try:
            yield float(token)
        except ValueError:
            return


def find_rain_value(longitude_file: PathArg, latitude_file: PathArg, value_file: PathArg,
                    longitude: float, latitude: float) -> float:
    """Look up a gridded value for a point from three parallel text grids.

    An exact grid match returns its value; otherwise the two nearest points
    (Manhattan distance) are averaged and rounded to one decimal.
    Raises OSError if a file cannot be opened.
    """
    nearest: List[Tuple[float, float]] = []
    with open(longitude_file, encoding="utf-8") as lons, \
            open(latitude_file, encoding="utf-8") as lats, \
            open(value_file, encoding="utf-8") as values:
        for lon_line, lat_line, value_line in zip(lons, lats, values):
            for grid_lon, grid_lat, value in zip(
                    _numbers(lon_line), _numbers(lat_line), _numbers(value_line)):
                if grid_lon == longitude and grid_lat == latitude:
                    return value
                distance = abs(grid_lon - longitude) + abs(grid_lat - latitude)
                if len(nearest) < 2:
                    nearest.append((distance, value))
                    continue
                worst = max(range(2), key=lambda i: nearest[i][0])
                if distance < nearest[worst][0]:
                    nearest[worst] = (distance, value)
    return _round_tenth(sum(value for _, value in nearest) / 2)


def _atan_ratio_degrees(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.copysign(90.0, numerator) if numerator else math.nan
    return math.degrees(math.atan(numerator / denominator))


def rain_attenuation(f: float, percentage: float, satlon: float, satlat: float,
                     satalt: float, send_polar: int, site_lon: float, site_lat: float,
                     altitude: float, receive_polar: int, dia: float,
                     antenna_efficiency: float, meteor_condition: int, rainrate: float,
                     start_distance: float, end_distance: float,
                     rain_height: float) -> float:
    """Rain attenuation (dB, one decimal) on the link from a station to a platform.

    ``f`` in Hz, angles in degrees, heights in metres. The rain rate is raised
    to the floor of the given meteorological condition. Raises ParameterError
    for out-of-range inputs or a platform at or below the horizon.
    """
    check_parameters(f, percentage, satlon, satlat, satalt, send_polar, site_lon,
                     site_lat, altitude, receive_polar, dia, antenna_efficiency,
                     rainrate, rain_height)
    frequency = f / 1e9
    station = Position(lat=site_lat, lon=site_lon, alt=altitude)
    satellite = Position(lat=satlat, lon=satlon, alt=satalt)
    elevation = link_elevation(satellite, station)
    if elevation <= 0:
        raise ParameterError(f"rain_att: elevation={elevation} is not above the horizon")

    rainrate = max(rainrate, _RAIN_RATE_FLOORS.get(int(meteor_condition), _HEAVY_RAIN_FLOOR))
    polar = int(send_polar)
    tau = 0.0 if polar in (0, 1) else 90.0

    atten_km = specific_attenuation(elevation, tau, frequency, rainrate).attenuation
    elev_rad = math.radians(elevation)

    rain_top = min(rain_height, max(altitude, satalt)) / 1000 + 0.36
    ground = slant_length(elevation, altitude / 1000, rain_top) * math.cos(elev_rad)
    xlh = 0.78 * math.sqrt(ground * atten_km / frequency)
    qmx = 0.38 * (1 - math.exp(-2 * ground))
    horizontal = 1 / (1 + xlh - qmx)
    cita = _atan_ratio_degrees(rain_top - altitude, ground * horizontal)
    if cita > elevation:
        path = ground * horizontal / math.cos(elev_rad)
    else:
        path = (rain_top - altitude / 1000) / math.sin(elev_rad)

    abs_lat = abs(site_lat)
    chi = 36 - abs_lat if abs_lat < 36 else 0.0
    lcs = math.sqrt(math.sin(elev_rad))
    lx = (1 - math.exp(-(elevation / (1 + chi)))) * math.sqrt(path * atten_km) / frequency ** 2
    vertical = 1 / (1 + lcs * (31 * lx - 0.45))
    predicted_001 = atten_km * path * vertical

    if percentage == 0.01:
        prediction = predicted_001
    else:
        sin_cita = math.sin(math.radians(cita))
        if percentage >= 1 and abs_lat >= 25:
            beta = 0.0
        elif percentage < 1 or elevation >= 25 or abs_lat >= 36:
            beta = -0.005 * (abs_lat - 36)
        else:
            beta = -0.005 * (abs_lat - 36) + 1.8 - 4.25 * sin_cita
        exponent = (-(0.655 + 0.033 * math.log(percentage))
                    - 0.045 * math.log(predicted_001)
                    - beta * (1 - percentage) * sin_cita)
        prediction = predicted_001 * (percentage / 0.01) ** exponent

    if polar in (1, 2):
        prediction = 2 * prediction + xpd(frequency, percentage, elevation, tau, prediction) - 3
    else:
        prediction *= 2
    return _round_tenth(prediction)