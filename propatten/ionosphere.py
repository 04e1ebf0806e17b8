"""Ionospheric effects: absorption, Faraday rotation, electron content, dispersion and scintillation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from os import PathLike
from typing import List, Optional, Sequence, Tuple, Union

PathArg = Union[str, "PathLike[str]"]

_PI = 3.1415926
_ELECTRON_CHARGE = 1.6e-19
_LIGHT_SPEED = 3e8
_VACUUM_PERMITTIVITY = 8.85e-12
_ELECTRON_MASS = 9.1e-31
_PRECISE_PI = 3.1415926535
_FIELD_LOOKUP_LIMIT = 188

_BX = (
    29211.9, 29141.3, 29070.8, 29000.6, 28930.7, 28860.9, 28791.4,
    28722.0, 28653.0, 28584.1, 28515.4, 28447.0, 28378.8, 28310.8, 28243.0, 28175.4,
    28108.1, 28040.9, 27974.0, 27907.3, 27840.7, 27774.5, 27708.4, 27642.5, 27576.8,
    27511.3, 27446.1, 27381.0, 27316.1, 27251.5, 27187.0, 27122.8, 27058.7, 26994.9,
    26931.2, 26867.8, 26804.6, 26741.5, 26678.6, 26616.0, 26553.5, 26491.2, 26429.1,
    26367.3, 26305.6, 26244.0, 26182.7, 26121.6, 26060.7, 25999.9, 25939.4, 25879.0,
    25818.8, 25758.8, 25699.0, 25639.3, 25579.9, 25520.6, 25461.5, 25402.6, 25343.9,
    25285.3, 25227.0, 25168.8, 25110.8, 25052.9, 24995.3, 24937.8, 24880.5, 24823.4,
    24766.4, 24709.6, 24653.0, 24596.6, 24540.3, 24484.2, 24428.3, 24372.5, 24316.9,
    24261.5, 24206.2, 24151.1, 24096.2, 24041.4, 23986.8, 23932.4, 23878.1, 23824.0,
    23770.1, 23716.3, 23662.7, 23609.2, 23555.9, 23502.8, 23449.8, 23397.0, 23344.3,
    23291.8, 23239.4, 23187.2, 23135.2, 23083.3, 23031.6, 22980.0, 22928.6, 22877.3,
    22826.2, 22775.2, 22724.4, 22673.7, 22623.2, 22572.8, 22522.6, 22472.5, 22422.6,
    22372.8, 22323.2, 22273.7, 22224.3, 22175.1, 22126.1, 22077.1, 22028.4, 21979.8,
    21931.3, 21882.9, 21834.7, 21786.7, 21738.7, 21691.0, 21643.3, 21595.8, 21548.5,
    21501.2, 21454.1, 21407.2, 21360.4, 21313.7, 21267.1, 21220.7, 21174.4, 21128.3,
    21082.3, 21036.4, 20990.7, 20945.0, 20899.6, 20854.2, 20809.0, 20763.9, 20718.9,
    20674.1, 20629.4, 20584.8, 20540.4, 20496.0, 20451.8, 20407.8, 20363.8, 20320.0,
    20276.3, 20232.7, 20189.3, 20146.0, 20102.8, 20059.7, 20016.7, 19973.9, 19931.2,
    19888.6, 19846.1, 19803.8, 19761.6, 19719.4, 19677.5, 19635.6, 19593.8, 19552.2,
    19510.7, 19469.3, 19428.0, 19386.8, 19345.7, 19304.8, 19264.0, 19223.3, 19182.7,
    19142.2, 19101.8)
_BY = (
    -898.7, -895.3, -891.9, -888.5, -885.2, -881.9, -878.6, -875.3, -872.0,
    -868.7, -865.5, -862.2, -859.0, -855.8, -852.6, -849.4, -846.3, -843.1, -840.0, -836.8,
    -833.7, -830.6, -827.5, -824.5, -821.4, -818.4, -815.3, -812.3, -809.3, -806.3, -803.3,
    -800.4, -797.4, -794.5, -791.5, -788.6, -785.7, -782.8, -780.0, -777.1, -774.2, -771.4,
    -768.6, -765.8, -763.0, -760.2, -757.4, -754.6, -751.9, -749.1, -746.4, -743.7, -741.0,
    -738.3, -735.6, -732.9, -730.2, -727.6, -724.9, -722.3, -719.7, -717.1, -714.5, -711.9,
    -709.3, -706.8, -704.2, -701.7, -699.1, -696.6, -694.1, -691.6, -689.1, -686.7, -684.2,
    -681.7, -679.3, -676.8, -674.4, -672.0, -669.6, -667.2, -664.8, -662.4, -660.1, -657.7,
    -655.4, -653.0, -650.7, -648.4, -646.1, -643.8, -641.5, -639.2, -637.0, -634.7, -632.5,
    -630.2, -628.0, -625.8, -623.5, -621.3, -619.1, -617.0, -614.8, -612.6, -610.5, -608.3,
    -606.2, -604.0, -601.9, -599.8, -597.7, -595.6, -593.5, -591.4, -589.4, -587.3, -585.2,
    -583.2, -581.2, -579.1, -577.1, -575.1, -573.1, -571.1, -569.1, -567.1, -565.1, -563.2,
    -561.2, -559.3, -557.3, -555.4, -553.5, -551.6, -549.7, -547.8, -545.9, -544.0, -542.1,
    -540.2, -538.4, -536.5, -534.7, -532.8, -531.0, -529.2, -527.3, -525.5, -523.7, -521.9,
    -520.1, -518.3, -516.6, -514.8, -513.0, -511.3, -509.5, -507.8, -506.1, -504.3, -502.6,
    -500.9, -499.2, -497.5, -495.8, -494.1, -492.4, -490.8, -489.1, -487.4, -485.8, -484.1,
    -482.5, -480.9, -479.2, -477.6, -476.0, -474.4, -472.8, -471.2, -469.6, -468.0, -466.4,
    -464.9, -463.3, -461.7, -460.2)
_BZ = (
    39169.8, 39071.6, 38973.8, 38876.3, 38779.1, 38682.2, 38585.7, 38489.5,
    38393.6, 38298.0, 38202.7, 38107.8, 38013.1, 37918.8, 37824.8, 37731.1, 37637.7, 37544.6,
    37451.8, 37359.3, 37267.2, 37175.3, 37083.8, 36992.5, 36901.5, 36810.9, 36720.5, 36630.4,
    36540.6, 36451.1, 36361.9, 36273.0, 36184.4, 36096.1, 36008.1, 35920.3, 35832.8, 35745.6,
    35658.8, 35572.1, 35485.8, 35399.7, 35313.9, 35228.4, 35143.2, 35058.2, 34973.5, 34889.2,
    34805.0, 34721.1, 34637.5, 34554.2, 34471.1, 34388.3, 34305.8, 34223.5, 34141.5, 34059.8,
    33978.3, 33897.1, 33816.1, 33735.4, 33654.9, 33574.7, 33494.8, 33415.1, 33335.7, 33256.5,
    33177.6, 33098.9, 33020.4, 32942.2, 32864.3, 32786.6, 32709.2, 32631.9, 32555.0, 32478.3,
    32401.8, 32325.5, 32249.5, 32173.8, 32098.2, 32022.9, 31947.9, 31873.0, 31798.5, 31724.1,
    31650.0, 31576.1, 31502.4, 31429.0, 31355.8, 31282.8, 31210.0, 31137.5, 31065.2, 30993.1,
    30921.3, 30849.6, 30778.2, 30707.0, 30636.0, 30565.3, 30494.7, 30424.4, 30354.3, 30284.4,
    30214.7, 30145.3, 30076.0, 30007.0, 29938.1, 29869.5, 29801.1, 29732.9, 29664.9, 29597.1,
    29529.6, 29462.2, 29395.0, 29328.1, 29261.3, 29194.7, 29128.4, 29062.2, 28996.3, 28930.5,
    28864.9, 28799.6, 28734.4, 28669.5, 28604.7, 28540.1, 28475.7, 28411.5, 28347.5, 28283.7,
    28220.1, 28156.7, 28093.5, 28030.4, 27967.6, 27904.9, 27842.4, 27780.1, 27718.0, 27656.1,
    27594.4, 27532.8, 27471.4, 27410.2, 27349.2, 27288.4, 27227.8, 27167.3, 27107.0, 27046.9,
    26987.0, 26927.2, 26867.6, 26808.2, 26749.0, 26689.9, 26631.1, 26572.4, 26513.8, 26455.4,
    26397.3, 26339.2, 26281.4, 26223.7, 26166.2, 26108.8, 26051.7, 25994.6, 25937.8, 25881.1,
    25824.6, 25768.3, 25712.1, 25656.0, 25600.2, 25544.5, 25488.9, 25433.6, 25378.3, 25323.3,
    25268.4)
_FIELD = tuple(zip(_BX, _BY, _BZ))
_FIELD_HEIGHTS = tuple(60.0 + 5.0 * index for index in range(len(_FIELD)))

_MAGNETIC_POLE_LON = -70.5 * _PI / 180
_MAGNETIC_POLE_LAT = 78.8 * _PI / 180
_SCINTILLATION_SCALE = 4.8516
_SCINTILLATION_WIDTH = 0.71


@dataclass(frozen=True)
class FaradayResult:
    """Faraday rotation (degrees), its polarisation-mismatch loss (dB) and XPD (dB)."""

    rotation: float
    attenuation: float
    xpd: float


def _rad(degrees: float) -> float:
    return degrees * _PI / 180


def ionospheric_absorption(f: float, theta: float) -> float:
    """Ionospheric absorption (dB) at ``f`` GHz for elevation ``theta`` degrees."""
    return 2500 / (math.sin(_rad(theta)) * f * f * 1e6)


def faraday_rotation(density: Sequence[float], heights: Sequence[float], ht: float,
                     f: float, theta: float, azimuth: float) -> FaradayResult:
    """Faraday rotation accumulated up to height ``ht`` (m).

    ``density`` holds electron densities at ``heights`` (km, ascending from
    60 km in 5 km steps to match the geomagnetic field table), ``f`` is the
    frequency in Hz, ``theta`` the elevation and ``azimuth`` the azimuth in
    degrees. Raises ValueError when the profile does not reach above ``ht``
    or does not line up with the field table.
    """
    if len(density) != len(heights):
        raise ValueError("density and height profiles differ in length")
    theta_r = _rad(theta)
    phi = _rad(azimuth)
    top = ht / 1000
    cos_t, sin_t = math.cos(theta_r), math.sin(theta_r)
    cos_p, sin_p = math.cos(phi), math.sin(phi)

    def projection(vector: Tuple[float, float, float]) -> float:
        bx, by, bz = vector
        return abs(bx * cos_t * cos_p + by * cos_t * sin_p - bz * sin_t)

    field: Optional[Tuple[float, float, float]] = None
    rotation = 0.0
    layer = 0
    for layer, (low, high) in enumerate(zip(heights, heights[1:])):
        if high > top:
            break
        match = next((vector for level, vector in zip(_FIELD_HEIGHTS, _FIELD) if level == low),
                     None)
        if match is not None:
            field = match
        if field is None:
            raise ValueError(f"height {low} km does not match the field table")
        rotation += projection(field) * density[layer] * (high - low)
    else:
        raise ValueError(f"profile does not extend above {top} km")

    for index, (low, high) in enumerate(zip(heights, heights[1:])):
        if index >= _FIELD_LOOKUP_LIMIT:
            break
        if low <= top < high:
            if index < len(_FIELD):
                field = _FIELD[index]
            break
    if field is None:
        raise ValueError(f"no geomagnetic field value for {top} km")
    rotation += projection(field) * density[layer] * (top - heights[layer])

    rotation = rotation * 1000 * 1e-9 / sin_t
    rotation = (_ELECTRON_CHARGE ** 3 * rotation
                / (_LIGHT_SPEED * _VACUUM_PERMITTIVITY * _ELECTRON_MASS ** 2
                   * 4 * _PRECISE_PI ** 2 * f * f))
    attenuation = -10 * math.log10(math.cos(rotation) ** 2)
    xpd = -20 * math.log10(math.tan(rotation))
    return FaradayResult(rotation=rotation * 180 / _PI, attenuation=attenuation, xpd=xpd)


def total_electron_content(density: Sequence[float], heights: Sequence[float], ht: float,
                           theta: float) -> float:
    """Slant electron content (per m^2) up to ``ht`` km along elevation ``theta`` degrees.

    ``heights`` in km ascending, ``density`` in electrons per m^3.
    """
    content = 0.0
    for (low, high), (n_low, n_high) in zip(zip(heights, heights[1:]),
                                            zip(density, density[1:])):
        if low < ht and high <= ht:
            content += (n_low + n_high) * (high - low) / 2
        if low <= ht < high:
            n_top = n_low + (ht - low) * (n_high - n_low) / (high - low)
            content += (n_low + n_top) * (ht - low) / 2
            break
    return content * 1000 / math.sin(_rad(theta))


def group_delay(density: Sequence[float], heights: Sequence[float], ht: float,
                f: float, theta: float) -> float:
    """Ionospheric group delay (s) at ``f`` Hz up to ``ht`` km."""
    return 1.345e-7 * total_electron_content(density, heights, ht, theta) / (f * f)


def dispersion(density: Sequence[float], heights: Sequence[float], ht: float, f: float,
               df: float, theta: float) -> Tuple[float, float, float]:
    """Delay dispersion, phase dispersion and error probability over bandwidth ``df`` Hz.

    Returned as ``(delay_spread, phase_spread, error_probability)``.
    """
    content = total_electron_content(density, heights, ht, theta)
    delay_spread = 2.68e-7 * content * df / (f * f * f)
    phase_spread = 8.44e-7 * df * content / (f * f)
    error_probability = delay_spread ** 5.08 * 4.17e-7
    return delay_spread, phase_spread, error_probability


def _atan_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.copysign(math.pi / 2, numerator) if numerator else math.nan
    return math.atan(numerator / denominator)


def scintillation_loss(lon: float, lat: float, sat_lon: float, hs: float, f: float,
                       theta: float) -> float:
    """Ionospheric scintillation fade (dB).

    ``lon``/``lat`` locate the ground station and ``sat_lon`` the satellite
    (degrees), ``hs`` is the station height (km), ``f`` the frequency (GHz)
    and ``theta`` the elevation (degrees). Raises ValueError when the pierce
    point geometry has no real solution.
    """
    lon_r = _rad(lon)
    lat_r = _rad(lat)
    sat_r = _rad(sat_lon)
    theta_r = _rad(theta)

    local = lon_r - _PI / 2
    station_mag_lat = math.asin(math.cos(_MAGNETIC_POLE_LAT) * math.cos(local - _MAGNETIC_POLE_LON))
    station_mag_lon = _PI - math.asin(math.sin(local - _MAGNETIC_POLE_LON)
                                      / math.cos(station_mag_lat))

    azimuth = _PI - _atan_ratio(math.tan(sat_r - lon_r), math.sin(lat_r))
    alpha = _PI / 2 - theta_r - math.asin((6370 + hs) * math.cos(theta_r) / 6670)
    pierce_lat = math.asin(math.sin(lat_r) * math.cos(alpha)
                           + math.cos(lat_r) * math.sin(alpha) * math.cos(azimuth))
    pierce_lon = lon_r + math.asin(math.sin(alpha) * math.sin(azimuth) / math.cos(pierce_lat))
    pierce_mag_lat = math.asin(
        math.sin(pierce_lat) * math.sin(_MAGNETIC_POLE_LAT)
        + math.cos(pierce_lat) * math.cos(_MAGNETIC_POLE_LAT)
        * math.cos(pierce_lon - _MAGNETIC_POLE_LON))
    pierce_mag_lon = _PI - math.asin(math.cos(pierce_lat) * math.sin(pierce_lon - _MAGNETIC_POLE_LON)
                                     / math.cos(pierce_mag_lat))

    beta = abs(pierce_mag_lon - station_mag_lon)
    s4 = _SCINTILLATION_SCALE / (f ** 1.5 * math.sqrt(math.sin(theta_r))
                                 * math.exp(beta / _SCINTILLATION_WIDTH))
    return 27.5 * s4 ** 1.26 / math.sqrt(2)


def read_profile(path: PathArg) -> Tuple[List[float], List[float]]:
    """Read a two-column electron density profile: height (km) then density.

    Returns ``(heights, densities)``. Blank lines are skipped. Raises OSError
    if the file cannot be opened and ValueError for a malformed line.
    """
    heights: List[float] = []
    densities: List[float] = []
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    for number, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 2:
            raise ValueError(f"{path}:{number}: expected height and density")
        try:
            heights.append(float(fields[0]))
            densities.append(float(fields[-1]))
        except ValueError:
            raise ValueError(f"{path}:{number}: not a number") from None
    return heights, densities