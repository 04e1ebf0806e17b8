"""Troposcatter transmission loss on beyond-horizon links."""

from __future__ import annotations

import math
from typing import List, NamedTuple, Sequence, Tuple

_EARTH_RADIUS_KM = 6371.0
_CLAMP_LOW = 1.0e-6
_CLAMP_HIGH = 0.999999
_Q90 = 1.2816

_CLIMATE_PARAMS = {
    1: (39.60, 0.33),
    2: (29.73, 0.27),
    3: (19.30, 0.32),
    4: (38.50, 0.27),
    5: (38.50, 0.27),
    6: (29.73, 0.27),
    7: (33.20, 0.27),
    8: (26.00, 0.27),
}

_Y90_TABLES = {
    1: ((100, 200, 300, 400, 500, 600, 700, 800, 900),
        (-8.1, -6.6, -5.2, -4.5, -4, -4, -3.4, -3.2, -3.1)),
    3: ((100, 150, 200, 250, 300, 360, 400, 450, 500, 550, 900),
        (-11.0, -12.3, -13.0, -12.5, -11.5, -10.0, -9.2, -8.8, -8.6, -8.5, -8.5)),
    4: ((100, 200, 300, 400, 500, 600, 900),
        (-11.5, -9.8, -7.6, -5.9, -4.3, -4, -4)),
}


class ScatterLoss(NamedTuple):
    """Troposcatter loss (dB) and the standard deviation of its variation (dB)."""

    loss: float
    sigma: float


class TropoResult(NamedTuple):
    """Link loss (dB, zero on line-of-sight links) and whether the path is trans-horizon."""

    loss: float
    beyond_horizon: bool


def _t(x: float) -> float:
    return math.sqrt(-2 * math.log(x))


def _xi(x: float) -> float:
    c0, c1, c2 = 2.51551698, 0.802853, 0.010328
    d1, d2, d3 = 1.432788, 0.189269, 0.001308
    t = _t(x)
    numerator = (c2 * t + c1) * t + c0
    denominator = ((d3 * t + d2) * t + d1) * t + 1
    return numerator / denominator


def inverse_normal(x: float) -> float:
    """Approximate inverse complementary cumulative normal, ``x`` clamped to (1e-6, 0.999999)."""
    x = min(_CLAMP_HIGH, max(_CLAMP_LOW, x))
    if x <= 0.5:
        return _t(x) - _xi(x)
    return _xi(1 - x) - _t(1 - x)


def linear(x1: float, y1: float, x2: float, y2: float, x0: float) -> float:
    """Value at ``x0`` of the straight line through two points."""
    slope = (y2 - y1) / (x2 - x1)
    return slope * (x0 - x1) + y1


def interp1(x: Sequence[float], y: Sequence[float], xi: Sequence[float],
            method: str = "linear") -> List[float]:
    """Interpolate the table ``x``/``y`` at the points ``xi``.

    Inside the table the interpolation is linear. Outside it, ``"linear"``
    extrapolates from the end segments and ``"nearest"`` holds the end values.
    The bracket search only moves forward, so ``xi`` should be ascending.
    Raises ValueError for an unknown method.
    """
    if method not in ("linear", "nearest"):
        raise ValueError(f"unknown interpolation method {method!r}")
    results: List[float] = []
    lower, upper = 0, 1
    for point in xi:
        if point <= x[0]:
            if method == "linear":
                results.append(linear(x[0], y[0], x[1], y[1], point))
            else:
                results.append(y[0])
        elif point >= x[-1]:
            if method == "linear":
                results.append(linear(x[-2], y[-2], x[-1], y[-1], point))
            else:
                results.append(y[-1])
        else:
            while point > x[upper]:
                upper += 1
                lower = upper - 1
            x_low, x_high = x[lower], x[upper]
            y_low, y_high = y[lower], y[upper]
            results.append(y_low + (y_high - y_low) * (point - x_low) / (x_high - x_low))
    return results


def effective_earth_radius(dn: float) -> float:
    """Effective Earth radius (km) for a refractivity gradient ``dn`` (N-units/km)."""
    return 157 / (157 - dn) * _EARTH_RADIUS_KM


def climate_params(climate: int) -> Tuple[float, float]:
    """Meteorological constants (M, gamma) of a climate zone 1-8 (7a is 7, 7b is 8).

    Raises ValueError for an unknown zone.
    """
    try:
        return _CLIMATE_PARAMS[climate]
    except KeyError:
        raise ValueError(f"unknown climate zone {climate}") from None


def y90(freq: float, h: float, climate: int, ae: float, theta0: float) -> float:
    """Conversion factor Y(90) (dB) for ``freq`` MHz and scatter height ``h`` km.

    Raises ValueError for a zone that has no Y(90) model.
    """
    if climate in (2, 6, 7):
        return -2.2 - (8.1 - 2.3e-4 * freq) * math.exp(-0.137 * h)
    if climate == 8:
        return -9.5 - 3 * math.exp(-0.137 * h)
    table = _Y90_TABLES.get(climate)
    if table is None:
        raise ValueError(f"no Y(90) model for climate zone {climate}")
    distance = ae * theta0 / 1000
    return interp1(table[0], table[1], [distance], "nearest")[0]


def troposcatter_loss(freq: float, d: float, p: float, theta0: float, gt: float,
                      gr: float, ae: float, climate: int) -> ScatterLoss:
    """Troposcatter loss not exceeded for ``p`` % of time.

    ``freq`` in MHz, ``d`` in km, scatter angle ``theta0`` in mrad, antenna
    gains in dB, ``ae`` in km.
    """
    m, gamma = climate_params(climate)
    big_h = 1e-3 * theta0 * d / 4
    small_h = 1e-6 * theta0 * theta0 * ae / 8
    ln = 20 * math.log10(5 + gamma * big_h) + 4.34 * gamma * small_h

    y_90 = y90(freq, small_h, climate, ae, theta0)
    cq = -inverse_normal(p / 100) / _Q90
    yq = cq * y_90

    coupling = 0.07 * math.exp(0.055 * (gt + gr))
    loss = (m + 30 * math.log10(freq) + 10 * math.log10(d) + 30 * math.log10(theta0)
            + ln + coupling - gt - gr - yq)
    return ScatterLoss(loss, -y_90 / _Q90)


def tropo_scatter(freq: float, hts: float, hrs: float, d: float, p: float, gt: float,
                  gr: float, dn: float, climate: int) -> TropoResult:
    """Troposcatter loss of a link; line-of-sight links report zero loss.

    ``freq`` in MHz, antenna heights in m, ``d`` in km, ``p`` in %, gains in dB.
    """
    ae = effective_earth_radius(abs(dn))
    tx_horizon = -math.acos(ae / (ae + hts * 1e-3)) * 1e3
    direct = (hrs - hts) / d - 1e3 * d / 2 / ae
    if tx_horizon <= direct:
        return TropoResult(0.0, False)
    rx_horizon = -math.acos(ae / (ae + hrs * 1e-3)) * 1e3
    theta0 = d * 1e3 / ae + tx_horizon + rx_horizon
    result = troposcatter_loss(freq, d, p, theta0, gt, gr, ae, climate)
    return TropoResult(result.loss, True)