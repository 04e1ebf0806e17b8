# propatten

Models for the attenuation a radio signal suffers on its way between two
points: an earth station and a satellite or aircraft, or two terrestrial
sites. Everything is plain Python with no third-party dependencies.

## What is in the package

| Module | What it computes |
| --- | --- |
| `propatten.geometry` | `Position` (lat, lon, height) and `Location` (Earth-centred x, y, z); `blh_to_xyz`, `elevation_angle` and `link_elevation`; the `ParameterError` exception. |
| `propatten.rain` | `specific_attenuation`, `slant_length`, `xpd` (cross-polarisation discrimination), `find_rain_value` (grid lookup from three text files) and `rain_attenuation` for a whole earth–space link. |
| `propatten.snow` | `specific_attenuation` for a snowfall class and `snow_attenuation` over a snow stretch of a link, with their parameter checks. |
| `propatten.troposcatter` | `tropo_scatter` and `troposcatter_loss` by climate zone, with `inverse_normal`, `interp1`, `linear`, `effective_earth_radius`, `climate_params` and `y90`. |
| `propatten.earth_space_rain` | `earth_space_rain_attenuation`: rain attenuation exceeded for a time percentage on a slant path, and `rain_coefficients`. |
| `propatten.earth_space_gas` | `specific_gas_attenuation` (oxygen and water vapour, dB/km) and `slant_gas_attenuation` along a refracted path through a layered atmosphere. |
| `propatten.earth_space_cloud` | `cloud_attenuation` between two platform heights, for a cloud between the rain top and 6 km. |
| `propatten.fading` | `scintillation_fade`, `interpolated_fade` and `fade_depth`: scintillation and multipath fade depth at low and high elevation. |
| `propatten.ionosphere` | `ionospheric_absorption`, `faraday_rotation` (returns `FaradayResult`), `total_electron_content`, `group_delay`, `dispersion`, `scintillation_loss` and `read_profile` for electron density profiles. |
| `propatten.config` | `IniConfig`, a small INI reader; `parse_line`, `nearest_synoptic_hour`, `float_from_big_endian` and `read_era15_hm` for big-endian binary climate grids. |

## Examples

Elevation angle of a satellite seen from a ground station:

```python
from propatten.geometry import Position, link_elevation

station = Position(lat=36.1, lon=120.3, alt=7.0)
satellite = Position(lat=0.0, lon=110.5, alt=35_786_000.0)
print(link_elevation(satellite, station))   # degrees
```

Specific rain attenuation at 14 GHz, 30° elevation, horizontal
polarisation (tilt 0°) and 25 mm/h:

```python
from propatten.rain import specific_attenuation

k, alpha, gamma = specific_attenuation(30.0, 0.0, 14.0, 25.0)
print(gamma)   # dB/km
```

Rain attenuation on an earth–space path (frequency in GHz, heights in
metres, `p` the percentage of time the attenuation is *not* exceeded;
the result is zero when it is exceeded more than 5 % of the time):

```python
from propatten.earth_space_rain import earth_space_rain_attenuation

att = earth_space_rain_attenuation(
    lats=36.1, theta0=20.0, ipol=0, f=10.0,
    hs=7.0, hr=5000.0, ha=40_000.0, r001=100.0, p=99.99,
)
```

Gaseous attenuation along a slant path from the ground to 40 km:

```python
from propatten.earth_space_gas import slant_gas_attenuation

att = slant_gas_attenuation(
    elevation=10.0, h_s=7.0, h_aero=40_000.0,
    f=10.0, t=271.05, p=1014.0, rho0=1.9,
)
```

Troposcatter loss on a 300 km path in climate zone 1 (line-of-sight
links report a loss of zero and `beyond_horizon=False`):

```python
from propatten.troposcatter import tropo_scatter

result = tropo_scatter(
    freq=2000.0, hts=30.0, hrs=30.0, d=300.0, p=50.0,
    gt=40.0, gr=40.0, dn=40.0, climate=1,
)
print(result.loss, result.beyond_horizon)
```

## Units

Each function documents its own units. In short:

- `rain.rain_attenuation`, `rain.check_parameters`, `snow.snow_attenuation`
  and `snow.check_parameters` take the frequency in hertz.
- `rain.specific_attenuation`, `rain.xpd`, `snow.specific_attenuation`,
  `snow.check_area_parameters`, the `earth_space_*` modules, `fading`,
  `ionosphere.ionospheric_absorption` and `ionosphere.scintillation_loss`
  take it in gigahertz.
- `ionosphere.faraday_rotation`, `group_delay` and `dispersion` take it in
  hertz.
- `troposcatter` takes it in megahertz.

Angles are in degrees. Heights are mostly in metres and distances in
kilometres; the docstrings say where a function differs.

## Errors

Inputs outside the range a model accepts raise
`propatten.geometry.ParameterError` (a subclass of `ValueError`) in the
`rain` and `snow` modules, with a message naming the offending parameter.
Other modules raise `ValueError` for inputs they cannot handle (an unknown
season, climate zone or polarisation, a geometry with no real solution),
and file readers raise `OSError` when a file cannot be opened.

## What the package does not do

- It is a library only: there is no command-line tool or graphical front end.
- It has no model of the sea-surface reflected path (relative delay,
  relative amplitude and loss of a two-ray multipath channel); `fading`
  covers only fade depth statistics.
- It ships no climate or terrain databases. Values such as rain rate, water
  vapour density or liquid water content are inputs; `rain.find_rain_value`,
  `config.read_era15_hm` and `ionosphere.read_profile` read grids and
  profiles that you supply.