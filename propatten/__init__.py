"""Radio-wave propagation attenuation models: rain, snow, gas, cloud, fading, ionosphere and troposcatter."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "geometry",
    "rain",
    "snow",
    "troposcatter",
    "earth_space_rain",
    "earth_space_gas",
    "earth_space_cloud",
    "fading",
    "ionosphere",
]