import pytest

from propatten.geometry import ParameterError
from propatten.snow import (
    check_area_parameters,
    check_parameters,
    snow_attenuation,
    specific_attenuation,
)

VALID = dict(f=15e9, pp=1.0, satlon=120.0, satlat=30.0, satalt=10000.0,
             send_polar=0, lon=120.0, lat=30.0, alt=10.0, receive_polar=0,
             dia=1.0, antenna_efficiency=0.5)


def _snow(**overrides):
    args = dict(VALID, snow_type=2, start_distance=0.0, end_distance=100000.0)
    args.update(overrides)
    return snow_attenuation(**args)


def test_specific_attenuation_grows_with_snow_class():
    light = specific_attenuation(15.0, 0)
    moderate = specific_attenuation(15.0, 1)
    heavy = specific_attenuation(15.0, 2)
    assert 0 < light < moderate < heavy


def test_unknown_class_counts_as_heavy():
    assert specific_attenuation(15.0, 7) == specific_attenuation(15.0, 2)


def test_specific_attenuation_grows_with_frequency():
    assert specific_attenuation(12.0, 1) < specific_attenuation(18.0, 1)


def test_specific_attenuation_rejects_high_frequency():
    with pytest.raises(ParameterError):
        specific_attenuation(25.0, 1)


def test_snow_attenuation_worked_example():
    assert _snow() == pytest.approx(0.3)


def test_snow_attenuation_symmetric_in_distances():
    assert _snow(start_distance=100000.0, end_distance=0.0) == _snow()


def test_zero_length_gives_no_attenuation():
    assert _snow(start_distance=5000.0, end_distance=5000.0) == 0.0


def test_longer_path_attenuates_more():
    assert _snow(end_distance=1000000.0) > _snow(end_distance=100000.0)


def test_snow_attenuation_rejects_frequency_out_of_band():
    with pytest.raises(ParameterError):
        _snow(f=10e9)


def test_check_parameters_accepts_valid_inputs():
    assert check_parameters(**VALID) is None


@pytest.mark.parametrize("field,value", [
    ("dia", 6.0), ("antenna_efficiency", 1.5), ("satlon", 200.0),
    ("lat", -95.0), ("satlat", -10.0),
])
def test_check_parameters_rejects(field, value):
    args = dict(VALID)
    args[field] = value
    with pytest.raises(ParameterError):
        check_parameters(**args)


def test_check_area_parameters_accepts_valid():
    assert check_area_parameters(15.0, 30.0, 120.0, 31.0, 121.0, 29.0, 119.0, 32.0, 122.0) is None


@pytest.mark.parametrize("args", [
    (10.0, 30.0, 120.0, 31.0, 121.0, 29.0, 119.0, 32.0, 122.0),
    (15.0, 30.0, 190.0, 31.0, 121.0, 29.0, 119.0, 32.0, 122.0),
    (15.0, 30.0, 120.0, 31.0, 121.0, 99.0, 119.0, 32.0, 122.0),
])
def test_check_area_parameters_rejects(args):
    with pytest.raises(ParameterError):
        check_area_parameters(*args)