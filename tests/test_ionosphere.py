import math

import pytest

from propatten.ionosphere import (
    FaradayResult,
    dispersion,
    faraday_rotation,
    group_delay,
    ionospheric_absorption,
    read_profile,
    scintillation_loss,
    total_electron_content,
)

HEIGHTS = [60.0, 65.0, 70.0, 75.0, 80.0]
DENSITY = [1e5, 1e5, 1e5, 1e5, 1e5]


def test_absorption_scales_with_inverse_square_frequency():
    assert ionospheric_absorption(1.0, 30.0) / ionospheric_absorption(2.0, 30.0) == \
        pytest.approx(4.0)


def test_absorption_halves_from_30_to_90_degrees():
    assert ionospheric_absorption(1.0, 30.0) / ionospheric_absorption(1.0, 90.0) == \
        pytest.approx(2.0, rel=1e-6)


def test_faraday_rotation_scales_with_frequency():
    low = faraday_rotation(DENSITY, HEIGHTS, 78000.0, 1e9, 45.0, 0.0)
    high = faraday_rotation(DENSITY, HEIGHTS, 78000.0, 2e9, 45.0, 0.0)
    assert isinstance(low, FaradayResult)
    assert low.rotation / high.rotation == pytest.approx(4.0)


def test_faraday_rotation_linear_in_density():
    single = faraday_rotation(DENSITY, HEIGHTS, 78000.0, 1e9, 45.0, 0.0)
    double = faraday_rotation([2 * n for n in DENSITY], HEIGHTS, 78000.0, 1e9, 45.0, 0.0)
    assert double.rotation == pytest.approx(2 * single.rotation)


def test_small_rotation_gives_small_loss_and_large_xpd():
    result = faraday_rotation(DENSITY, HEIGHTS, 78000.0, 10e9, 45.0, 0.0)
    assert 0 < result.rotation < 45
    assert result.attenuation >= 0
    assert result.xpd > 0


def test_faraday_rotation_requires_profile_above_height():
    with pytest.raises(ValueError):
        faraday_rotation(DENSITY, HEIGHTS, 90000.0, 1e9, 45.0, 0.0)


def test_faraday_rotation_requires_matching_field_heights():
    with pytest.raises(ValueError):
        faraday_rotation(DENSITY, [61.0, 66.0, 71.0, 76.0, 81.0], 78000.0, 1e9, 45.0, 0.0)


def test_total_electron_content_constant_profile():
    heights = [0.0, 10.0, 20.0, 30.0]
    density = [1.0, 1.0, 1.0, 1.0]
    assert total_electron_content(density, heights, 20.0, 90.0) == pytest.approx(20000.0)


def test_total_electron_content_grows_linearly_with_height():
    heights = [0.0, 10.0, 20.0, 30.0]
    density = [3.0, 3.0, 3.0, 3.0]
    full = total_electron_content(density, heights, 20.0, 60.0)
    half = total_electron_content(density, heights, 10.0, 60.0)
    partial = total_electron_content(density, heights, 15.0, 60.0)
    assert full == pytest.approx(2 * half)
    assert partial == pytest.approx(1.5 * half)


def test_group_delay_scales_with_frequency():
    heights = [0.0, 10.0, 20.0]
    density = [1e11, 1e11, 1e11]
    ratio = group_delay(density, heights, 15.0, 1e9, 45.0) / \
        group_delay(density, heights, 15.0, 2e9, 45.0)
    assert ratio == pytest.approx(4.0)


def test_dispersion_linear_in_bandwidth():
    heights = [0.0, 10.0, 20.0]
    density = [1e11, 1e11, 1e11]
    narrow = dispersion(density, heights, 15.0, 1e9, 1e6, 45.0)
    wide = dispersion(density, heights, 15.0, 1e9, 2e6, 45.0)
    assert wide[0] == pytest.approx(2 * narrow[0])
    assert wide[1] == pytest.approx(2 * narrow[1])
    assert wide[2] > narrow[2]


def test_scintillation_loss_frequency_dependence():
    low = scintillation_loss(120.3, 36.1, 120.3, 0.007, 1.0, 30.0)
    high = scintillation_loss(120.3, 36.1, 120.3, 0.007, 2.0, 30.0)
    assert low > high > 0
    assert low / high == pytest.approx(2 ** 1.89)


def test_read_profile_crlf(tmp_path):
    path = tmp_path / "ion.txt"
    path.write_bytes(b"60 1.5\r\n65\t2.5\r\n")
    heights, densities = read_profile(path)
    assert heights == [60.0, 65.0]
    assert densities == [1.5, 2.5]


def test_read_profile_unix_newlines_and_blank_lines(tmp_path):
    path = tmp_path / "ion.txt"
    path.write_text("70 3\n\n75 4\n", encoding="utf-8")
    assert read_profile(path) == ([70.0, 75.0], [3.0, 4.0])


def test_read_profile_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_profile(tmp_path / "absent.txt")


def test_read_profile_malformed_line(tmp_path):
    path = tmp_path / "ion.txt"
    path.write_text("60\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_profile(path)


def test_profile_roundtrip_into_rotation(tmp_path):
    path = tmp_path / "ion.txt"
    path.write_text("\n".join(f"{h} {n}" for h, n in zip(HEIGHTS, DENSITY)), encoding="utf-8")
    heights, densities = read_profile(path)
    from_file = faraday_rotation(densities, heights, 78000.0, 1e9, 45.0, 0.0)
    direct = faraday_rotation(DENSITY, HEIGHTS, 78000.0, 1e9, 45.0, 0.0)
    assert math.isclose(from_file.rotation, direct.rotation)