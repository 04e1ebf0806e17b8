import pytest

from propatten.troposcatter import (
    climate_params,
    effective_earth_radius,
    interp1,
    inverse_normal,
    linear,
    tropo_scatter,
    troposcatter_loss,
    y90,
)


def test_inverse_normal_median_is_zero():
    assert inverse_normal(0.5) == pytest.approx(0.0, abs=1e-3)


def test_inverse_normal_ten_percent():
    assert inverse_normal(0.1) == pytest.approx(1.2816, abs=1e-3)


@pytest.mark.parametrize("x", [0.25, 0.125, 0.375])
def test_inverse_normal_antisymmetric(x):
    assert inverse_normal(1 - x) == pytest.approx(-inverse_normal(x))


def test_inverse_normal_clamps():
    assert inverse_normal(0.0) == inverse_normal(1e-6)
    assert inverse_normal(1.0) == inverse_normal(0.999999)


def test_inverse_normal_decreasing():
    values = [inverse_normal(x) for x in (0.01, 0.2, 0.5, 0.8, 0.99)]
    assert values == sorted(values, reverse=True)


def test_linear_hits_its_points():
    assert linear(1.0, 3.0, 4.0, 9.0, 1.0) == 3.0
    assert linear(1.0, 3.0, 4.0, 9.0, 4.0) == 9.0


def test_interp1_returns_knots():
    x = [0.0, 1.0, 2.0, 5.0]
    y = [3.0, -1.0, 4.0, 8.0]
    assert interp1(x, y, x, "linear") == pytest.approx(y)


def test_interp1_nearest_holds_ends():
    x = [0.0, 1.0, 2.0]
    y = [0.0, 10.0, 20.0]
    assert interp1(x, y, [-5.0, 9.0], "nearest") == [0.0, 20.0]


def test_interp1_linear_extends_end_segments():
    x = [0.0, 1.0, 2.0]
    y = [0.0, 10.0, 20.0]
    low, mid, high = interp1(x, y, [-1.0, 0.5, 3.0], "linear")
    assert low < 0.0 < mid < 10.0 < 20.0 < high
    assert high - 20.0 == pytest.approx(0.0 - low)


def test_interp1_rejects_unknown_method():
    with pytest.raises(ValueError):
        interp1([0.0, 1.0], [0.0, 1.0], [0.5], "cubic")


def test_effective_earth_radius_without_gradient():
    assert effective_earth_radius(0) == 6371.0


def test_effective_earth_radius_grows_with_gradient():
    assert effective_earth_radius(40) > effective_earth_radius(20) > 6371.0


def test_climate_params_zones_four_and_five_share_values():
    assert climate_params(4) == climate_params(5) == (38.50, 0.27)


def test_climate_params_unknown_zone():
    with pytest.raises(ValueError):
        climate_params(9)


def test_y90_table_ends():
    assert y90(1000.0, 1.0, 1, 1000.0, 100.0) == -8.1
    assert y90(1000.0, 1.0, 1, 1000.0, 2000.0) == -3.1


def test_y90_table_interior_between_neighbours():
    value = y90(1000.0, 1.0, 1, 1000.0, 150.0)
    assert -8.1 < value < -6.6


def test_y90_zone_without_model():
    with pytest.raises(ValueError):
        y90(1000.0, 1.0, 5, 8500.0, 30.0)


def test_y90_falls_off_with_height():
    assert y90(1000.0, 0.0, 2, 8500.0, 30.0) < y90(1000.0, 10.0, 2, 8500.0, 30.0)


def test_line_of_sight_link_has_no_scatter_loss():
    result = tropo_scatter(1000.0, 50.0, 50.0, 10.0, 50.0, 30.0, 30.0, 40.0, 1)
    assert result.loss == 0.0
    assert result.beyond_horizon is False


def test_trans_horizon_link_reports_loss():
    result = tropo_scatter(1000.0, 50.0, 50.0, 300.0, 50.0, 30.0, 30.0, 40.0, 1)
    assert result.beyond_horizon is True
    assert result.loss > 100.0


def test_longer_link_loses_more():
    near = tropo_scatter(1000.0, 50.0, 50.0, 300.0, 50.0, 30.0, 30.0, 40.0, 1)
    far = tropo_scatter(1000.0, 50.0, 50.0, 500.0, 50.0, 30.0, 30.0, 40.0, 1)
    assert far.loss > near.loss


def test_gradient_sign_is_ignored():
    up = tropo_scatter(1000.0, 50.0, 50.0, 300.0, 50.0, 30.0, 30.0, 40.0, 2)
    down = tropo_scatter(1000.0, 50.0, 50.0, 300.0, 50.0, 30.0, 30.0, -40.0, 2)
    assert up == down


def test_loss_at_ninety_percent_shifts_by_sigma():
    median = troposcatter_loss(1000.0, 300.0, 50.0, 28.0, 30.0, 30.0, 8549.0, 2)
    high = troposcatter_loss(1000.0, 300.0, 90.0, 28.0, 30.0, 30.0, 8549.0, 2)
    assert median.sigma == high.sigma
    assert high.loss - median.loss == pytest.approx(1.2816 * median.sigma, rel=0.01)


def test_sigma_positive_for_negative_y90():
    result = troposcatter_loss(1000.0, 300.0, 50.0, 28.0, 30.0, 30.0, 8549.0, 8)
    assert result.sigma > 0


def test_troposcatter_loss_rejects_unknown_zone():
    with pytest.raises(ValueError):
        troposcatter_loss(1000.0, 300.0, 50.0, 28.0, 30.0, 30.0, 8549.0, 0)