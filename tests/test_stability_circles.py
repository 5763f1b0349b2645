import numpy as np
import pytest

from gbc_stability.core.parameters import ParameterSet, OperatingPoint, StabilityCircle
from gbc_stability.physics.stability_circles import (
    stability_boundary, voltage_contour, classify, voltage_ratio, is_singular,
    contour_points, K_SENTINEL, DEFAULT_K_VALUES
)

PARAMETER_GRID = [
    ParameterSet(),
    ParameterSet(Xd=1.0, Xd_prime=0.25, XL=0.5),
    ParameterSet(Xd=2.2, Xd_prime=0.2, XL=10.0, Td0_prime=8.0, Tq0_prime=0.4),
    ParameterSet(Xd=0.31, Xd_prime=0.3, XL=0.01),
]


def test_boundary_default_parameters(params):
    boundary = stability_boundary(params)
    assert boundary.centerG == 0.0
    assert boundary.centerBc == pytest.approx(0.5 * (1 / 5.3 + 1 / 6.8))
    assert boundary.centerBc == pytest.approx(0.167869, abs=1e-6)
    assert boundary.radius == pytest.approx(1.5 / (2 * 5.3 * 6.8))
    assert boundary.radius == pytest.approx(0.020810, abs=1e-6)


@pytest.mark.parametrize("p", PARAMETER_GRID)
def test_boundary_lies_in_positive_susceptance(p):
    boundary = stability_boundary(p)
    assert boundary.radius > 0
    assert boundary.centerBc > 0
    assert boundary.centerBc - boundary.radius > 0


def test_classify_scenarios(params):
    boundary = stability_boundary(params)
    # Well outside the circle
    assert classify(OperatingPoint(0.1, 0.15), boundary)
    assert classify(OperatingPoint(0.05, 0.20), boundary)
    # Just outside the circle (distance ~0.0234 > radius ~0.0208)
    assert classify(OperatingPoint(0.02, 0.18), boundary)
    # Inside the circle
    assert not classify(OperatingPoint(0.005, 0.17), boundary)
    assert not classify(OperatingPoint(0.0, boundary.centerBc), boundary)


def test_classify_boundary_point_is_unstable():
    circle = StabilityCircle(centerG=0.0, centerBc=0.0, radius=1.0)
    assert not classify(OperatingPoint(1.0, 0.0), circle)
    assert classify(OperatingPoint(1.0 + 1e-12, 0.0), circle)


def test_voltage_contour_geometry(params):
    c1 = voltage_contour(params, 1.0)
    assert c1.centerG == 0.0
    assert c1.centerBc == pytest.approx(1 / 5.3)
    assert c1.radius == pytest.approx(1 / 5.3)

    radii = [voltage_contour(params, k).radius for k in (0.5, 1.0, 2.0, 10.0, 1e6)]
    assert all(np.diff(radii) < 0)
    assert radii[-1] < 1e-6


@pytest.mark.parametrize("k", [0.0, -1.0])
def test_voltage_contour_requires_positive_k(params, k):
    with pytest.raises(ValueError):
        voltage_contour(params, k)


@pytest.mark.parametrize("p", PARAMETER_GRID)
@pytest.mark.parametrize("k", DEFAULT_K_VALUES + (3.0,))
def test_points_on_contour_have_matching_voltage_ratio(p, k):
    g, bc = contour_points(voltage_contour(p, k), step=0.1)
    ratios = [voltage_ratio(OperatingPoint(gi, bci), p) for gi, bci in zip(g, bc)]
    np.testing.assert_allclose(ratios, k, rtol=1e-9)


def test_voltage_ratio_scenario(params):
    k = voltage_ratio(OperatingPoint(0.1, 0.15), params)
    assert k == pytest.approx(1 / np.sqrt(0.205 ** 2 + 0.53 ** 2))
    assert not is_singular(k)


def test_voltage_ratio_singular_point(params):
    k = voltage_ratio(OperatingPoint(0.0, 1 / 5.3), params)
    assert k == K_SENTINEL == 999
    assert is_singular(k)


def test_large_voltage_ratio_is_not_sentinel(params):
    k = voltage_ratio(OperatingPoint(0.0, 1 / 5.3 + 1e-4), params)
    assert k == pytest.approx(1 / 5.3e-4)
    assert not is_singular(k)
    assert not is_singular(1000.0)


def test_contour_points_window():
    circle = StabilityCircle(centerG=0.0, centerBc=0.2, radius=0.1)
    g, bc = contour_points(circle)
    assert len(g) == len(bc) == len(np.arange(-np.pi, np.pi + 1e-12, 0.02))
    np.testing.assert_allclose(np.hypot(g, bc - 0.2), 0.1)

    g, bc = contour_points(circle, g_range=(0.0, 1.0), bc_range=(0.2, 1.0))
    assert len(g) > 0
    assert np.all(g >= 0.0) and np.all(bc >= 0.2)
