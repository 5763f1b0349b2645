import numpy as np
import pytest

from gbc_stability.core.parameters import (
    ParameterSet, ComponentKind, ComponentSpec, SystemConfiguration, OperatingPoint
)
from gbc_stability.physics.stability_circles import stability_boundary, classify
from gbc_stability.analysis.stability_analyzer import (
    StabilityAnalyzer, boundary_margin, critical_susceptance, stability_map
)


def make_config():
    return SystemConfiguration([
        ComponentSpec('L1', ComponentKind.LOAD, 0.05),
        ComponentSpec('C1', ComponentKind.CAPACITOR, 0.12),
        ComponentSpec('C2', ComponentKind.CAPACITOR, 0.05, connected=False),
    ])


def test_default_analyzer_uses_stable_preset():
    analyzer = StabilityAnalyzer()
    assert analyzer.mode == 'direct'
    assert analyzer.operating_point() == OperatingPoint(0.05, 0.20)
    assert analyzer.evaluate().stable


def test_aggregate_mode_recomputes_after_toggle(params):
    config = make_config()
    analyzer = StabilityAnalyzer(params, config)
    assert analyzer.mode == 'aggregate'
    assert analyzer.operating_point().Bc == pytest.approx(0.12)

    config.toggle('C2')
    assert analyzer.operating_point().Bc == pytest.approx(0.17)


def test_switching_modes(params):
    analyzer = StabilityAnalyzer(params, make_config())
    analyzer.set_operating_point(0.005, 0.17)
    assert analyzer.mode == 'direct'
    assert not analyzer.evaluate().stable

    analyzer.set_configuration(make_config())
    assert analyzer.mode == 'aggregate'
    assert analyzer.operating_point().G == pytest.approx(0.05)


def test_presets(params):
    analyzer = StabilityAnalyzer(params)
    analyzer.apply_preset('unstable')
    assert analyzer.operating_point() == OperatingPoint(0.02, 0.18)
    with pytest.raises(KeyError):
        analyzer.apply_preset('marginal')


def test_rejects_unknown_source(params):
    with pytest.raises(TypeError):
        StabilityAnalyzer(params, (0.1, 0.15))


def test_report(params):
    report = StabilityAnalyzer(params, OperatingPoint(0.1, 0.15)).evaluate()
    assert report.stable
    assert not report.singular
    assert report.eigen.stable
    assert report.margin > 0
    summary = report.summary()
    assert summary['stable'] is True
    assert summary['eigen_kind'] == 'real_pair'
    assert summary['k'] == pytest.approx(report.k)


def test_singular_report(params):
    report = StabilityAnalyzer(params, OperatingPoint(0.0, 1 / 5.3)).evaluate()
    assert report.singular
    assert not report.stable
    assert report.summary()['k'] is None
    assert report.summary()['eigen_kind'] == 'degenerate'


def test_point_near_contour_center_is_not_singular(params):
    point = OperatingPoint(0.0, 1 / 5.3 + 1e-4)
    report = StabilityAnalyzer(params, point).evaluate()
    assert not report.singular
    assert report.stable
    assert report.stable == classify(point, stability_boundary(params))
    assert report.eigen.stable
    assert report.summary()['k'] == pytest.approx(1 / 5.3e-4)
    assert report.summary()['k'] > 999


def test_set_parameters_replaces_boundary(params):
    analyzer = StabilityAnalyzer(params, OperatingPoint(0.0, 0.5))
    assert analyzer.evaluate().stable
    analyzer.set_parameters(ParameterSet(Xd=1.0, Xd_prime=0.25, XL=0.5))
    assert analyzer.evaluate().boundary.centerBc == pytest.approx(1.0)
    assert analyzer.evaluate().stable


def test_simulate_uses_current_point(params):
    analyzer = StabilityAnalyzer(params, OperatingPoint(0.005, 0.17))
    assert not analyzer.simulate().stable
    analyzer.apply_preset('stable')
    assert analyzer.simulate().stable


def test_boundary_margin(params):
    boundary = stability_boundary(params)
    assert boundary_margin(OperatingPoint(0.1, 0.15), boundary) > 0
    assert boundary_margin(OperatingPoint(0.0, boundary.centerBc), boundary) == pytest.approx(
        -boundary.radius)


@pytest.mark.parametrize("G", [0.0, 0.005, 0.01, 0.02])
def test_critical_susceptance_on_lower_arc(params, G):
    boundary = stability_boundary(params)
    bc_crit = critical_susceptance(G, params)
    expected = boundary.centerBc - np.sqrt(boundary.radius ** 2 - G ** 2)
    assert bc_crit == pytest.approx(expected, abs=1e-8)
    assert classify(OperatingPoint(G, bc_crit - 1e-6), boundary)
    assert not classify(OperatingPoint(G, bc_crit + 1e-6), boundary)


def test_critical_susceptance_outside_region(params):
    assert critical_susceptance(0.05, params) is None


def test_stability_map(params):
    g_values = np.linspace(0.0, 0.25, 11)
    bc_values = np.linspace(0.05, 0.35, 13)
    grid = stability_map(params, g_values, bc_values)
    assert grid.shape == (13, 11)
    assert grid.dtype == bool
    boundary = stability_boundary(params)
    for i, bc in enumerate(bc_values):
        for j, g in enumerate(g_values):
            assert grid[i, j] == classify(OperatingPoint(g, bc), boundary)
    assert grid.any() and not grid.all()
