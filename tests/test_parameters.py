import pytest

from gbc_stability.core.parameters import (
    ParameterSet, ComponentKind, ComponentSpec, SystemConfiguration,
    OperatingPoint, StabilityCircle
)


def test_default_parameters(params):
    assert ParameterSet() == params
    assert params.X_total == pytest.approx(5.3)
    assert params.X_sync == pytest.approx(6.8)
    assert params.Xdq == pytest.approx(1.5)


@pytest.mark.parametrize("kwargs", [
    dict(Xd=0.3, Xd_prime=0.3),
    dict(Xd=0.2, Xd_prime=0.3),
    dict(Xd_prime=0.0),
    dict(XL=0.0),
    dict(Td0_prime=-1.0),
    dict(Tq0_prime=0.0),
])
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        ParameterSet(**kwargs)


def test_parameters_are_immutable(params):
    with pytest.raises(AttributeError):
        params.Xd = 2.0


def test_parameters_from_dict_ignores_unknown_keys():
    p = ParameterSet.from_dict({'Xd': 2.0, 'XL': 4.0, 'colour': 'red'})
    assert p.Xd == 2.0
    assert p.XL == 4.0
    assert p.Xd_prime == 0.3
    assert ParameterSet.from_dict(p.to_dict()) == p


@pytest.mark.parametrize("value", [None, 'abc', [1.8]])
def test_parameters_from_dict_rejects_non_numbers(value):
    with pytest.raises(ValueError, match="Xd"):
        ParameterSet.from_dict({'Xd': value})


def test_component_spec():
    cap = ComponentSpec('C1', 'capacitor', magnitude=0.1)
    assert cap.kind == ComponentKind.CAPACITOR
    assert cap.connected
    cap.toggle()
    assert not cap.connected

    with pytest.raises(ValueError):
        ComponentSpec('L1', ComponentKind.LOAD, magnitude=-0.1)


def test_system_configuration():
    config = SystemConfiguration([
        ComponentSpec('L1', ComponentKind.LOAD, 0.05),
        ComponentSpec('C1', ComponentKind.CAPACITOR, 0.1),
    ], V=1.0)
    assert [c.name for c in config.loads()] == ['L1']
    assert [c.name for c in config.capacitors()] == ['C1']

    config.toggle('C1')
    assert not config.get('C1').connected
    config.set_magnitude('L1', 0.2)
    assert config.get('L1').magnitude == 0.2

    with pytest.raises(KeyError):
        config.get('missing')
    with pytest.raises(ValueError):
        config.set_magnitude('L1', -1.0)


@pytest.mark.parametrize("V", [0.0, -1.0])
def test_configuration_requires_positive_voltage(V):
    with pytest.raises(ValueError):
        SystemConfiguration([], V=V)


def test_configuration_rejects_duplicate_names():
    with pytest.raises(ValueError):
        SystemConfiguration([
            ComponentSpec('X', ComponentKind.LOAD, 0.1),
            ComponentSpec('X', ComponentKind.CAPACITOR, 0.1),
        ])


def test_circle_distance_and_containment():
    circle = StabilityCircle(centerG=0.0, centerBc=0.0, radius=1.0)
    assert circle.distance_to(OperatingPoint(3.0, 4.0)) == pytest.approx(5.0)
    assert circle.contains(OperatingPoint(0.5, 0.5))
    assert circle.contains(OperatingPoint(1.0, 0.0))
    assert not circle.contains(OperatingPoint(1.1, 0.0))
