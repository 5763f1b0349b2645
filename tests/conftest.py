import pytest

from gbc_stability.core.parameters import ParameterSet


@pytest.fixture
def params():
    return ParameterSet(Xd=1.8, Xd_prime=0.3, XL=5.0, Td0_prime=5.0, Tq0_prime=1.0)
