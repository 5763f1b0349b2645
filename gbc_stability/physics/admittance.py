"""
Reduce the switchable load bus to its aggregate admittance (G, Bc).
"""

from ..core.parameters import SystemConfiguration, OperatingPoint


def aggregate(config: SystemConfiguration) -> OperatingPoint:
    """
    Aggregate connected components into a single operating point.

    Loads contribute conductance, capacitors contribute capacitive
    susceptance; both are normalised by V^2. Disconnected components
    contribute nothing.

    Args:
        config: System configuration (V > 0 guaranteed by construction)

    Returns:
        OperatingPoint with G and Bc in pu
    """
    V_sq = config.V ** 2

    P_total = sum(c.magnitude for c in config.loads() if c.connected)
    Q_total = sum(c.magnitude for c in config.capacitors() if c.connected)

    return OperatingPoint(G=P_total / V_sq, Bc=Q_total / V_sq)
