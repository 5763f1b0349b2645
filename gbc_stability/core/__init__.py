"""
Core data structures: machine parameters, load-bus configuration and
G-Bc plane geometry.
"""

from .parameters import (
    ParameterSet, ComponentKind, ComponentSpec, SystemConfiguration,
    OperatingPoint, StabilityCircle
)

__all__ = [
    'ParameterSet', 'ComponentKind', 'ComponentSpec', 'SystemConfiguration',
    'OperatingPoint', 'StabilityCircle'
]
