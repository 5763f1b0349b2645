"""
Physics package for the G-Bc stability engine.

This package provides:
- Admittance aggregation of the load bus
- Self-excitation boundary and equal-k contour geometry
- Characteristic-equation eigenvalue solver
"""

from .admittance import aggregate
from .stability_circles import (
    stability_boundary, voltage_contour, classify, voltage_ratio,
    is_singular, contour_points, DEGENERATE_TOL, K_SENTINEL, DEFAULT_K_VALUES
)
from .eigen_solver import eigen, EigenResult, EigenKind

__all__ = [
    'aggregate',
    'stability_boundary',
    'voltage_contour',
    'classify',
    'voltage_ratio',
    'is_singular',
    'contour_points',
    'DEGENERATE_TOL',
    'K_SENTINEL',
    'DEFAULT_K_VALUES',
    'eigen',
    'EigenResult',
    'EigenKind'
]
