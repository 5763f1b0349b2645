"""
Stability boundary and equal-voltage contours in the G-Bc plane.

This module provides the closed-form geometry of the self-excitation problem:
- Self-excitation boundary circle derived from the machine reactances
- Family of equal voltage-ratio (k) circles
- Classification of operating points against the boundary
- Direct steady-state voltage ratio of an operating point

Reference: Kundur "Power System Stability and Control", self-excitation of
synchronous machines on capacitive load
"""

import logging
import numpy as np
from typing import Optional, Tuple

from ..core.parameters import ParameterSet, OperatingPoint, StabilityCircle

logger = logging.getLogger(__name__)

# Below this the operating point coincides with the contour center
DEGENERATE_TOL = 1e-10

# Returned by voltage_ratio() for a singular operating point
K_SENTINEL = 999.0

DEFAULT_K_VALUES = (0.8, 0.9, 1.0, 1.1, 1.2, 1.5)


def stability_boundary(params: ParameterSet) -> StabilityCircle:
    """
    Self-excitation boundary circle.

    Points strictly outside the circle are stable; points inside or on it
    self-excite.

    Args:
        params: Machine and network constants

    Returns:
        StabilityCircle centered on the Bc axis
    """
    X1 = params.X_total
    X2 = params.X_sync

    Bc_center = 0.5 * (1.0 / X1 + 1.0 / X2)
    R = (params.Xd - params.Xd_prime) / (2.0 * X1 * X2)

    return StabilityCircle(centerG=0.0, centerBc=Bc_center, radius=R)


def voltage_contour(params: ParameterSet, k: float) -> StabilityCircle:
    """
    Circle of equal steady-state voltage ratio k.

    Contours share the center (0, 1/X) and shrink as k grows.

    Args:
        params: Machine and network constants
        k: Requested voltage ratio (> 0)

    Returns:
        StabilityCircle with radius 1/(k*X)
    """
    if not k > 0:
        raise ValueError(f"Voltage ratio k must be positive, got {k}")

    X_total = params.X_total
    return StabilityCircle(centerG=0.0, centerBc=1.0 / X_total, radius=1.0 / (k * X_total))


def classify(point: OperatingPoint, boundary: StabilityCircle) -> bool:
    """Return True when the point lies strictly outside the boundary circle"""
    return boundary.distance_to(point) > boundary.radius


def voltage_ratio(point: OperatingPoint, params: ParameterSet) -> float:
    """
    Steady-state ratio of load-bus voltage to internal machine voltage.

    Returns K_SENTINEL when the point sits on the common center of the
    k contours, where the ratio is unbounded.
    """
    X = params.X_total
    denom = np.sqrt((1.0 - point.Bc * X) ** 2 + (point.G * X) ** 2)

    if denom < DEGENERATE_TOL:
        logger.debug(f"Singular operating point G={point.G}, Bc={point.Bc}: k undefined")
        return K_SENTINEL

    return float(1.0 / denom)


def is_singular(k: float) -> bool:
    """Whether a voltage ratio is the singular-point sentinel"""
    return k == K_SENTINEL


def contour_points(circle: StabilityCircle,
                   step: float = 0.02,
                   g_range: Optional[Tuple[float, float]] = None,
                   bc_range: Optional[Tuple[float, float]] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample a circle from -pi to pi.

    Args:
        circle: Circle to sample
        step: Angular step (rad)
        g_range: Optional (min, max) window on G; points outside are dropped
        bc_range: Optional (min, max) window on Bc

    Returns:
        (G, Bc) arrays of the retained points, in angular order
    """
    theta = np.arange(-np.pi, np.pi + 1e-12, step)
    g = circle.centerG + circle.radius * np.cos(theta)
    bc = circle.centerBc + circle.radius * np.sin(theta)

    mask = np.ones_like(theta, dtype=bool)
    if g_range is not None:
        mask &= (g >= g_range[0]) & (g <= g_range[1])
    if bc_range is not None:
        mask &= (bc >= bc_range[0]) & (bc <= bc_range[1])

    return g[mask], bc[mask]
