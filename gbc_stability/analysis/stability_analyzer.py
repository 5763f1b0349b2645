"""
Stability Analyzer for the G-Bc plane

This module ties the engine together for a calling session:
1. Holds the current parameters and either a switchable configuration or a
   directly set operating point
2. Re-evaluates the operating point from scratch on every request
3. Locates the critical capacitive susceptance at a given load
4. Builds stability maps over a grid of operating points
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Dict, Optional, Union, Any
from scipy.optimize import brentq

from ..core.parameters import ParameterSet, SystemConfiguration, OperatingPoint, StabilityCircle
from ..physics.admittance import aggregate
from ..physics.stability_circles import stability_boundary, classify, voltage_ratio, is_singular
from ..physics.eigen_solver import eigen, EigenResult, EigenKind
from ..transient.simulator import simulate, Trajectory
from ..utils.config_loader import PRESET_POINTS

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """
    Container for the evaluation of one operating point.
    """
    point: OperatingPoint
    boundary: StabilityCircle
    stable: bool
    k: float
    singular: bool
    eigen: EigenResult
    margin: float

    def summary(self) -> Dict[str, Any]:
        """Return summary statistics as dictionary."""
        return {
            'G_pu': self.point.G,
            'Bc_pu': self.point.Bc,
            'stable': self.stable,
            'k': None if self.singular else self.k,
            'singular': self.singular,
            'eigen_kind': self.eigen.kind.value,
            'eigen_real': self.eigen.real,
            'eigen_imag': self.eigen.imag,
            'oscillatory': self.eigen.oscillatory,
            'boundary_margin_pu': self.margin,
        }


def boundary_margin(point: OperatingPoint, boundary: StabilityCircle) -> float:
    """Signed distance outside the boundary circle (negative inside)"""
    return boundary.distance_to(point) - boundary.radius


def critical_susceptance(G: float, params: ParameterSet,
                         xtol: float = 1e-12) -> Optional[float]:
    """
    Capacitive susceptance at which stability is lost at fixed G.

    Starting below the boundary circle and increasing Bc, the
    dominant eigenvalue crosses zero on the lower arc of the boundary. The
    crossing is located with Brent's method on Re(s).

    Args:
        G: Conductance (pu)
        params: Machine and network constants
        xtol: Absolute tolerance on Bc

    Returns:
        Critical Bc, or None when the vertical line G = const misses the
        unstable region
    """
    boundary = stability_boundary(params)
    if abs(G) >= boundary.radius:
        return None

    def dominant_real(bc: float) -> float:
        return eigen(OperatingPoint(G=G, Bc=bc), params).real

    # Bracket between one radius below the circle (stable) and its center (unstable)
    bc_low = boundary.centerBc - 2.0 * boundary.radius
    bc_high = boundary.centerBc

    return float(brentq(dominant_real, bc_low, bc_high, xtol=xtol))


def stability_map(params: ParameterSet,
                  g_values: np.ndarray,
                  bc_values: np.ndarray) -> np.ndarray:
    """
    Classify a grid of operating points.

    Args:
        params: Machine and network constants
        g_values: 1-D array of G values (columns)
        bc_values: 1-D array of Bc values (rows)

    Returns:
        Boolean array of shape (len(bc_values), len(g_values)); True = stable
    """
    boundary = stability_boundary(params)
    return np.array([[classify(OperatingPoint(G=float(g), Bc=float(bc)), boundary)
                      for g in np.asarray(g_values, dtype=float)]
                     for bc in np.asarray(bc_values, dtype=float)], dtype=bool)


class StabilityAnalyzer:
    """
    Session-level entry point into the stability engine.

    The operating point comes either from a switchable configuration
    (aggregator mode) or from a directly set (G, Bc) pair; the most recent
    call decides which one is active.
    """

    def __init__(self,
                 params: Optional[ParameterSet] = None,
                 source: Optional[Union[SystemConfiguration, OperatingPoint]] = None):
        """
        Initialize analyzer.

        Args:
            params: Machine and network constants (defaults if omitted)
            source: SystemConfiguration or OperatingPoint (defaults to the
                'stable' preset)
        """
        self.params = params if params is not None else ParameterSet()
        self.configuration: Optional[SystemConfiguration] = None
        self._point: Optional[OperatingPoint] = None

        if isinstance(source, SystemConfiguration):
            self.set_configuration(source)
        elif isinstance(source, OperatingPoint):
            self._point = source
        elif source is None:
            self.apply_preset('stable')
        else:
            raise TypeError(f"Unsupported operating point source: {type(source).__name__}")

    def set_parameters(self, params: ParameterSet):
        """Replace the parameter set wholesale"""
        self.params = params
        logger.info(f"Parameters replaced: {params.to_dict()}")

    def set_configuration(self, config: SystemConfiguration):
        """Switch to aggregator mode"""
        self.configuration = config
        self._point = None

    def set_operating_point(self, G: float, Bc: float):
        """Switch to direct-manipulation mode"""
        self.configuration = None
        self._point = OperatingPoint(G=G, Bc=Bc)

    def apply_preset(self, name: str):
        """Set one of the named preset operating points"""
        if name not in PRESET_POINTS:
            raise KeyError(f"Unknown preset {name!r}; choose from {sorted(PRESET_POINTS)}")
        G, Bc = PRESET_POINTS[name]
        self.set_operating_point(G, Bc)

    @property
    def mode(self) -> str:
        return 'aggregate' if self.configuration is not None else 'direct'

    def operating_point(self) -> OperatingPoint:
        """Current operating point, recomputed from the configuration if needed"""
        if self.configuration is not None:
            return aggregate(self.configuration)
        return self._point

    def evaluate(self) -> AnalysisReport:
        """Evaluate the current operating point"""
        point = self.operating_point()
        boundary = stability_boundary(self.params)

        k = voltage_ratio(point, self.params)
        eig = eigen(point, self.params)
        # Only the contour center itself is singular
        singular = eig.kind == EigenKind.DEGENERATE or is_singular(k)
        stable = classify(point, boundary) and not singular

        report = AnalysisReport(
            point=point,
            boundary=boundary,
            stable=stable,
            k=k,
            singular=singular,
            eigen=eig,
            margin=boundary_margin(point, boundary),
        )

        logger.info(
            f"[{self.mode}] G={point.G:.4f} Bc={point.Bc:.4f} -> "
            f"{'stable' if stable else 'UNSTABLE (self-excitation)'}, "
            f"k={'singular' if singular else f'{k:.3f}'}"
        )
        return report

    def simulate(self) -> Trajectory:
        """Run the disturbance simulation at the current operating point"""
        return simulate(self.operating_point(), self.params)
