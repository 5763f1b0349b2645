"""
Transient Simulator - Post-Disturbance Voltage Envelope

This module shapes the load-bus voltage following a disturbance at a fixed
operating point:
- Nominal voltage (1.0 pu) until the disturbance
- Damped (oscillatory or monotone) approach to the new steady-state ratio k
  when the operating point is stable
- Capped exponential rise when the operating point self-excites

The curve is built analytically from the dominant eigenvalue rather than by
integrating state equations. The time grid is fixed.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterator, List

from ..core.parameters import ParameterSet, OperatingPoint
from ..physics.stability_circles import stability_boundary, classify, voltage_ratio
from ..physics.eigen_solver import eigen, EigenResult

logger = logging.getLogger(__name__)

V_NOMINAL = 1.0
V_MIN = 0.4
V_MAX = 2.5
OSC_AMPLITUDE = 0.2   # Relative size of the post-disturbance excursion
GROWTH_RATE = 0.5     # Scaling of |Re(s)| in the unstable envelope
GROWTH_CAP = 4.0


@dataclass(frozen=True)
class SimulationSettings:
    """Disturbance and time grid"""
    t_disturbance: float = 0.5  # Disturbance time (s)
    t_max: float = 8.0          # Horizon (s)
    dt: float = 0.02            # Step (s)

    @property
    def n_steps(self) -> int:
        return int(round(self.t_max / self.dt))

    def time_grid(self) -> np.ndarray:
        """Sample times 0, dt, ..., t_max"""
        return np.linspace(0.0, self.t_max, self.n_steps + 1)


DEFAULT_SETTINGS = SimulationSettings()


@dataclass(frozen=True)
class TrajectorySample:
    """One voltage sample"""
    t: float
    voltage: float
    stable: bool


class Trajectory:
    """Ordered voltage samples of a single simulation run"""

    def __init__(self, samples: List[TrajectorySample], settings: SimulationSettings):
        self._samples = list(samples)
        self.settings = settings

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[TrajectorySample]:
        return iter(self._samples)

    def __getitem__(self, index) -> TrajectorySample:
        return self._samples[index]

    @property
    def time(self) -> np.ndarray:
        return np.array([s.t for s in self._samples])

    @property
    def voltage(self) -> np.ndarray:
        return np.array([s.voltage for s in self._samples])

    @property
    def stable(self) -> bool:
        """Stability flag of the simulated operating point"""
        return bool(self._samples) and self._samples[0].stable

    def summary(self) -> Dict[str, float]:
        """Return summary statistics as dictionary."""
        v = self.voltage
        post = v[self.time > self.settings.t_disturbance]
        return {
            'n_samples': len(self._samples),
            'stable': self.stable,
            'v_peak_pu': float(v.max()),
            'v_min_pu': float(v.min()),
            'v_final_pu': float(v[-1]),
            'clamped': bool(np.any(post >= V_MAX) or np.any(post <= V_MIN)),
        }


class TransientSimulator:
    """
    Post-disturbance voltage envelope at a fixed operating point.

    The operating point and parameters are held constant for the whole run;
    every call to run() generates a fresh trajectory.
    """

    def __init__(self, params: ParameterSet, settings: SimulationSettings = DEFAULT_SETTINGS):
        """
        Initialize simulator.

        Args:
            params: Machine and network constants
            settings: Disturbance time and time grid
        """
        self.params = params
        self.settings = settings

    def envelope(self, tau: np.ndarray, k: float, eig: EigenResult, stable: bool) -> np.ndarray:
        """
        Voltage after the disturbance, before clamping.

        Args:
            tau: Time since the disturbance (s)
            k: Steady-state voltage ratio
            eig: Dominant eigenvalue at the operating point
            stable: Stability of the operating point
        """
        if stable:
            decay = np.exp(eig.real * tau)
            osc = np.cos(eig.imag * tau) if eig.oscillatory else 1.0
            return k * (1.0 + OSC_AMPLITUDE * decay * osc)

        growth = np.minimum(np.exp(GROWTH_RATE * abs(eig.real) * tau), GROWTH_CAP)
        return k * growth

    def run(self, point: OperatingPoint) -> Trajectory:
        """
        Simulate a disturbance at the given operating point.

        Args:
            point: Fixed operating point (G, Bc)

        Returns:
            Trajectory over the fixed time grid
        """
        settings = self.settings
        t = settings.time_grid()

        k = voltage_ratio(point, self.params)
        eig = eigen(point, self.params)
        # Conservative: both the boundary test and the eigenvalues must agree
        stable = classify(point, stability_boundary(self.params)) and eig.stable

        voltage = np.full_like(t, V_NOMINAL)
        after = t > settings.t_disturbance
        tau = t[after] - settings.t_disturbance
        voltage[after] = self.envelope(tau, k, eig, stable)
        voltage = np.clip(voltage, V_MIN, V_MAX)

        logger.info(
            f"Simulated G={point.G:.4f}, Bc={point.Bc:.4f}: "
            f"{'stable' if stable else 'unstable'}, k={k:.3f}, Re(s)={eig.real:.4f}"
        )

        samples = [TrajectorySample(t=float(ti), voltage=float(vi), stable=stable)
                   for ti, vi in zip(t, voltage)]
        return Trajectory(samples, settings)


def simulate(point: OperatingPoint, params: ParameterSet) -> Trajectory:
    """Run the fixed-grid disturbance simulation at an operating point"""
    return TransientSimulator(params).run(point)
