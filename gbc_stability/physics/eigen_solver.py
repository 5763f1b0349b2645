"""
Eigenvalue Solver - Linearized Self-Excitation Dynamics

The generator transient EMFs (Eq', Ed') interacting with the load admittance
reflected through XL + Xd' give a second-order characteristic equation

    a*s^2 + b*s + c = 0

whose roots decide small-signal stability of the operating point. Since
a = Td0'*Tq0' > 0 and c >= 0, the sign of the dominant root is set by b and
the discriminant.

Reference: Kundur "Power System Stability and Control", Ch. 8
"""

import logging
import numpy as np
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from ..core.parameters import ParameterSet, OperatingPoint
from .stability_circles import DEGENERATE_TOL

logger = logging.getLogger(__name__)


class EigenKind(Enum):
    """Root structure of the characteristic quadratic"""
    REAL_PAIR = 'real_pair'
    COMPLEX_PAIR = 'complex_pair'
    DEGENERATE = 'degenerate'


@dataclass(frozen=True)
class EigenResult:
    """
    Stability-relevant roots of the characteristic equation.

    For REAL_PAIR, s1/s2 hold both roots and `real` is the larger one.
    For COMPLEX_PAIR, `real` +/- j*`imag` is the conjugate pair.
    DEGENERATE marks an ill-posed (singular) operating point.
    """
    kind: EigenKind
    real: float
    imag: float
    stable: bool
    oscillatory: bool
    s1: Optional[float] = None
    s2: Optional[float] = None

    @property
    def roots(self) -> np.ndarray:
        """Both roots as a complex array"""
        if self.kind == EigenKind.REAL_PAIR:
            return np.array([self.s1, self.s2], dtype=complex)
        return np.array([complex(self.real, self.imag), complex(self.real, -self.imag)])

    @property
    def damping_ratio(self) -> float:
        """Damping ratio of the dominant mode (0 when not stable)"""
        if not self.stable:
            return 0.0
        if self.oscillatory:
            return float(-self.real / np.hypot(self.real, self.imag))
        return 1.0


def eigen(point: OperatingPoint, params: ParameterSet) -> EigenResult:
    """
    Solve the linearized characteristic equation at an operating point.

    Args:
        point: Operating point (G, Bc)
        params: Machine and network constants

    Returns:
        EigenResult (DEGENERATE when the point is singular)
    """
    G, Bc = point.G, point.Bc
    Xdq = params.Xdq
    X = params.X_total

    denom = (1.0 - Bc * X) ** 2 + (G * X) ** 2
    if denom < DEGENERATE_TOL:
        logger.debug(f"Degenerate admittance point G={G}, Bc={Bc}")
        return EigenResult(kind=EigenKind.DEGENERATE, real=0.0, imag=0.0,
                           stable=False, oscillatory=False)

    # Load admittance reflected through the transient reactance
    Yr = G / denom
    Yi = (Bc - (G ** 2 + Bc ** 2) * X) / denom

    a = params.Td0_prime * params.Tq0_prime
    b = -(params.Td0_prime + params.Tq0_prime) * (Yi * Xdq - 1.0)
    c = (Yi * Xdq - 1.0) ** 2 + (Yr * Xdq) ** 2

    disc = b ** 2 - 4.0 * a * c

    if disc >= 0:
        sqrt_disc = np.sqrt(disc)
        s1 = float((-b + sqrt_disc) / (2.0 * a))
        s2 = float((-b - sqrt_disc) / (2.0 * a))
        return EigenResult(
            kind=EigenKind.REAL_PAIR,
            real=max(s1, s2),
            imag=0.0,
            stable=(s1 < 0 and s2 < 0),
            oscillatory=False,
            s1=s1,
            s2=s2,
        )

    real_part = float(-b / (2.0 * a))
    imag_part = float(np.sqrt(-disc) / (2.0 * a))
    return EigenResult(
        kind=EigenKind.COMPLEX_PAIR,
        real=real_part,
        imag=imag_part,
        stable=real_part < 0,
        oscillatory=True,
    )
