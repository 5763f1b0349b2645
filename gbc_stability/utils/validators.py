"""
Validators for machine parameters, load-bus configurations and engine consistency.
"""

import numpy as np
from typing import Dict, List, Tuple, Any

from ..core.parameters import ParameterSet, SystemConfiguration, OperatingPoint
from ..physics.stability_circles import stability_boundary, classify, voltage_ratio, is_singular
from ..physics.eigen_solver import eigen, EigenKind

REQUIRED_PARAMETERS = ('Xd', 'Xd_prime', 'XL', 'Td0_prime', 'Tq0_prime')


class ParameterValidator:
    """Validate stability study inputs before they reach the engine"""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def validate_parameters(self, values: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate a raw parameter mapping.

        Returns:
            (is_valid, list_of_errors)
        """
        self.errors = []

        for name in REQUIRED_PARAMETERS:
            if name not in values:
                self.errors.append(f"Missing parameter {name}")
                continue
            try:
                value = float(values[name])
            except (TypeError, ValueError):
                self.errors.append(f"Parameter {name} is not a number: {values[name]!r}")
                continue
            if not np.isfinite(value) or value <= 0:
                self.errors.append(f"Parameter {name} must be positive and finite, got {value}")

        if not self.errors and float(values['Xd']) <= float(values['Xd_prime']):
            self.errors.append(
                f"Xd ({values['Xd']}) must exceed Xd_prime ({values['Xd_prime']})"
            )

        return len(self.errors) == 0, self.errors

    def validate_configuration(self, config: SystemConfiguration) -> Tuple[bool, List[str]]:
        """
        Check a load-bus configuration for suspicious settings.

        Returns:
            (is_clean, list_of_warnings)
        """
        self.warnings = []

        if not config.components:
            self.warnings.append("Configuration has no components")
        elif not any(c.connected for c in config.components):
            self.warnings.append("All components are disconnected (G = Bc = 0)")

        if not config.capacitors():
            self.warnings.append("No capacitors defined; self-excitation cannot occur")

        if config.V < 0.5:
            self.warnings.append(f"Reference voltage too low: {config.V:.3f} pu")
        elif config.V > 1.5:
            self.warnings.append(f"Reference voltage too high: {config.V:.3f} pu")

        return len(self.warnings) == 0, self.warnings

    def check_consistency(self, point: OperatingPoint, params: ParameterSet) -> Tuple[bool, str]:
        """
        Compare the boundary-circle classification with the eigenvalue test.

        Singular points are reported as consistent when both treat them as
        unstable.
        """
        stable_circle = classify(point, stability_boundary(params))
        result = eigen(point, params)

        if result.kind == EigenKind.DEGENERATE or is_singular(voltage_ratio(point, params)):
            ok = not result.stable
            return ok, "singular point" if ok else "singular point reported stable by eigenvalues"

        if stable_circle == result.stable:
            return True, "consistent"
        return False, (
            f"boundary says {'stable' if stable_circle else 'unstable'}, "
            f"eigenvalues say {'stable' if result.stable else 'unstable'} "
            f"(Re(s)={result.real:.3e})"
        )
