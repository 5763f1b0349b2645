"""
G-Bc Plane Self-Excitation Stability Package

Stability analysis of a generator feeding a load bus characterised by its
conductance G and capacitive susceptance Bc.

Key Features:
- Aggregation of switchable loads and capacitors into (G, Bc)
- Closed-form self-excitation boundary and equal-voltage (k) contours
- Characteristic-equation eigenvalues of the linearized machine-load system
- Bounded post-disturbance voltage trajectories
- YAML configuration and G-Bc plane plots

Example usage:
    from gbc_stability import ParameterSet, OperatingPoint, StabilityAnalyzer

    analyzer = StabilityAnalyzer(ParameterSet(), OperatingPoint(G=0.1, Bc=0.15))
    report = analyzer.evaluate()
    trajectory = analyzer.simulate()
"""

__version__ = "1.0.0"
__author__ = "Power Systems Research"

# Core data model
from .core.parameters import (
    ParameterSet, ComponentKind, ComponentSpec, SystemConfiguration,
    OperatingPoint, StabilityCircle
)

# Engine
from .physics.admittance import aggregate
from .physics.stability_circles import (
    stability_boundary, voltage_contour, classify, voltage_ratio,
    is_singular, contour_points, K_SENTINEL
)
from .physics.eigen_solver import eigen, EigenResult, EigenKind
from .transient.simulator import (
    simulate, TransientSimulator, SimulationSettings, Trajectory, TrajectorySample
)

# Session-level analysis
from .analysis.stability_analyzer import (
    StabilityAnalyzer, AnalysisReport, critical_susceptance, stability_map
)

# Utilities
from .utils.validators import ParameterValidator
from .utils.config_loader import load_config, dump_config, AnalysisConfig

__all__ = [
    # Core
    'ParameterSet', 'ComponentKind', 'ComponentSpec', 'SystemConfiguration',
    'OperatingPoint', 'StabilityCircle',

    # Engine
    'aggregate', 'stability_boundary', 'voltage_contour', 'classify',
    'voltage_ratio', 'is_singular', 'contour_points', 'K_SENTINEL',
    'eigen', 'EigenResult', 'EigenKind',
    'simulate', 'TransientSimulator', 'SimulationSettings', 'Trajectory', 'TrajectorySample',

    # Analysis
    'StabilityAnalyzer', 'AnalysisReport', 'critical_susceptance', 'stability_map',

    # Utils
    'ParameterValidator', 'load_config', 'dump_config', 'AnalysisConfig',
]
