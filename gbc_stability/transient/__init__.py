"""
Transient - post-disturbance voltage trajectories at a fixed operating point.
"""

from .simulator import (
    TransientSimulator, SimulationSettings, Trajectory, TrajectorySample, simulate
)

__all__ = [
    'TransientSimulator',
    'SimulationSettings',
    'Trajectory',
    'TrajectorySample',
    'simulate'
]
