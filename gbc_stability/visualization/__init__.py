"""
Plots of the G-Bc plane and voltage trajectories (matplotlib).
"""

from .gbc_plane_plotter import GBcPlanePlotter

__all__ = ['GBcPlanePlotter']
