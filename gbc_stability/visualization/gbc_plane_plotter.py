"""
G-Bc Plane Visualization

Plots produced:
1. G-Bc plane with the self-excitation boundary, equal-k contours and the
   operating point
2. Post-disturbance voltage trajectory
"""

import logging
import matplotlib.pyplot as plt
from matplotlib.patches import Circle
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

from ..core.parameters import ParameterSet, OperatingPoint
from ..physics.stability_circles import (
    stability_boundary, voltage_contour, contour_points, classify, DEFAULT_K_VALUES
)
from ..transient.simulator import Trajectory, V_MIN, V_MAX

logger = logging.getLogger(__name__)

G_RANGE = (-0.02, 0.25)
BC_RANGE = (0.05, 0.35)

K_COLORS = {
    0.8: '#3b82f6',
    0.9: '#22c55e',
    1.0: '#eab308',
    1.1: '#f97316',
    1.2: '#ef4444',
    1.5: '#991b1b',
}


class GBcPlanePlotter:
    """Plot stability results in the G-Bc plane."""

    def __init__(self, params: ParameterSet,
                 figure_size: Tuple[int, int] = (8, 6),
                 save_dir: Optional[Union[str, Path]] = None):
        """Initialize the plotter.

        Args:
            params: Machine and network constants
            figure_size: Size of the figures (width, height)
            save_dir: Directory to save figures into (nothing saved if None)
        """
        self.params = params
        self.figure_size = figure_size
        self.colors = {
            'stable': '#28a745',
            'unstable': '#dc3545',
            'boundary_fill': (220 / 255, 53 / 255, 69 / 255, 0.2),
            'grid': '#e9ecef',
        }
        self.save_dir = Path(save_dir) if save_dir is not None else None
        if self.save_dir is not None:
            self.save_dir.mkdir(parents=True, exist_ok=True)

    def plot_plane(self,
                   point: Optional[OperatingPoint] = None,
                   k_values: Sequence[float] = DEFAULT_K_VALUES,
                   ax: Optional[plt.Axes] = None) -> plt.Figure:
        """Draw the boundary circle, k contours and the operating point.

        Args:
            point: Operating point to mark (optional)
            k_values: Voltage ratios to draw contours for
            ax: Axes to draw on (a new figure is created if None)

        Returns:
            The matplotlib figure
        """
        own_figure = ax is None
        if own_figure:
            fig, ax = plt.subplots(figsize=self.figure_size)
        else:
            fig = ax.figure

        for k in k_values:
            g, bc = contour_points(voltage_contour(self.params, k),
                                   g_range=G_RANGE, bc_range=BC_RANGE)
            if len(g) < 2:
                continue
            ax.plot(g, bc,
                    color=K_COLORS.get(k, '#6c757d'),
                    linewidth=3 if k == 1.0 else 2,
                    linestyle='-' if k == 1.0 else '--',
                    label=f'k = {k:.1f}')

        boundary = stability_boundary(self.params)
        ax.add_patch(Circle((boundary.centerG, boundary.centerBc), boundary.radius,
                            facecolor=self.colors['boundary_fill'],
                            edgecolor=self.colors['unstable'], linewidth=3,
                            label='Self-excitation region'))

        if point is not None:
            stable = classify(point, boundary)
            ax.plot(point.G, point.Bc, 'o', markersize=10,
                    color=self.colors['stable' if stable else 'unstable'],
                    markeredgecolor='white', markeredgewidth=2,
                    label='Operating point')

        ax.set_xlim(*G_RANGE)
        ax.set_ylim(*BC_RANGE)
        ax.set_aspect('equal', adjustable='box')
        ax.set_xlabel('G [p.u.]', fontsize=12)
        ax.set_ylabel('Bc [p.u.]', fontsize=12)
        ax.set_title('G-Bc Plane', fontsize=14, fontweight='bold')
        ax.grid(True, color=self.colors['grid'])
        ax.legend(loc='upper right', fontsize=8)
        fig.tight_layout()

        if own_figure:
            self._save(fig, 'gbc_plane.png')
        return fig

    def plot_trajectory(self, trajectory: Trajectory,
                        ax: Optional[plt.Axes] = None) -> plt.Figure:
        """Plot the post-disturbance voltage."""
        own_figure = ax is None
        if own_figure:
            fig, ax = plt.subplots(figsize=self.figure_size)
        else:
            fig = ax.figure

        color = self.colors['stable' if trajectory.stable else 'unstable']
        ax.plot(trajectory.time, trajectory.voltage, color=color, linewidth=2)
        ax.axvline(x=trajectory.settings.t_disturbance, color='k', linestyle=':',
                   alpha=0.5, label='Disturbance')
        ax.axhline(y=1.0, color='k', linestyle='--', alpha=0.5, label='Nominal')

        ax.set_xlim(0.0, trajectory.settings.t_max)
        ax.set_ylim(V_MIN - 0.1, V_MAX + 0.1)
        ax.set_xlabel('Time (s)', fontsize=12)
        ax.set_ylabel('Voltage (pu)', fontsize=12)
        ax.set_title('Voltage after disturbance', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=8)
        fig.tight_layout()

        if own_figure:
            self._save(fig, 'voltage_trajectory.png')
        return fig

    def plot_all(self, point: OperatingPoint, trajectory: Trajectory) -> Dict[str, plt.Figure]:
        """Side-by-side plane and trajectory."""
        fig, (ax_plane, ax_traj) = plt.subplots(1, 2, figsize=(2 * self.figure_size[0],
                                                                self.figure_size[1]))
        self.plot_plane(point, ax=ax_plane)
        self.plot_trajectory(trajectory, ax=ax_traj)
        self._save(fig, 'stability_overview.png')
        return {'overview': fig}

    def _save(self, fig: plt.Figure, filename: str):
        if self.save_dir is None:
            return
        path = self.save_dir / filename
        fig.savefig(path, dpi=150, bbox_inches='tight')
        logger.info(f"Saved {path}")
