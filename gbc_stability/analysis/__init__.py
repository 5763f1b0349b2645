"""
Session-level stability analysis on top of the engine.
"""

from .stability_analyzer import (
    StabilityAnalyzer, AnalysisReport, boundary_margin, critical_susceptance, stability_map
)

__all__ = [
    'StabilityAnalyzer',
    'AnalysisReport',
    'boundary_margin',
    'critical_susceptance',
    'stability_map'
]
