"""
Validation and configuration utilities.
"""

from .config_loader import (
    AnalysisConfig, load_config, dump_config, parse_config, DEFAULT_PARAMETERS, PRESET_POINTS
)
from .validators import ParameterValidator

__all__ = [
    'AnalysisConfig',
    'load_config',
    'dump_config',
    'parse_config',
    'DEFAULT_PARAMETERS',
    'PRESET_POINTS',
    'ParameterValidator'
]
