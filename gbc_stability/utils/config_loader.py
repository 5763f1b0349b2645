"""
YAML configuration for stability studies.

A configuration file has three sections:

    parameters:       # ParameterSet fields (pu, s)
      Xd: 1.8
      Xd_prime: 0.3
      XL: 5.0
      Td0_prime: 5.0
      Tq0_prime: 1.0
    system:           # optional switchable load bus
      voltage: 1.0
      components:
        - {name: Load 1, kind: load, magnitude: 0.05, connected: true}
        - {name: Cap 1, kind: capacitor, magnitude: 0.12}
    operating_point:  # optional direct (G, Bc) or a preset name
      G: 0.05
      Bc: 0.20
"""

import logging
import yaml
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union, Any

from ..core.parameters import (
    ParameterSet, ComponentSpec, ComponentKind, SystemConfiguration, OperatingPoint
)

logger = logging.getLogger(__name__)

DEFAULT_PARAMETERS = ParameterSet()

# Preset operating points (G, Bc)
PRESET_POINTS: Dict[str, Tuple[float, float]] = {
    'stable': (0.05, 0.20),
    'unstable': (0.02, 0.18),
}


@dataclass
class AnalysisConfig:
    """Parsed configuration file"""
    parameters: ParameterSet
    system: Optional[SystemConfiguration] = None
    operating_point: Optional[OperatingPoint] = None


def _to_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{what} is not a number: {value!r}") from e


def _parse_components(section: Dict[str, Any]) -> SystemConfiguration:
    if not isinstance(section, dict):
        raise ValueError(f"'system' must be a mapping, got {type(section).__name__}")

    entries = section.get('components') or []
    if not isinstance(entries, list):
        raise ValueError(f"'components' must be a list, got {type(entries).__name__}")

    components = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Component #{i} must be a mapping, got {entry!r}")
        if 'name' not in entry or 'kind' not in entry:
            raise ValueError(f"Component #{i} needs 'name' and 'kind': {entry}")
        try:
            kind = ComponentKind(entry['kind'])
        except ValueError:
            raise ValueError(
                f"Component {entry['name']!r} has unknown kind {entry['kind']!r}"
            ) from None
        components.append(ComponentSpec(
            name=str(entry['name']),
            kind=kind,
            magnitude=_to_float(entry.get('magnitude', 0.0), f"Magnitude of {entry['name']!r}"),
            connected=bool(entry.get('connected', True)),
        ))
    V = _to_float(section.get('voltage', 1.0), "System voltage")
    return SystemConfiguration(components=components, V=V)


def _parse_operating_point(section: Union[str, Dict[str, Any]]) -> OperatingPoint:
    if isinstance(section, str):
        if section not in PRESET_POINTS:
            raise KeyError(f"Unknown preset {section!r}; choose from {sorted(PRESET_POINTS)}")
        G, Bc = PRESET_POINTS[section]
        return OperatingPoint(G=G, Bc=Bc)
    if not isinstance(section, dict):
        raise ValueError(
            f"operating_point must be a preset name or a mapping, got {section!r}"
        )
    if 'G' not in section or 'Bc' not in section:
        raise ValueError(f"operating_point needs both 'G' and 'Bc': {section}")
    return OperatingPoint(G=_to_float(section['G'], "G"), Bc=_to_float(section['Bc'], "Bc"))


def parse_config(data: Optional[Dict[str, Any]]) -> AnalysisConfig:
    """
    Build an AnalysisConfig from an already-loaded mapping.

    Missing parameters fall back to DEFAULT_PARAMETERS.
    """
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

    section = data.get('parameters') or {}
    if not isinstance(section, dict):
        raise ValueError(f"'parameters' must be a mapping, got {type(section).__name__}")
    merged = DEFAULT_PARAMETERS.to_dict()
    merged.update(section)
    parameters = ParameterSet.from_dict(merged)

    system = _parse_components(data['system']) if data.get('system') else None
    point = (_parse_operating_point(data['operating_point'])
             if data.get('operating_point') is not None else None)

    return AnalysisConfig(parameters=parameters, system=system, operating_point=point)


def load_config(path: Union[str, Path]) -> AnalysisConfig:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the .yml file

    Returns:
        AnalysisConfig
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {path}: {e}") from e

    config = parse_config(data)
    logger.info(f"Loaded configuration from {path}")
    return config


def dump_config(config: AnalysisConfig, path: Union[str, Path]):
    """Write a configuration back to YAML"""
    summary: Dict[str, Any] = {'parameters': config.parameters.to_dict()}

    if config.system is not None:
        summary['system'] = {
            'voltage': config.system.V,
            'components': [
                {'name': c.name, 'kind': c.kind.value,
                 'magnitude': c.magnitude, 'connected': c.connected}
                for c in config.system.components
            ],
        }
    if config.operating_point is not None:
        summary['operating_point'] = {'G': config.operating_point.G,
                                      'Bc': config.operating_point.Bc}

    with open(path, 'w') as f:
        yaml.dump(summary, f, default_flow_style=False, indent=2, sort_keys=False)
    logger.info(f"Configuration written to {path}")
