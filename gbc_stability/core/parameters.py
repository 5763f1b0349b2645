"""
Core data structures for the G-Bc stability engine.

Machine/network constants, the switchable load/capacitor configuration and
the derived quantities in the (G, Bc) plane. All reactances and time
constants are per-unit on the machine base.
"""

import numpy as np
from typing import Dict, List, Optional
from enum import Enum
from dataclasses import dataclass, field, asdict


class ComponentKind(Enum):
    """Kind of a switchable shunt component"""
    LOAD = 'load'
    CAPACITOR = 'capacitor'


@dataclass(frozen=True)
class ParameterSet:
    """Generator and network constants for one analysis session"""
    Xd: float = 1.8         # d-axis synchronous reactance
    Xd_prime: float = 0.3   # d-axis transient reactance
    XL: float = 5.0         # Line/transformer reactance to the load bus
    Td0_prime: float = 5.0  # d-axis open-circuit transient time constant (s)
    Tq0_prime: float = 1.0  # q-axis open-circuit transient time constant (s)

    def __post_init__(self):
        if not self.Xd_prime > 0:
            raise ValueError(f"Xd_prime must be positive, got {self.Xd_prime}")
        if not self.Xd > self.Xd_prime:
            raise ValueError(
                f"Xd ({self.Xd}) must exceed Xd_prime ({self.Xd_prime})"
            )
        if not self.XL > 0:
            raise ValueError(f"XL must be positive, got {self.XL}")
        if not self.Td0_prime > 0:
            raise ValueError(f"Td0_prime must be positive, got {self.Td0_prime}")
        if not self.Tq0_prime > 0:
            raise ValueError(f"Tq0_prime must be positive, got {self.Tq0_prime}")

    @property
    def X_total(self) -> float:
        """Transient reactance seen from the load bus (XL + Xd')"""
        return self.XL + self.Xd_prime

    @property
    def X_sync(self) -> float:
        """Synchronous reactance seen from the load bus (XL + Xd)"""
        return self.XL + self.Xd

    @property
    def Xdq(self) -> float:
        """Difference between synchronous and transient reactance"""
        return self.Xd - self.Xd_prime

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> 'ParameterSet':
        """Build from a mapping, ignoring unknown keys"""
        known = {}
        for name in cls.__dataclass_fields__:
            if name not in data:
                continue
            try:
                known[name] = float(data[name])
            except (TypeError, ValueError) as e:
                raise ValueError(f"Parameter {name} is not a number: {data[name]!r}") from e
        return cls(**known)


@dataclass
class ComponentSpec:
    """A named load or capacitor that can be switched in and out"""
    name: str
    kind: ComponentKind
    magnitude: float = 0.0  # Active power (load) or reactive power (capacitor), pu
    connected: bool = True

    def __post_init__(self):
        if isinstance(self.kind, str):
            self.kind = ComponentKind(self.kind)
        if self.magnitude < 0:
            raise ValueError(
                f"Component {self.name} magnitude must be >= 0, got {self.magnitude}"
            )

    def toggle(self):
        """Flip the connection state"""
        self.connected = not self.connected


@dataclass
class SystemConfiguration:
    """Switchable components at the load bus and the reference voltage"""
    components: List[ComponentSpec] = field(default_factory=list)
    V: float = 1.0

    def __post_init__(self):
        if not self.V > 0:
            raise ValueError(f"Reference voltage must be positive, got {self.V}")
        names = [c.name for c in self.components]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate component names in configuration: {names}")

    def get(self, name: str) -> ComponentSpec:
        for component in self.components:
            if component.name == name:
                return component
        raise KeyError(f"No component named {name!r}")

    def toggle(self, name: str):
        self.get(name).toggle()

    def set_magnitude(self, name: str, magnitude: float):
        if magnitude < 0:
            raise ValueError(f"Component {name} magnitude must be >= 0, got {magnitude}")
        self.get(name).magnitude = magnitude

    def loads(self) -> List[ComponentSpec]:
        return [c for c in self.components if c.kind == ComponentKind.LOAD]

    def capacitors(self) -> List[ComponentSpec]:
        return [c for c in self.components if c.kind == ComponentKind.CAPACITOR]


@dataclass(frozen=True)
class OperatingPoint:
    """Operating point in the G-Bc plane"""
    G: float   # Conductance (pu)
    Bc: float  # Capacitive susceptance (pu)


@dataclass(frozen=True)
class StabilityCircle:
    """Circle in the G-Bc plane (stability boundary or equal-k contour)"""
    centerG: float
    centerBc: float
    radius: float

    def distance_to(self, point: OperatingPoint) -> float:
        """Euclidean distance from the circle center to a point"""
        return float(np.hypot(point.G - self.centerG, point.Bc - self.centerBc))

    def contains(self, point: OperatingPoint, tol: Optional[float] = None) -> bool:
        """Whether the point lies inside or on the circle"""
        margin = 0.0 if tol is None else tol
        return self.distance_to(point) <= self.radius + margin
