"""Shared dataclasses for the arm kinematics package."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector in scene units."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3":
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vector3":
        return Vector3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def squared_distance(self, other: "Vector3") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def norm(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


class Axis(Enum):
    """Principal rotation axis of a joint."""

    X = "x"
    Y = "y"
    Z = "z"


@dataclass(frozen=True)
class AngleLimit:
    """Clamp range for a single joint angle.

    The default instance is disabled and passes every angle through.
    """

    low: float = -np.pi
    high: float = np.pi
    enabled: bool = False

    def __post_init__(self) -> None:
        if self.enabled and self.low > self.high:
            raise ValueError(f"Angle limit low ({self.low}) exceeds high ({self.high})")

    def apply(self, angle: float) -> float:
        if not self.enabled:
            return angle
        return min(max(angle, self.low), self.high)


@dataclass(frozen=True)
class JointSpec:
    """Description of one rotational joint of a chain."""

    axis: Axis
    limit: AngleLimit = AngleLimit()
    initial: float = 0.0


@dataclass(frozen=True)
class Link:
    """Rigid segment with a fixed length and unrotated direction."""

    length: float
    direction: Vector3 = Vector3(0.0, 1.0, 0.0)

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"Link length must be non-negative, got {self.length}")


@dataclass(frozen=True)
class ChainConfig:
    """Configuration describing a serial chain of joints and links."""

    joints: tuple[JointSpec, ...]
    links: tuple[Link, ...]
    name: str

    def __post_init__(self) -> None:
        if len(self.joints) != len(self.links):
            raise ValueError(
                f"Chain needs one link per joint, got {len(self.joints)} joints and {len(self.links)} links"
            )
