"""Joint rotations, forward kinematics and the manipulator chain."""
from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional, Sequence

import numpy as np

from .ik import IKResult, IKStop, solve_ik
from .types import AngleLimit, Axis, ChainConfig, Link, Vector3


RotationFun = Callable[[Vector3, float], Vector3]


def rot_x(p: Vector3, angle: float) -> Vector3:
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    return Vector3(p.x, p.y * c - p.z * s, p.y * s + p.z * c)


def rot_y(p: Vector3, angle: float) -> Vector3:
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    return Vector3(p.x * c + p.z * s, p.y, -p.x * s + p.z * c)


def rot_z(p: Vector3, angle: float) -> Vector3:
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    return Vector3(p.x * c - p.y * s, p.x * s + p.y * c, p.z)


ROTATIONS: Dict[Axis, RotationFun] = {
    Axis.X: rot_x,
    Axis.Y: rot_y,
    Axis.Z: rot_z,
}


class Joint:
    """Single rotational degree of freedom about a principal axis.

    The stored angle is always the clamped value; clamping happens once,
    when the angle is assigned.
    """

    def __init__(self, axis: Axis, angle: float = 0.0, limit: AngleLimit | None = None):
        self.axis = axis
        self.limit = AngleLimit() if limit is None else limit
        self._rotate = ROTATIONS[axis]
        self._angle = 0.0
        self.set_angle(angle)

    def set_angle(self, angle: float) -> None:
        self._angle = self.limit.apply(float(angle))

    def get_angle(self) -> float:
        return self._angle

    @property
    def angle(self) -> float:
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        self.set_angle(value)

    def rotate(self, direction: Vector3) -> Vector3:
        """Rotate ``direction`` by the current angle about the joint axis."""

        return self._rotate(direction, self._angle)

    def __repr__(self) -> str:
        return f"Joint(axis={self.axis.name}, angle={self._angle!r}, limit={self.limit!r})"


class Manipulator:
    """Serial arm built from a :class:`ChainConfig`.

    Instances carry no internal locking. Calls to :meth:`set_angles` and
    :meth:`solve_ik` on the same instance must be serialised by the caller.
    """

    def __init__(self, config: ChainConfig, base: Vector3 | Sequence[float] = Vector3()):
        self.config = config
        self.base_position = base if isinstance(base, Vector3) else Vector3.from_iterable(base)
        self.joints: List[Joint] = []
        self.links: List[Link] = []
        self.configure()

    def configure(self) -> None:
        """Rebuild joints and links from the stored configuration."""

        self.joints = [Joint(spec.axis, spec.initial, spec.limit) for spec in self.config.joints]
        self.links = list(self.config.links)

    @property
    def joint_count(self) -> int:
        return len(self.joints)

    # ------------------------------------------------------------------
    # Joint space
    # ------------------------------------------------------------------
    def set_angles(self, values: Sequence[float]) -> None:
        """Assign leading joint angles; extra or missing values are ignored."""

        for joint, value in zip(self.joints, values):
            joint.set_angle(value)

    def angles(self) -> np.ndarray:
        return np.array([joint.get_angle() for joint in self.joints], dtype=float)

    def link_lengths(self) -> np.ndarray:
        return np.array([link.length for link in self.links], dtype=float)

    def max_reach(self) -> float:
        reach = 0.0
        for link in self.links:
            reach += link.length
        return reach

    # ------------------------------------------------------------------
    # Forward kinematics
    # ------------------------------------------------------------------
    def _walk(self) -> Iterator[Vector3]:
        # Each link direction goes through the full rotation chain of the
        # joints before it, joint 0 first.
        pos = self.base_position
        for i, link in enumerate(self.links):
            direction = link.direction
            for joint in self.joints[: i + 1]:
                direction = joint.rotate(direction)
            pos = pos + direction * link.length
            yield pos

    def forward_kinematics(self) -> Vector3:
        pos = self.base_position
        for pos in self._walk():
            pass
        return pos

    def end_effector(self) -> Vector3:
        return self.forward_kinematics()

    def joint_world_positions(self) -> List[Vector3]:
        """Return the base followed by the world position at the end of every link."""

        return [self.base_position, *self._walk()]

    # ------------------------------------------------------------------
    # Inverse kinematics
    # ------------------------------------------------------------------
    def solve_ik(self, target: Vector3 | Sequence[float], stop: Optional[IKStop] = None) -> IKResult:
        if not isinstance(target, Vector3):
            target = Vector3.from_iterable(target)
        return solve_ik(self, target, stop)

    def __repr__(self) -> str:
        return f"Manipulator(name={self.config.name!r}, base={self.base_position!r}, angles={self.angles().tolist()!r})"
