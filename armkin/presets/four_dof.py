"""Fixed four-joint arm preset configuration and helpers."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from ..kinematics import Manipulator
from ..types import AngleLimit, Axis, ChainConfig, JointSpec, Link, Vector3


def four_dof_config() -> ChainConfig:
    up = Vector3(0.0, 1.0, 0.0)
    joints = (
        JointSpec(Axis.Z, AngleLimit(-np.pi, np.pi, True)),          # J0 yaw
        JointSpec(Axis.Y, AngleLimit(-np.pi / 2, np.pi / 2, True)),  # J1
        JointSpec(Axis.X, AngleLimit(0.0, 8.0, True)),               # J2, wider than a full turn
        JointSpec(Axis.Y, AngleLimit(-np.pi, np.pi, True)),          # J3
    )
    links = (
        Link(2.0, up),
        Link(3.0, up),
        Link(2.5, up),
        Link(1.0, up),
    )
    return ChainConfig(joints=joints, links=links, name="4-DOF arm")


def create_manipulator(base: Vector3 | Sequence[float] = Vector3()) -> Manipulator:
    """Instantiate the four-joint arm at ``base``."""

    return Manipulator(four_dof_config(), base)
