"""Human-readable snapshots of a manipulator's state."""
from __future__ import annotations

import sys
from typing import TextIO

import numpy as np

from .kinematics import Manipulator
from .types import Vector3


def _fmt(v: Vector3) -> str:
    return f"({v.x:g}, {v.y:g}, {v.z:g})"


def format_snapshot(manipulator: Manipulator) -> str:
    lines = ["=== ARM DEBUG INFO ===", f"Base position: {_fmt(manipulator.base_position)}"]

    lines.append("Joint angles (radians):")
    for i, angle in enumerate(manipulator.angles()):
        lines.append(f"  Joint {i}: {angle:g} rad ({np.rad2deg(angle):g} deg)")

    lines.append("Link lengths:")
    for i, length in enumerate(manipulator.link_lengths()):
        lines.append(f"  Link {i}: {length:g}")

    lines.append("Joint positions:")
    for i, pos in enumerate(manipulator.joint_world_positions()):
        lines.append(f"  Position {i}: {_fmt(pos)}")

    lines.append(f"End effector: {_fmt(manipulator.forward_kinematics())}")
    lines.append(f"Maximum reach: {manipulator.max_reach():g}")
    lines.append("===================")
    return "\n".join(lines)


def dump(manipulator: Manipulator, stream: TextIO | None = None) -> None:
    """Write :func:`format_snapshot` to ``stream`` (stdout by default)."""

    print(format_snapshot(manipulator), file=sys.stdout if stream is None else stream)
