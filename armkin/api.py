"""Handle-based boundary around :class:`~armkin.kinematics.Manipulator`.

Every manipulator created here is owned by the caller through an integer
handle and must be released with :func:`destroy` exactly once. ``0`` and
``None`` are null handles; destroyed or unknown handles behave the same way.
Operations on a null handle never raise: they do nothing or return ``0``.

The handle table is not synchronised. Callers sharing handles across threads
must serialise access themselves.
"""
from __future__ import annotations

import itertools
from logging import getLogger
from typing import Dict, MutableSequence, Optional, Sequence, TextIO

from . import debug
from .kinematics import Manipulator
from .presets.four_dof import create_manipulator
from .types import Vector3


logger = getLogger(__name__)

_instances: Dict[int, Manipulator] = {}
_next_handle = itertools.count(1)


def _lookup(handle: Optional[int]) -> Optional[Manipulator]:
    if not handle:
        return None
    arm = _instances.get(handle)
    if arm is None:
        logger.debug("Invalid arm handle %r", handle)
    return arm


def create(base_x: float, base_y: float, base_z: float) -> int:
    handle = next(_next_handle)
    _instances[handle] = create_manipulator(Vector3(float(base_x), float(base_y), float(base_z)))
    return handle


def destroy(handle: Optional[int]) -> None:
    if handle:
        _instances.pop(handle, None)


def set_angles(handle: Optional[int], angles: Sequence[float], count: int) -> None:
    arm = _lookup(handle)
    if arm is None:
        return
    arm.set_angles(list(angles[: max(count, 0)]))


def get_joint_positions(
    handle: Optional[int], positions: MutableSequence[float], count: MutableSequence[int]
) -> None:
    """Write flattened ``(x, y, z)`` joint positions into ``positions``.

    ``count[0]`` receives the number of values written. Both buffers are left
    untouched for a null handle or when ``positions`` is too short.
    """

    arm = _lookup(handle)
    if arm is None:
        return
    flat = [c for p in arm.joint_world_positions() for c in p]
    if len(positions) < len(flat):
        logger.debug("Joint position buffer holds %d values, need %d", len(positions), len(flat))
        return
    positions[: len(flat)] = flat
    count[0] = len(flat)


def get_joint_count(handle: Optional[int]) -> int:
    arm = _lookup(handle)
    return 0 if arm is None else arm.joint_count


def solve_ik(
    handle: Optional[int],
    target_x: float,
    target_y: float,
    target_z: float,
    angles: MutableSequence[float],
    count: int,
) -> int:
    """Run IK and return ``1`` on success, ``0`` otherwise.

    ``angles`` is overwritten with the solution only on success. The
    manipulator itself keeps the last iterate either way.
    """

    arm = _lookup(handle)
    if arm is None:
        return 0
    if count != arm.joint_count:
        logger.debug("IK angle buffer holds %d values, arm has %d joints", count, arm.joint_count)
        return 0
    result = arm.solve_ik(Vector3(float(target_x), float(target_y), float(target_z)))
    if not result.success:
        return 0
    for i in range(count):
        angles[i] = float(result.angles[i])
    return 1


def debug_dump(handle: Optional[int], stream: TextIO | None = None) -> None:
    arm = _lookup(handle)
    if arm is None:
        return
    debug.dump(arm, stream)
