"""Kinematics of a four-joint serial arm."""
from .kinematics import Joint, Manipulator, rot_x, rot_y, rot_z
from .ik import IKResult, IKStop, finite_difference_gradient, solve_ik
from .presets import FourDofDemo, SelfCheckReport, create_manipulator, four_dof_config
from .stabilizer import SinDisturbance, StabilizationSample, StabilizationTest, Stabilizer
from .types import AngleLimit, Axis, ChainConfig, JointSpec, Link, Vector3

__all__ = [
    "Vector3",
    "Axis",
    "AngleLimit",
    "JointSpec",
    "Link",
    "ChainConfig",
    "Joint",
    "Manipulator",
    "rot_x",
    "rot_y",
    "rot_z",
    "IKStop",
    "IKResult",
    "finite_difference_gradient",
    "solve_ik",
    "create_manipulator",
    "four_dof_config",
    "FourDofDemo",
    "SelfCheckReport",
    "SinDisturbance",
    "Stabilizer",
    "StabilizationTest",
    "StabilizationSample",
]
