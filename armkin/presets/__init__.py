"""Predefined arm configurations and ready-to-run demos."""

from .four_dof import create_manipulator, four_dof_config
from .four_dof_demo import FourDofDemo, SelfCheckReport

__all__ = [
    "create_manipulator",
    "four_dof_config",
    "FourDofDemo",
    "SelfCheckReport",
]
