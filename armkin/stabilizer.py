"""End-effector stabilisation against a shaking base.

A :class:`SinDisturbance` moves the arm base along a sinusoid while a
:class:`Stabilizer` keeps re-solving IK so the end effector holds the world
position it was anchored at. :class:`StabilizationTest` drives both.
"""
from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import Optional, Sequence

import numpy as np

from .kinematics import Manipulator
from .types import Vector3


logger = getLogger(__name__)


class SinDisturbance:
    """Per-axis sinusoidal offset ``A * sin(2 pi f (t - t0))``."""

    def __init__(
        self,
        amplitude: Sequence[float] = (0.3, 0.0, 0.3),
        frequency: Sequence[float] = (0.5, 0.7, 0.4),
    ):
        self.amplitude = np.asarray(amplitude, dtype=float)
        self.frequency = np.asarray(frequency, dtype=float)
        self._t0 = 0.0
        self._playing = False

    @property
    def playing(self) -> bool:
        return self._playing

    def play(self, t: float) -> None:
        self._t0 = t
        self._playing = True

    def stop(self) -> None:
        self._playing = False

    def offset(self, t: float) -> Vector3:
        if not self._playing:
            return Vector3()
        return Vector3.from_iterable(self.amplitude * np.sin(2.0 * np.pi * self.frequency * (t - self._t0)))


class Stabilizer:
    """Hold the end effector at an anchored world position."""

    def __init__(self, manipulator: Manipulator, smooth: bool = True, lerp_speed: float = 5.0):
        self.manipulator = manipulator
        self.smooth = smooth
        self.lerp_speed = lerp_speed
        self.anchor: Optional[Vector3] = None

    @property
    def anchored(self) -> bool:
        return self.anchor is not None

    def anchor_now(self, base_offset: Vector3 = Vector3()) -> Vector3:
        self.anchor = self.manipulator.end_effector() + base_offset
        return self.anchor

    def release(self) -> None:
        self.anchor = None

    def update(self, dt: float, base_offset: Vector3 = Vector3()) -> bool:
        """Re-solve IK for the anchor; returns whether a solution was applied."""

        if self.anchor is None:
            return False

        before = self.manipulator.angles()
        result = self.manipulator.solve_ik(self.anchor - base_offset)
        if not result.success:
            logger.debug("Stabilizer lost the anchor at offset %s", base_offset)
            return False
        if not self.smooth:
            return True

        alpha = 1.0 - np.exp(-self.lerp_speed * dt)
        target = np.asarray(result.angles, dtype=float)
        self.manipulator.set_angles(before + (target - before) * alpha)
        return True


@dataclass
class StabilizationSample:
    t: float
    offset: Vector3
    end_effector_world: Vector3
    error: float
    solved: bool


class StabilizationTest:
    """Start/stop harness pairing a disturbance with a stabilizer."""

    def __init__(self, disturbance: SinDisturbance, stabilizer: Stabilizer):
        self.disturbance = disturbance
        self.stabilizer = stabilizer
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, t: float) -> None:
        if self._running:
            return
        self.stabilizer.anchor_now()
        self.disturbance.play(t)
        self._running = True

    def stop(self) -> None:
        if not self._running:
            return
        self.stabilizer.release()
        self.disturbance.stop()
        self._running = False

    def step(self, t: float, dt: float) -> StabilizationSample:
        offset = self.disturbance.offset(t)
        solved = self.stabilizer.update(dt, offset)
        world = self.stabilizer.manipulator.end_effector() + offset
        anchor = self.stabilizer.anchor
        error = 0.0 if anchor is None else float(np.sqrt(world.squared_distance(anchor)))
        return StabilizationSample(t=t, offset=offset, end_effector_world=world, error=error, solved=solved)
