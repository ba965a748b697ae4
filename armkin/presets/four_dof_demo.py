"""High-level demo utilities for the four-joint arm."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation

from ..ik import IKResult
from ..kinematics import Manipulator
from ..stabilizer import SinDisturbance, StabilizationSample, StabilizationTest, Stabilizer
from ..types import Axis, ChainConfig, Vector3
from .four_dof import create_manipulator, four_dof_config


@dataclass(slots=True)
class SelfCheckReport:
    """Container returned by :meth:`FourDofDemo.self_check`."""

    zero_pose_points: np.ndarray
    quarter_turn_tip: Vector3
    ik_target: Vector3
    ik_result: IKResult
    ik_tip: Vector3
    max_reach: float

    def lines(self) -> List[str]:
        out = ["--- Initial position ---"]
        for i, p in enumerate(self.zero_pose_points):
            out.append(f"  point {i}: ({p[0]:.3f}, {p[1]:.3f}, {p[2]:.3f})")
        t = self.quarter_turn_tip
        out.append("--- Joint 0 at 90 deg ---")
        out.append(f"  end effector: ({t.x:.3f}, {t.y:.3f}, {t.z:.3f})")
        out.append(f"--- IK to ({self.ik_target.x}, {self.ik_target.y}, {self.ik_target.z}) ---")
        out.append(f"  result: {'SUCCESS' if self.ik_result.success else 'FAILED'}"
                   f" after {self.ik_result.iterations} iterations")
        if self.ik_result.success:
            for i, a in enumerate(self.ik_result.angles):
                out.append(f"  joint {i}: {np.rad2deg(a):.1f} deg")
            out.append(f"  distance from target: {np.sqrt(self.ik_tip.squared_distance(self.ik_target)):.3f}")
        else:
            out.append(f"  target distance from base: {self.ik_target.norm():.2f}")
            out.append(f"  maximum reach: {self.max_reach:.2f}")
        return out


class FourDofDemo:
    """Convenience wrapper exposing FK, IK and stabilisation demos."""

    def __init__(self) -> None:
        self.config: ChainConfig = four_dof_config()
        self.robot: Manipulator = create_manipulator()

    @property
    def dof(self) -> int:
        return self.robot.joint_count

    def _limits(self) -> np.ndarray:
        return np.array([[s.limit.low, s.limit.high] for s in self.config.joints], dtype=float)

    # ------------------------------------------------------------------
    # Forward kinematics helpers
    # ------------------------------------------------------------------
    def fk_points(self, q: np.ndarray) -> np.ndarray:
        """Return XYZ coordinates for base, joints and end effector."""

        self.robot.set_angles(q)
        return np.array([p.as_array() for p in self.robot.joint_world_positions()])

    def forward_demo(self, T_final: float = 10.0, fps: int = 30) -> np.ndarray:
        """Swing every joint out of the zero pose and back, one after another."""

        t = np.linspace(0.0, T_final, int(T_final * fps))
        reach = np.array([np.pi / 2, np.pi / 4, 1.2, -np.pi / 3])
        # joint j starts its swing j * T_final / (4 dof) late
        lag = np.arange(self.dof) * T_final / (4.0 * self.dof)
        phase = np.clip((t[:, None] - lag[None, :]) / (T_final - lag[-1]), 0.0, 1.0)
        q_traj = reach[None, :] * 0.5 * (1.0 - np.cos(2.0 * np.pi * phase))
        q_limits = self._limits()
        return np.clip(q_traj, q_limits[:, 0], q_limits[:, 1])

    def self_check(self, ik_target: Vector3 = Vector3(0.0, 6.0, 0.0)) -> SelfCheckReport:
        """Zero pose, quarter turn of joint 0 and one IK solve from the zero pose."""

        zero = np.zeros(self.dof)
        points = self.fk_points(zero)

        quarter = zero.copy()
        quarter[0] = np.pi / 2
        self.robot.set_angles(quarter)
        quarter_tip = self.robot.end_effector()

        self.robot.set_angles(zero)
        result = self.robot.solve_ik(ik_target)
        return SelfCheckReport(
            zero_pose_points=points,
            quarter_turn_tip=quarter_tip,
            ik_target=ik_target,
            ik_result=result,
            ik_tip=self.robot.end_effector(),
            max_reach=self.robot.max_reach(),
        )

    # ------------------------------------------------------------------
    # Inverse kinematics helpers
    # ------------------------------------------------------------------
    def build_circle(self, center=(0.0, 7.0, 0.0), radius: float = 1.0, samples: int = 120) -> np.ndarray:
        """Circle of targets in the XZ plane around ``center``."""

        t = np.linspace(0.0, 2.0 * np.pi, samples, endpoint=False)
        xs = center[0] + radius * np.cos(t)
        ys = np.full_like(t, center[1])
        zs = center[2] + radius * np.sin(t)
        return np.stack([xs, ys, zs], axis=1)

    def solve_path_ik(self, q_seed: np.ndarray, path: np.ndarray) -> np.ndarray:
        """Follow ``path`` warm-starting every solve from the previous pose."""

        self.robot.set_angles(q_seed)
        qs = []
        for target in path:
            self.robot.solve_ik(Vector3.from_iterable(target))
            qs.append(self.robot.angles())
        return np.array(qs)

    def ik_demo(self, samples: int = 120) -> np.ndarray:
        q0 = np.array([0.0, 0.0, 0.5, 0.0])
        return self.solve_path_ik(q0, self.build_circle(samples=samples))

    # ------------------------------------------------------------------
    # Stabilisation demo
    # ------------------------------------------------------------------
    def stabilization_demo(self, duration: float = 4.0, dt: float = 1.0 / 30.0) -> List[StabilizationSample]:
        """Shake the base and let the stabilizer hold the end effector."""

        self.robot.set_angles([0.3, 0.2, 0.6, 0.1])
        harness = StabilizationTest(SinDisturbance(), Stabilizer(self.robot))
        harness.start(0.0)
        samples = []
        for k in range(1, int(round(duration / dt)) + 1):
            samples.append(harness.step(k * dt, dt))
        harness.stop()
        return samples

    # ------------------------------------------------------------------
    # Visualisation helpers
    # ------------------------------------------------------------------
    AXIS_COLORS = {Axis.X: "tab:red", Axis.Y: "tab:green", Axis.Z: "tab:blue"}

    def chain_frames(self, q_traj: np.ndarray) -> np.ndarray:
        """Joint positions for every pose of ``q_traj``, shape ``(frames, dof + 1, 3)``."""

        return np.stack([self.fk_points(q) for q in q_traj])

    def animate(self, q_traj: np.ndarray, fps: int = 30, title: str | None = None, show: bool = True):
        frames = self.chain_frames(q_traj)
        lo = frames.reshape(-1, 3).min(axis=0)
        hi = frames.reshape(-1, 3).max(axis=0)
        half = max(0.5 * float(np.max(hi - lo)), 1.0) * 1.1
        mid = 0.5 * (lo + hi)

        fig = plt.figure(figsize=(7, 6))
        ax = fig.add_subplot(111, projection="3d")
        for set_lim, c in zip((ax.set_xlim, ax.set_ylim, ax.set_zlim), mid):
            set_lim([c - half, c + half])
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.set_zlabel("Z")
        ax.set_title(title or self.config.name)

        # link i is coloured by the axis of joint i
        links = [
            ax.plot([], [], [], lw=3, color=self.AXIS_COLORS[joint.axis], label=f"J{i} ({joint.axis.name})")[0]
            for i, joint in enumerate(self.robot.joints)
        ]
        ax.legend(loc="upper left")
        tip, = ax.plot([], [], [], "ko", ms=6)
        path, = ax.plot(frames[:, -1, 0], frames[:, -1, 1], frames[:, -1, 2], "k:", lw=1, alpha=0.4)

        def update(k):
            pts = frames[k]
            for i, line in enumerate(links):
                line.set_data(pts[i : i + 2, 0], pts[i : i + 2, 1])
                line.set_3d_properties(pts[i : i + 2, 2])
            tip.set_data(pts[-1:, 0], pts[-1:, 1])
            tip.set_3d_properties(pts[-1:, 2])
            return links + [tip, path]

        anim = FuncAnimation(fig, update, frames=len(frames), interval=1000 / fps, blit=False)
        if show:
            plt.show()
        return anim

    def plot_trajectory(self, tgrid: np.ndarray, q: np.ndarray, show: bool = True):
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
        ax.plot(tgrid, np.rad2deg(q))
        ax.set_ylabel("q [deg]")
        ax.set_xlabel("t [s]")
        ax.legend([f"joint {i}" for i in range(q.shape[1])])
        ax.grid(True)
        plt.tight_layout()
        if show:
            plt.show()
        return fig

    def plot_stabilization(self, samples: List[StabilizationSample], show: bool = True):
        t = np.array([s.t for s in samples])
        offsets = np.array([s.offset.as_array() for s in samples])
        errors = np.array([s.error for s in samples])
        fig, axs = plt.subplots(2, 1, figsize=(10, 6), sharex=True)
        axs[0].plot(t, offsets)
        axs[0].set_ylabel("base offset")
        axs[0].legend(["x", "y", "z"])
        axs[1].plot(t, errors)
        axs[1].set_ylabel("tip error")
        axs[1].set_xlabel("t [s]")
        for ax in axs:
            ax.grid(True)
        plt.tight_layout()
        if show:
            plt.show()
        return fig
