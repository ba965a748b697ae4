"""Four-joint arm demos executed directly without a command-line parser."""

from __future__ import annotations

import numpy as np

from armkin import FourDofDemo, api


def main() -> None:
    demo = FourDofDemo()

    for line in demo.self_check().lines():
        print(line)

    handle = api.create(0.0, 0.0, 0.0)
    api.debug_dump(handle)
    api.destroy(handle)

    # Forward kinematics demo.
    T_fk = 2.0
    fps = 30
    q_fk = demo.forward_demo(T_final=T_fk, fps=fps)
    t_fk = np.linspace(0.0, T_fk, q_fk.shape[0])
    demo.plot_trajectory(t_fk, q_fk)
    demo.animate(q_fk, title="Forward kinematics demo")

    # Inverse kinematics demo.
    q_ik = demo.ik_demo(samples=120)
    t_ik = np.linspace(0.0, q_ik.shape[0] / fps, q_ik.shape[0])
    demo.plot_trajectory(t_ik, q_ik)
    demo.animate(q_ik, title="Inverse kinematics demo")

    # Base disturbance with the stabilizer holding the end effector.
    samples = demo.stabilization_demo()
    solved = sum(s.solved for s in samples)
    print(f"stabilizer solved {solved}/{len(samples)} steps, max error {max(s.error for s in samples):.3f}")
    demo.plot_stabilization(samples)


if __name__ == "__main__":
    main()
