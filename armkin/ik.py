"""Numerical inverse kinematics by finite-difference gradient descent."""
from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from .types import Vector3

if TYPE_CHECKING:
    from .kinematics import Manipulator


logger = getLogger(__name__)

CostFun = Callable[[np.ndarray], float]


@dataclass(frozen=True)
class IKStop:
    tol: float = 0.01
    max_iters: int = 100
    step: float = 0.001
    learning_rate: float = 0.01


@dataclass
class IKResult:
    success: bool
    angles: np.ndarray
    iterations: int
    error: float

    def __iter__(self):
        # Allows ``ok, q = manipulator.solve_ik(target)``.
        return iter((self.success, self.angles))


def finite_difference_gradient(cost: CostFun, q: np.ndarray, base_cost: float, eps: float = 1e-3) -> np.ndarray:
    """Forward-difference gradient of a scalar cost, one coordinate at a time.

    ``q`` is perturbed in place and restored before the next coordinate.
    """

    grad = np.zeros(q.size, dtype=float)
    for i in range(q.size):
        backup = q[i]
        q[i] += eps
        grad[i] = (cost(q) - base_cost) / eps
        q[i] = backup
    return grad


def solve_ik(manipulator: "Manipulator", target: Vector3, stop: Optional[IKStop] = None) -> IKResult:
    """Drive the end effector of ``manipulator`` toward ``target``.

    The manipulator is updated in place on every iteration. When the solver
    runs out of iterations the joints stay at the last iterate.
    """

    if stop is None:
        stop = IKStop()

    def cost(q: np.ndarray) -> float:
        manipulator.set_angles(q)
        return manipulator.forward_kinematics().squared_distance(target)

    q = manipulator.angles()
    current = manipulator.forward_kinematics().squared_distance(target)

    for it in range(stop.max_iters):
        if np.sqrt(current) < stop.tol:
            manipulator.set_angles(q)
            logger.debug("IK converged after %d iterations (error %.6f)", it, np.sqrt(current))
            return IKResult(success=True, angles=q, iterations=it, error=float(np.sqrt(current)))

        grad = finite_difference_gradient(cost, q, current, eps=stop.step)
        q = q - stop.learning_rate * grad
        current = cost(q)

    logger.debug("IK did not converge in %d iterations (error %.6f)", stop.max_iters, np.sqrt(current))
    return IKResult(success=False, angles=q, iterations=stop.max_iters, error=float(np.sqrt(current)))
