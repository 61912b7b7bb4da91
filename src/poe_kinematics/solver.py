"""Iterative joint-space solver driven by the analytic Jacobian.

Convergence is measured on the pose difference ``FK(θ_d) - FK(θ)``; the
update is ``θ <- θ + J(θ)^-1 (θ_d - θ)``.
"""

import enum
import logging
from typing import NamedTuple

import jax.numpy as jnp
import numpy as np
from jax import Array

from .chain import analytic_jacobian, forward_kinematics
from .core import NonFiniteStateError, RobotModel, SingularJacobianError

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-4


class SolverStatus(enum.Enum):
    ITERATING = "iterating"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration_limit_reached"


class SolveResult(NamedTuple):
    """Outcome of :func:`solve`."""
    theta: Array
    error: Array
    iterations: int
    status: SolverStatus
    residual: float

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED


def pose_difference(robot: RobotModel, theta_d: Array, theta: Array) -> Array:
    """Element-wise difference ``FK(theta_d) - FK(theta)`` of two poses."""
    return forward_kinematics(robot, theta_d) - forward_kinematics(robot, theta)


def _invert(J: Array, theta: Array, iteration: int) -> Array:
    condition = float(jnp.linalg.cond(J))
    limit = 1.0 / float(jnp.finfo(J.dtype).eps)
    if not np.isfinite(condition) or condition > limit:
        logger.error("Singular Jacobian at iteration %d (cond=%.3e)", iteration, condition)
        raise SingularJacobianError(theta, iteration, condition)

    J_inv = jnp.linalg.inv(J)
    if not bool(jnp.all(jnp.isfinite(J_inv))):
        logger.error("Jacobian inverse is not finite at iteration %d", iteration)
        raise SingularJacobianError(theta, iteration, condition)
    return J_inv


def _check_finite(theta: Array, residual: float, iteration: int) -> None:
    if not (np.isfinite(residual) and bool(jnp.all(jnp.isfinite(theta)))):
        raise NonFiniteStateError(f"solver state became non-finite at iteration {iteration}")


def solve(
    robot: RobotModel,
    theta_0: Array,
    theta_d: Array,
    max_iterations: int,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
) -> SolveResult:
    """Iterate from ``theta_0`` towards ``theta_d``.

    The loop runs while the Frobenius norm of the pose difference exceeds
    ``tolerance`` and fewer than ``max_iterations`` iterations have been
    counted. The count starts at 1, so an already-converged start reports a
    single iteration.

    Args:
        robot: RobotModel
        theta_0: (num_dof,) initial joint estimate
        theta_d: (num_dof,) target joint vector
        max_iterations: iteration cap, at least 1
        tolerance: convergence threshold on the pose-difference norm

    Returns:
        SolveResult with the final estimate, its pose difference, the
        iteration count and a terminal status.

    Raises:
        ValueError: on a bad iteration cap, tolerance or joint vector shape.
        SingularJacobianError: if the Jacobian cannot be inverted.
        RepresentationSingularityError: if an estimate puts the end-effector
            pitch at ±90°.
        NonFiniteStateError: if the estimate or residual stops being finite.
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    if not tolerance > 0.0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")

    theta = jnp.asarray(theta_0, dtype=jnp.float64)
    theta_d = jnp.asarray(theta_d, dtype=jnp.float64)
    for label, vector in (("theta_0", theta), ("theta_d", theta_d)):
        if vector.shape != (robot.dof,):
            raise ValueError(f"{label} must have shape ({robot.dof},), got {vector.shape}")

    iterations = 1
    error = pose_difference(robot, theta_d, theta)
    residual = float(jnp.linalg.norm(error))
    status = SolverStatus.ITERATING
    logger.debug("iteration %d: residual %.6e", iterations, residual)
    _check_finite(theta, residual, iterations)

    while iterations < max_iterations and residual > tolerance:
        J_inv = _invert(analytic_jacobian(robot, theta), theta, iterations)
        theta = theta + J_inv @ (theta_d - theta)

        error = pose_difference(robot, theta_d, theta)
        residual = float(jnp.linalg.norm(error))
        iterations += 1
        logger.debug("iteration %d: residual %.6e", iterations, residual)
        _check_finite(theta, residual, iterations)

    if residual <= tolerance:
        status = SolverStatus.CONVERGED
        logger.info("%s: converged in %d iterations (residual %.3e)", robot.name, iterations, residual)
    else:
        status = SolverStatus.ITERATION_LIMIT_REACHED
        logger.warning(
            "%s: iteration limit %d reached (residual %.3e)", robot.name, max_iterations, residual
        )

    return SolveResult(
        theta=theta,
        error=error,
        iterations=iterations,
        status=status,
        residual=residual,
    )
