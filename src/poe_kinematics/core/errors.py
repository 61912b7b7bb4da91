"""Exceptions raised by poe_kinematics."""

from typing import Optional

import numpy as np


class KinematicsError(Exception):
    """Base class for all kinematics failures."""


class InvalidModelError(KinematicsError, ValueError):
    """A robot model or robot description file is malformed."""


class RepresentationSingularityError(KinematicsError):
    """The ZYX Euler parametrisation is singular (pitch at ±90°).

    Attributes:
        cos_pitch: the offending ``|cos(pitch)|`` value.
    """

    def __init__(self, cos_pitch: float):
        self.cos_pitch = cos_pitch
        super().__init__(
            f"Euler-angle representation is singular: |cos(pitch)| = {cos_pitch:.3e}"
        )


class SingularJacobianError(KinematicsError):
    """The analytic Jacobian could not be inverted.

    Attributes:
        theta: joint estimate at which the inversion failed.
        iteration: solver iteration count at the time of failure.
    """

    def __init__(self, theta, iteration: int, condition: Optional[float] = None):
        self.theta = np.asarray(theta)
        self.iteration = iteration
        self.condition = condition
        message = f"Jacobian is singular at iteration {iteration}, theta={self.theta.tolist()}"
        if condition is not None:
            message += f" (condition number {condition:.3e})"
        super().__init__(message)


class NonFiniteStateError(KinematicsError):
    """The solver produced a NaN or infinite joint estimate or residual."""
