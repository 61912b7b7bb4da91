"""Core data structures and exceptions for poe_kinematics.

This module provides the immutable robot description passed to every
kinematics call, and the exception hierarchy used across the library.
"""

from .errors import (
    InvalidModelError,
    KinematicsError,
    NonFiniteStateError,
    RepresentationSingularityError,
    SingularJacobianError,
)
from .robot_model import RobotModel

__all__ = [
    "RobotModel",
    "KinematicsError",
    "InvalidModelError",
    "NonFiniteStateError",
    "RepresentationSingularityError",
    "SingularJacobianError",
]
