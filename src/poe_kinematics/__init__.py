"""
POE Kinematics: product-of-exponentials kinematics for serial manipulators.

This library provides JIT-compilable rigid body transforms, forward
kinematics, an Euler-angle analytic Jacobian and an iterative joint-space
solver, all built on JAX.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import io
from .chain import (
    analytic_jacobian,
    forward_kinematics,
    jacobian_terms,
    product_of_exponentials,
)
from .models import build_model, build_robot_model, make_robot_model
from .solver import SolveResult, SolverStatus, solve

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "analytic_jacobian",
    "forward_kinematics",
    "jacobian_terms",
    "product_of_exponentials",
    "build_model",
    "build_robot_model",
    "make_robot_model",
    "solve",
    "SolveResult",
    "SolverStatus",
]
