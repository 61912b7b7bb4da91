"""
JAX-based rigid body transforms for product-of-exponentials kinematics.

This module provides JIT-compilable implementations of:
- SO(3) rotations (so3 module)
- SE(3) rigid body transforms and screw exponentials (se3 module)
- Elementary rotations and ZYX Euler-angle utilities (rotation module)
"""

from . import so3
from . import se3
from . import rotation

__all__ = [
    "so3",
    "se3",
    "rotation",
]
