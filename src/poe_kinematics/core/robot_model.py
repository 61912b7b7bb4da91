"""RobotModel PyTree data structure for a POE serial manipulator.

This module defines the immutable description of a robot's geometry that is
passed explicitly to every kinematics call.
"""

from jax import Array
from flax import struct
from typing import Tuple


@struct.dataclass
class RobotModel:
    """Immutable PyTree representation of a serial manipulator.

    The screw axes describe the product-of-exponentials model; the link
    tables describe the per-joint local frames (``Rz(θ) Tz(d) Tx(r) Rx(α)``)
    used when building the Jacobian.

    Attributes:
        name: Robot name. Static field for JIT compilation.
        joint_names: Tuple of joint names, one per screw axis.
                     Static field for JIT compilation.
        home_configuration: Array of shape (4, 4), the end-effector pose
                            with all joint angles at zero.
        screw_axes: Array of shape (6, num_dof). Column i is the screw axis
                    ``(ω, v)`` of joint i in the base frame.
        link_offsets: Array of shape (num_dof,), offset ``d`` along z.
        link_lengths: Array of shape (num_dof,), length ``r`` along x.
        link_twists: Array of shape (num_dof,), twist ``α`` about x.
    """
    name: str = struct.field(pytree_node=False)
    joint_names: Tuple[str, ...] = struct.field(pytree_node=False)
    home_configuration: Array
    screw_axes: Array
    link_offsets: Array
    link_lengths: Array
    link_twists: Array

    @property
    def dof(self) -> int:
        """Number of joints."""
        return self.screw_axes.shape[1]

    def screw_axis(self, index: int) -> Array:
        """Screw axis of joint ``index`` as a (6,) array."""
        return self.screw_axes[:, index]
