"""Core kinematics algorithms: forward kinematics and Jacobian computation.

Forward kinematics follows the product-of-exponentials formulation,
``T(θ) = exp([S1] θ1) ... exp([Sn] θn) M``. The analytic Jacobian relates
joint rates to ZYX Euler-angle rates and the linear velocity of the
end-effector point.
"""

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from .core import RobotModel
from .transforms import rotation, se3, so3


class JacobianTerms(NamedTuple):
    """Intermediate matrices of one analytic Jacobian evaluation."""
    spatial: Array          # (6, dof) adjoint-transported screw axes
    geometric: Array        # (6, 6) reference-point conversion
    representation: Array   # (6, 6) blockdiag(B, I)
    analytic: Array         # (6, 6) representation @ geometric
    euler_angles: Array     # (3,) roll, pitch, yaw of the final frame
    end_effector: Array     # (3,) position of the final frame origin


def _check_joint_vector(theta: Array, dof: int) -> Array:
    theta = jnp.asarray(theta, dtype=jnp.float64)
    if theta.shape != (dof,):
        raise ValueError(f"Expected joint vector of shape ({dof},), got {theta.shape}")
    return theta


def product_of_exponentials(screw_axes: Array, theta: Array, dof: int, home: Array) -> Array:
    """End-effector pose from raw POE parameters.

    Args:
        screw_axes: (6, N) screw axes, one column per joint
        theta: (N,) joint angles
        dof: number of joints to chain, at most N
        home: (4, 4) home configuration

    Returns:
        (4, 4) SE(3) pose of the end-effector
    """
    T = jnp.eye(4, dtype=home.dtype)
    for i in range(dof):
        T = se3.multiply(T, se3.exp(screw_axes[:, i], theta[i]))
    return se3.multiply(T, home)


def forward_kinematics(robot: RobotModel, theta: Array) -> Array:
    """Compute the end-effector pose of ``robot`` at joint angles ``theta``.

    Args:
        robot: RobotModel holding screw axes and home configuration
        theta: Joint angles array of shape (num_dof,)

    Returns:
        (4, 4) SE(3) pose of the end-effector
    """
    theta = _check_joint_vector(theta, robot.dof)
    return product_of_exponentials(robot.screw_axes, theta, robot.dof, robot.home_configuration)


def local_transform(robot: RobotModel, theta_i, joint_index: int) -> Array:
    """Local frame of one joint, ``Rz(θ) Tz(d) Tx(r) Rx(α)``."""
    return (
        rotation.rot_z(theta_i)
        @ rotation.translation(z=robot.link_offsets[joint_index])
        @ rotation.translation(x=robot.link_lengths[joint_index])
        @ rotation.rot_x(robot.link_twists[joint_index])
    )


def accumulated_transforms(robot: RobotModel, theta: Array) -> Array:
    """Running products of the per-joint transforms.

    Each joint contributes ``E_i = G_i @ exp([S_i] θ_i)`` where ``G_i`` is its
    local frame; entry ``i`` of the result is ``E_0 @ ... @ E_i``.

    Args:
        robot: RobotModel
        theta: Joint angles array of shape (num_dof,)

    Returns:
        Array of shape (num_dof, 4, 4)
    """
    theta = _check_joint_vector(theta, robot.dof)

    G_accum = jnp.eye(4)
    frames = []
    for i in range(robot.dof):
        E_i = se3.multiply(
            local_transform(robot, theta[i], i),
            se3.exp(robot.screw_axis(i), theta[i]),
        )
        G_accum = se3.multiply(G_accum, E_i)
        frames.append(G_accum)

    return jnp.stack(frames)


def _spatial_columns(robot: RobotModel, frames: Array) -> Array:
    # adjoint(G_i) @ S_i for every joint, stacked as columns
    adjoints = se3.adjoint(frames)
    return jnp.einsum("nij,jn->in", adjoints, robot.screw_axes)


def spatial_jacobian(robot: RobotModel, theta: Array) -> Array:
    """Screw axes transported into the accumulated joint frames.

    Returns:
        (6, num_dof) matrix whose column i is ``adjoint(G_i) @ S_i``
    """
    return _spatial_columns(robot, accumulated_transforms(robot, theta))


def jacobian_terms(robot: RobotModel, theta: Array) -> JacobianTerms:
    """Evaluate the analytic Jacobian and keep its intermediate terms.

    Raises:
        RepresentationSingularityError: if the final frame has its pitch at ±90°.
    """
    frames = accumulated_transforms(robot, theta)
    final = frames[-1]

    spatial = _spatial_columns(robot, frames)

    # End-effector point is the origin of the last frame
    p = se3.apply(final, jnp.zeros(3))
    I3 = jnp.eye(3)
    zeros = jnp.zeros((3, 3))

    # Angular rows pass through, linear rows pick up the ω × p coupling
    geometric = jnp.block([
        [I3, zeros],
        [-so3.skew_symmetric(p), I3],
    ])

    angles = rotation.euler_zyx(se3.get_rotation(final))
    B = rotation.euler_rate_matrix(angles)

    representation = jnp.block([
        [B, zeros],
        [zeros, I3],
    ])

    return JacobianTerms(
        spatial=spatial,
        geometric=geometric,
        representation=representation,
        analytic=representation @ geometric,
        euler_angles=angles,
        end_effector=p,
    )


def analytic_jacobian(robot: RobotModel, theta: Array) -> Array:
    """Compute the 6x6 analytic Jacobian of the end-effector.

    Rows 0-2 are ZYX Euler-angle rates, rows 3-5 the linear velocity of the
    end-effector point.

    Args:
        robot: RobotModel
        theta: Joint angles array of shape (num_dof,)

    Returns:
        (6, 6) analytic Jacobian

    Raises:
        RepresentationSingularityError: if the final frame has its pitch at ±90°.
    """
    return jacobian_terms(robot, theta).analytic
