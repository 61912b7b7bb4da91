"""Elementary rotations and ZYX Euler-angle utilities in JAX."""

import jax
import jax.numpy as jnp
from typing import Union

from ..core.errors import RepresentationSingularityError

# Type aliases
Array = jax.Array
Scalar = Union[float, Array]

# Below this value of |cos(pitch)| the ZYX parametrisation is singular.
SINGULARITY_THRESHOLD = 1e-6


def rot_x(angle: Scalar) -> Array:
    """Homogeneous (4, 4) rotation about the x axis."""
    c, s = jnp.cos(angle), jnp.sin(angle)
    return jnp.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rot_z(angle: Scalar) -> Array:
    """Homogeneous (4, 4) rotation about the z axis."""
    c, s = jnp.cos(angle), jnp.sin(angle)
    return jnp.array([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def translation(x: Scalar = 0.0, y: Scalar = 0.0, z: Scalar = 0.0) -> Array:
    """Homogeneous (4, 4) pure translation."""
    return jnp.array([
        [1.0, 0.0, 0.0, x],
        [0.0, 1.0, 0.0, y],
        [0.0, 0.0, 1.0, z],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rpy_to_matrix(rpy: Array) -> Array:
    """
    Convert roll-pitch-yaw angles to a rotation matrix.

    The convention is ``R = Rz(yaw) @ Ry(pitch) @ Rx(roll)``.

    Args:
        rpy: (3,) array of [roll, pitch, yaw] angles in radians

    Returns:
        (3, 3) rotation matrix
    """
    roll, pitch, yaw = rpy[0], rpy[1], rpy[2]

    R_x = jnp.array([
        [1.0, 0.0, 0.0],
        [0.0, jnp.cos(roll), -jnp.sin(roll)],
        [0.0, jnp.sin(roll), jnp.cos(roll)]
    ])

    R_y = jnp.array([
        [jnp.cos(pitch), 0.0, jnp.sin(pitch)],
        [0.0, 1.0, 0.0],
        [-jnp.sin(pitch), 0.0, jnp.cos(pitch)]
    ])

    R_z = jnp.array([
        [jnp.cos(yaw), -jnp.sin(yaw), 0.0],
        [jnp.sin(yaw), jnp.cos(yaw), 0.0],
        [0.0, 0.0, 1.0]
    ])

    return R_z @ R_y @ R_x


def _check_representation(cos_pitch: Array, threshold: float) -> None:
    # Needs concrete values, so callers of the guarded functions cannot be jitted.
    value = float(cos_pitch)
    if not value >= threshold:
        raise RepresentationSingularityError(value)


def euler_zyx(R: Array, threshold: float = SINGULARITY_THRESHOLD) -> Array:
    """
    Extract ZYX Euler angles from a rotation matrix.

    Inverse of :func:`rpy_to_matrix`:

    * ``pitch = atan2(-r20, sqrt(r21² + r22²))``
    * ``yaw = atan2(r10, r00)``
    * ``roll = atan2(r21, r22)``

    ``sqrt(r21² + r22²)`` equals ``|cos(pitch)|``. When it drops below
    ``threshold`` the pitch is at ±90° and yaw and roll are no longer
    separable.

    Args:
        R: (3, 3) rotation matrix
        threshold: smallest accepted ``|cos(pitch)|``

    Returns:
        (3,) array of [roll, pitch, yaw] in radians

    Raises:
        RepresentationSingularityError: if the pitch is at ±90°.
    """
    cos_pitch = jnp.sqrt(R[2, 1] ** 2 + R[2, 2] ** 2)
    _check_representation(cos_pitch, threshold)

    pitch = jnp.arctan2(-R[2, 0], cos_pitch)
    yaw = jnp.arctan2(R[1, 0], R[0, 0])
    roll = jnp.arctan2(R[2, 1], R[2, 2])

    return jnp.stack([roll, pitch, yaw])


def euler_rate_matrix(angles: Array, threshold: float = SINGULARITY_THRESHOLD) -> Array:
    """
    Map a spatial angular velocity to ZYX Euler-angle rates.

    Angular velocity and Euler rates are related by ``ω = E φ̇`` with::

        E = [[cp*cy, -sy, 0],
             [cp*sy,  cy, 0],
             [  -sp,   0, 1]]

    This returns ``E^-1`` in closed form, which divides by ``cos(pitch)``.

    Args:
        angles: (3,) array of [roll, pitch, yaw] in radians
        threshold: smallest accepted ``|cos(pitch)|``

    Returns:
        (3, 3) matrix ``B`` with ``φ̇ = B ω``

    Raises:
        RepresentationSingularityError: if the pitch is at ±90°.
    """
    pitch, yaw = angles[1], angles[2]
    cp, sp = jnp.cos(pitch), jnp.sin(pitch)
    cy, sy = jnp.cos(yaw), jnp.sin(yaw)

    _check_representation(jnp.abs(cp), threshold)

    return jnp.array([
        [cy / cp, sy / cp, 0.0],
        [-sy, cy, 0.0],
        [sp * cy / cp, sp * sy / cp, 1.0],
    ])
