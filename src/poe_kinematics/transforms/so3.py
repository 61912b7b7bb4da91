"""SO(3) and so(3) operations in JAX.

Rotations are plain ``(..., 3, 3)`` matrices and so(3) elements are 3-vectors.
All functions are pure, JIT-able, and operate on JAX arrays.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def skew_symmetric(v: Array) -> Array:
    """
    Convert 3D vector to skew-symmetric (cross-product) matrix.

    ``skew_symmetric(v) @ x == cross(v, x)`` for every ``x``.

    Args:
        v: (..., 3) vector

    Returns:
        (..., 3, 3) skew-symmetric matrix
    """
    zeros = jnp.zeros(v.shape[:-1], dtype=v.dtype)

    return jnp.stack([
        jnp.stack([zeros, -v[..., 2], v[..., 1]], axis=-1),
        jnp.stack([v[..., 2], zeros, -v[..., 0]], axis=-1),
        jnp.stack([-v[..., 1], v[..., 0], zeros], axis=-1)
    ], axis=-2)


def exp(axis: Array, theta) -> Array:
    """
    SO(3) exponential map for a rotation of ``theta`` about ``axis``.

    Implements Rodrigues' formula ``R = I + sin(θ) K + (1 - cos(θ)) K²`` with
    ``K = skew(axis)``. The axis is used as given; it is only a proper
    rotation when ``axis`` has unit length (or is zero).

    Args:
        axis: (..., 3) rotation axis
        theta: scalar or (...) rotation angle in radians

    Returns:
        (..., 3, 3) rotation matrices
    """
    theta = jnp.asarray(theta, dtype=axis.dtype)[..., None, None]
    K = skew_symmetric(axis)

    I = jnp.eye(3, dtype=axis.dtype)
    I = jnp.broadcast_to(I, K.shape)

    return I + jnp.sin(theta) * K + (1.0 - jnp.cos(theta)) * jnp.matmul(K, K)
