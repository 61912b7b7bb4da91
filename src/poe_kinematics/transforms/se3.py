"""SE(3) and se(3) operations in JAX.

Rigid body transforms are homogeneous ``(..., 4, 4)`` matrices and screw axes
are 6-vectors ordered ``(ω, v)``: angular part first, linear part second.
All functions are pure, JIT-able, and operate on JAX arrays.
"""


import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct SE(3) transform from position and rotation.

    Args:
        p: (..., 3) position vector
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    # Ensure consistent batch shapes
    batch_shape = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    p = jnp.broadcast_to(p, batch_shape + (3,))
    R = jnp.broadcast_to(R, batch_shape + (3, 3))

    T = jnp.zeros(batch_shape + (4, 4), dtype=p.dtype)
    T = T.at[..., :3, :3].set(R)
    T = T.at[..., :3, 3].set(p)
    T = T.at[..., 3, 3].set(1.0)

    return T


def exp(screw_axis: Array, theta) -> Array:
    """
    SE(3) exponential map ``exp([S] θ)`` of a screw axis scaled by ``theta``.

    The rotation block comes from Rodrigues' formula on the angular part and
    the translation block is ``(θ I + (1 - cos θ) K + (θ - sin θ) K²) v``.
    The formula is not specialised for a zero angular part; in that case it
    reduces to the pure translation ``θ v``.

    Args:
        screw_axis: (..., 6) screw axes ``(ω, v)``
        theta: scalar or (...) joint displacement

    Returns:
        (..., 4, 4) array of transformation matrices.
    """
    w, v = screw_axis[..., :3], screw_axis[..., 3:]
    theta = jnp.asarray(theta, dtype=screw_axis.dtype)

    R = so3.exp(w, theta)

    K = so3.skew_symmetric(w)
    K_sq = jnp.matmul(K, K)

    I = jnp.eye(3, dtype=screw_axis.dtype)
    I = jnp.broadcast_to(I, K.shape)

    th = theta[..., None, None]
    V = th * I + (1.0 - jnp.cos(th)) * K + (th - jnp.sin(th)) * K_sq

    t = jnp.einsum("...ij,...j->...i", V, v)

    return from_position_and_rotation(t, R)


def multiply(T1: Array, T2: Array) -> Array:
    """
    Multiply two SE(3) transformation matrices.

    Args:
        T1: (..., 4, 4) first transformation matrix
        T2: (..., 4, 4) second transformation matrix

    Returns:
        (..., 4, 4) result of T1 @ T2
    """
    return jnp.matmul(T1, T2)


def apply(T: Array, points: Array) -> Array:
    """
    Apply SE(3) transformation to points.

    Args:
        T: (..., 4, 4) transformation matrix
        points: (..., 3) or (..., N, 3) points to transform

    Returns:
        (..., 3) or (..., N, 3) transformed points
    """
    ones = jnp.ones_like(points[..., 0:1])
    points_h = jnp.concatenate([points, ones], axis=-1)

    if points.ndim == T.ndim - 1:
        transformed_h = jnp.einsum("...ij,...j->...i", T, points_h)
    else:
        transformed_h = jnp.einsum("...ij,...nj->...ni", T, points_h)

    # Homogeneous coordinate is 1 for SE(3), no division needed
    return transformed_h[..., :3]


def get_position(T: Array) -> Array:
    """
    Extract position from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3) position vector
    """
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    """
    Extract rotation matrix from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3, 3) rotation matrix
    """
    return T[..., :3, :3]


def adjoint(T: Array) -> Array:
    """
    Compute the adjoint matrix of SE(3) transformation.

    Maps a screw axis ``(ω, v)`` expressed in the frame of ``T`` into the
    reference frame: ``Ad_T = [[R, 0], [[p]_x R, R]]``.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 6, 6) adjoint matrix
    """
    R = get_rotation(T)
    p = get_position(T)

    p_skew = so3.skew_symmetric(p)
    zeros = jnp.zeros_like(R)

    top = jnp.concatenate([R, zeros], axis=-1)
    bottom = jnp.concatenate([jnp.matmul(p_skew, R), R], axis=-1)

    return jnp.concatenate([top, bottom], axis=-2)
