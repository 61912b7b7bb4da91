"""Robot model construction and the built-in UR5-style preset."""

from typing import Optional, Sequence, Tuple

import jax.numpy as jnp
import numpy as np
from jax import Array

from .core import InvalidModelError, RobotModel

# UR5-style link dimensions (metres)
L1 = 0.5
L2 = 0.45
H1 = 0.18
H2 = 0.1
W1 = 0.15
W2 = 0.09

UR5_JOINT_NAMES = (
    "shoulder_pan",
    "shoulder_lift",
    "elbow",
    "wrist_1",
    "wrist_2",
    "wrist_3",
)

# Per-joint local frame tables: Rz(θ) Tz(d) Tx(r) Rx(α)
UR5_LINK_OFFSETS = (0.1, 0.0, 0.0, 0.12, 0.1, 0.06)
UR5_LINK_LENGTHS = (0.0, -0.5, -0.45, 0.0, 0.0, 0.0)
UR5_LINK_TWISTS = (np.pi / 2, 0.0, 0.0, np.pi / 2, -np.pi / 2, 0.0)


def build_model() -> Tuple[Array, Array]:
    """Home configuration and screw axes of the UR5-style arm.

    Returns:
        Tuple ``(home, screw_axes)`` with ``home`` of shape (4, 4) and
        ``screw_axes`` of shape (6, 6), one ``(ω, v)`` column per joint.
    """
    home = jnp.array([
        [-1.0, 0.0, 0.0, L1 + L2],
        [0.0, 0.0, 1.0, W1 + W2],
        [0.0, 1.0, 0.0, H1 - H2],
        [0.0, 0.0, 0.0, 1.0],
    ])

    # One row per joint here, transposed into columns below
    screw_rows = jnp.array([
        [0.0, 0.0, 1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, -H1, 0.0, 0.0],
        [0.0, 1.0, 0.0, -H1, 0.0, L1],
        [0.0, 1.0, 0.0, -H1, 0.0, L1 + L2],
        [0.0, 0.0, -1.0, -W1, L1 + L2, 0.0],
        [0.0, 1.0, 0.0, H2 - H1, 0.0, L1 + L2],
    ])

    return home, screw_rows.T


def build_robot_model() -> RobotModel:
    """The UR5-style arm as a :class:`RobotModel`."""
    home, screw_axes = build_model()
    return make_robot_model(
        home,
        screw_axes,
        UR5_LINK_OFFSETS,
        UR5_LINK_LENGTHS,
        UR5_LINK_TWISTS,
        name="ur5",
        joint_names=UR5_JOINT_NAMES,
    )


def make_robot_model(
    home_configuration,
    screw_axes,
    link_offsets,
    link_lengths,
    link_twists,
    name: str = "robot",
    joint_names: Optional[Sequence[str]] = None,
) -> RobotModel:
    """Validate robot geometry and pack it into a :class:`RobotModel`.

    Args:
        home_configuration: (4, 4) end-effector pose at zero joint angles.
        screw_axes: (6, N) screw axes ``(ω, v)``, one column per joint.
        link_offsets: (N,) offsets ``d`` along z.
        link_lengths: (N,) lengths ``r`` along x.
        link_twists: (N,) twists ``α`` about x.
        name: Robot name.
        joint_names: Optional joint names, defaults to ``joint1..jointN``.

    Returns:
        RobotModel

    Raises:
        InvalidModelError: if a shape is wrong, the home configuration is not
            homogeneous, or a screw axis has an angular part whose norm is
            neither 0 nor 1.
    """
    home = jnp.asarray(home_configuration, dtype=jnp.float64)
    screws = jnp.asarray(screw_axes, dtype=jnp.float64)

    if home.shape != (4, 4):
        raise InvalidModelError(f"home configuration must have shape (4, 4), got {home.shape}")
    if not np.allclose(np.asarray(home[3]), [0.0, 0.0, 0.0, 1.0]):
        raise InvalidModelError(f"home configuration bottom row must be [0, 0, 0, 1], got {home[3]}")
    if screws.ndim != 2 or screws.shape[0] != 6 or screws.shape[1] == 0:
        raise InvalidModelError(f"screw axes must have shape (6, N) with N > 0, got {screws.shape}")

    dof = screws.shape[1]

    angular_norms = np.linalg.norm(np.asarray(screws[:3]), axis=0)
    for i, norm in enumerate(angular_norms):
        if not (np.isclose(norm, 1.0, atol=1e-9) or np.isclose(norm, 0.0, atol=1e-12)):
            raise InvalidModelError(
                f"screw axis {i} has angular norm {norm:.6f}, expected 1 (revolute) or 0 (prismatic)"
            )

    tables = {}
    for label, values in (
        ("link_offsets", link_offsets),
        ("link_lengths", link_lengths),
        ("link_twists", link_twists),
    ):
        table = jnp.asarray(values, dtype=jnp.float64)
        if table.shape != (dof,):
            raise InvalidModelError(f"{label} must have shape ({dof},), got {table.shape}")
        tables[label] = table

    if joint_names is None:
        joint_names = tuple(f"joint{i + 1}" for i in range(dof))
    joint_names = tuple(joint_names)
    if len(joint_names) != dof:
        raise InvalidModelError(f"expected {dof} joint names, got {len(joint_names)}")

    return RobotModel(
        name=name,
        joint_names=joint_names,
        home_configuration=home,
        screw_axes=screws,
        **tables,
    )
