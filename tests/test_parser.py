"""Tests for robot description loading and model validation."""

from pathlib import Path

import jax.numpy as jnp
import numpy as np
import pytest

from poe_kinematics import build_model, build_robot_model, forward_kinematics, make_robot_model
from poe_kinematics.core import InvalidModelError, RobotModel
from poe_kinematics.io import load_model

FIXTURES = Path(__file__).parent / "fixtures"


def test_load_ur5_description():
    """The UR5 description file matches the built-in preset."""
    robot = load_model(str(FIXTURES / "ur5.xml"))
    preset = build_robot_model()

    assert isinstance(robot, RobotModel)
    assert robot.name == "ur5"
    assert robot.dof == 6
    assert robot.joint_names == preset.joint_names

    np.testing.assert_allclose(robot.home_configuration, preset.home_configuration, atol=1e-12)
    np.testing.assert_allclose(robot.screw_axes, preset.screw_axes, atol=1e-12)
    np.testing.assert_allclose(robot.link_offsets, preset.link_offsets, atol=1e-12)
    np.testing.assert_allclose(robot.link_lengths, preset.link_lengths, atol=1e-12)
    np.testing.assert_allclose(robot.link_twists, preset.link_twists, atol=1e-12)


def test_loaded_model_fk_zero_is_home():
    robot = load_model(str(FIXTURES / "ur5.xml"))
    home, _ = build_model()

    np.testing.assert_allclose(forward_kinematics(robot, jnp.zeros(6)), home, atol=1e-12)


def test_load_rejects_non_unit_screw():
    with pytest.raises(InvalidModelError, match="angular norm"):
        load_model(str(FIXTURES / "bad_screw.xml"))


def test_load_requires_home():
    with pytest.raises(InvalidModelError, match="<home>"):
        load_model(str(FIXTURES / "no_home.xml"))


def test_load_invalid_xml(tmp_path):
    path = tmp_path / "broken.xml"
    path.write_text("<robot><home xyz='0 0 0'></robot>")

    with pytest.raises(InvalidModelError, match="not a valid robot description"):
        load_model(str(path))


def test_load_malformed_attributes(tmp_path):
    path = tmp_path / "short.xml"
    path.write_text(
        "<robot><home xyz='0 0'/>"
        "<joint><screw w='0 0 1'/><link d='0' r='0' alpha='0'/></joint></robot>"
    )

    with pytest.raises(InvalidModelError, match="3 components"):
        load_model(str(path))


@pytest.mark.parametrize(
    "joint, missing",
    [
        ("<screw w='0 0 1' v='0 0 0'/><link r='0' alpha='0'/>", "'d'"),
        ("<screw w='0 0 1' v='0 0 0'/><link d='0.1' alpha='0'/>", "'r'"),
        ("<screw w='0 0 1' v='0 0 0'/><link d='0.1' r='0'/>", "'alpha'"),
        ("<screw w='0 0 1'/><link d='0.1' r='0' alpha='0'/>", "'v'"),
    ],
)
def test_load_missing_joint_attribute(tmp_path, joint, missing):
    path = tmp_path / "partial.xml"
    path.write_text(f"<robot><home xyz='0 0 1'/><joint>{joint}</joint></robot>")

    with pytest.raises(InvalidModelError, match=f"missing attribute {missing}"):
        load_model(str(path))


def test_load_requires_joints(tmp_path):
    path = tmp_path / "empty.xml"
    path.write_text("<robot name='empty'><home xyz='0 0 1'/></robot>")

    with pytest.raises(InvalidModelError, match="no <joint>"):
        load_model(str(path))


def test_make_robot_model_defaults():
    home, screw_axes = build_model()

    robot = make_robot_model(home, screw_axes, np.zeros(6), np.zeros(6), np.zeros(6))

    assert robot.name == "robot"
    assert robot.joint_names == tuple(f"joint{i}" for i in range(1, 7))
    np.testing.assert_array_equal(robot.screw_axis(2), screw_axes[:, 2])


def test_make_robot_model_accepts_prismatic_joint():
    home = jnp.eye(4)
    screws = jnp.array([[0.0, 0.0, 0.0, 0.0, 0.0, 1.0]]).T

    robot = make_robot_model(home, screws, [0.0], [0.0], [0.0])

    T = forward_kinematics(robot, jnp.array([0.25]))
    np.testing.assert_allclose(T[:3, 3], jnp.array([0.0, 0.0, 0.25]), atol=1e-15)


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"home_configuration": jnp.eye(3)}, r"\(4, 4\)"),
        ({"home_configuration": 2.0 * jnp.eye(4)}, "bottom row"),
        ({"screw_axes": jnp.zeros((5, 6))}, r"\(6, N\)"),
        ({"link_offsets": np.zeros(5)}, "link_offsets"),
        ({"joint_names": ("a", "b")}, "joint names"),
    ],
)
def test_make_robot_model_validation(overrides, match):
    home, screw_axes = build_model()
    kwargs = dict(
        home_configuration=home,
        screw_axes=screw_axes,
        link_offsets=np.zeros(6),
        link_lengths=np.zeros(6),
        link_twists=np.zeros(6),
    )
    kwargs.update(overrides)

    with pytest.raises(InvalidModelError, match=match):
        make_robot_model(**kwargs)
