"""Parser for XML robot descriptions of POE manipulators.

A description lists the home configuration and, per joint, its screw axis
and local link parameters::

    <robot name="ur5">
      <home xyz="0.95 0.24 0.08" rpy="1.5707963267948966 0 3.141592653589793"/>
      <joint name="shoulder_pan">
        <screw w="0 0 1" v="0 0 0"/>
        <link d="0.1" r="0" alpha="1.5707963267948966"/>
      </joint>
      ...
    </robot>
"""

import logging
from typing import List

import jax.numpy as jnp
import numpy as np
from lxml import etree

from poe_kinematics.core import InvalidModelError, RobotModel
from poe_kinematics.models import make_robot_model
from poe_kinematics.transforms import rotation, se3

logger = logging.getLogger(__name__)


def load_model(path: str) -> RobotModel:
    """Load an XML robot description into a RobotModel.

    Args:
        path: Path to the description file.

    Returns:
        RobotModel: validated robot model.

    Raises:
        InvalidModelError: if the file is not valid XML or an element or
            attribute is missing or malformed.
    """
    try:
        tree = etree.parse(path)
    except etree.XMLSyntaxError as exc:
        raise InvalidModelError(f"{path}: not a valid robot description: {exc}") from exc

    robot = parse_model(tree.getroot())
    logger.debug("Loaded robot %r with %d joints from %s", robot.name, robot.dof, path)
    return robot


def parse_model(root) -> RobotModel:
    """Build a RobotModel from an already parsed ``<robot>`` element."""
    if root.tag != "robot":
        raise InvalidModelError(f"expected <robot> root element, got <{root.tag}>")

    home_elem = root.find("home")
    if home_elem is None:
        raise InvalidModelError("robot description has no <home> element")

    xyz = _parse_vector(home_elem, "xyz", 3, default="0 0 0")
    rpy = _parse_vector(home_elem, "rpy", 3, default="0 0 0")
    home = se3.from_position_and_rotation(jnp.array(xyz), rotation.rpy_to_matrix(jnp.array(rpy)))

    joint_names: List[str] = []
    screws = []
    offsets, lengths, twists = [], [], []

    for i, joint in enumerate(root.findall("joint")):
        joint_names.append(joint.get("name", f"joint{i + 1}"))

        screw_elem = joint.find("screw")
        if screw_elem is None:
            raise InvalidModelError(f"joint {joint_names[-1]!r} has no <screw> element")
        w = _parse_vector(screw_elem, "w", 3)
        v = _parse_vector(screw_elem, "v", 3)
        screws.append(np.concatenate([w, v]))

        link_elem = joint.find("link")
        if link_elem is None:
            raise InvalidModelError(f"joint {joint_names[-1]!r} has no <link> element")
        offsets.append(_parse_float(link_elem, "d"))
        lengths.append(_parse_float(link_elem, "r"))
        twists.append(_parse_float(link_elem, "alpha"))

    if not screws:
        raise InvalidModelError("robot description has no <joint> elements")

    return make_robot_model(
        home,
        np.stack(screws, axis=1),
        offsets,
        lengths,
        twists,
        name=root.get("name", "robot"),
        joint_names=joint_names,
    )


def _parse_vector(elem, attribute: str, size: int, default=None) -> np.ndarray:
    text = elem.get(attribute, default)
    if text is None:
        raise InvalidModelError(f"<{elem.tag}> is missing attribute {attribute!r}")
    try:
        values = np.array([float(x) for x in text.split()])
    except ValueError as exc:
        raise InvalidModelError(f"<{elem.tag} {attribute}={text!r}> is not numeric") from exc
    if values.shape != (size,):
        raise InvalidModelError(
            f"<{elem.tag} {attribute}={text!r}> must have {size} components, got {values.size}"
        )
    return values


def _parse_float(elem, attribute: str, default=None) -> float:
    text = elem.get(attribute, default)
    if text is None:
        raise InvalidModelError(f"<{elem.tag}> is missing attribute {attribute!r}")
    try:
        return float(text)
    except ValueError as exc:
        raise InvalidModelError(f"<{elem.tag} {attribute}={text!r}> is not numeric") from exc
