"""Define test fixtures providing example serial chains and planning scenes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from cartesian_refinement.io import export_yaml_data
from cartesian_refinement.io.schemata import SerialChainSchema
from cartesian_refinement.kinematics import SerialChainModel

SIX_DOF_CONFIGURATION = {
    "joint_1": 0.2,
    "joint_2": 0.3,
    "joint_3": 0.6,
    "joint_4": 0.1,
    "joint_5": 0.5,
    "joint_6": -0.2,
}
"""A configuration of the six-DOF chain away from its singularities."""


def six_dof_chain_data() -> dict[str, Any]:
    """Return YAML data describing a six-DOF arm with an end-effector named `link_6`."""
    link_shape = {"type": "box", "x": 0.04, "y": 0.04, "z": 0.04}
    links = [{"name": "base_link", "shape": {"type": "cylinder", "height": 0.1, "radius": 0.08}}]
    links += [{"name": f"link_{k}", "shape": link_shape} for k in range(1, 7)]

    joint_specs = [
        ((0.0, 0.0, 0.1), (0.0, 0.0, 1.0), (-3.1, 3.1)),
        ((0.0, 0.0, 0.2), (0.0, 1.0, 0.0), (-2.5, 2.5)),
        ((0.0, 0.0, 0.3), (0.0, 1.0, 0.0), (-2.5, 2.5)),
        ((0.1, 0.0, 0.1), (1.0, 0.0, 0.0), (-3.1, 3.1)),
        ((0.15, 0.0, 0.0), (0.0, 1.0, 0.0), (-2.0, 2.0)),
        ((0.1, 0.0, 0.0), (1.0, 0.0, 0.0), (-3.1, 3.1)),
    ]
    joints = []
    for k, (xyz, axis, limits) in enumerate(joint_specs, start=1):
        joints.append(
            {
                "name": f"joint_{k}",
                "parent": links[k - 1]["name"],
                "child": links[k]["name"],
                "origin": [*xyz, 0.0, 0.0, 0.0],
                "axis": list(axis),
                "limits": list(limits),
            },
        )

    return {
        "name": "six_dof_arm",
        "planning_group": "manipulator",
        "links": links,
        "joints": joints,
    }


@pytest.fixture
def six_dof_chain() -> SerialChainModel:
    """Return a six-DOF serial chain model."""
    return SerialChainModel.from_schema(SerialChainSchema.model_validate(six_dof_chain_data()))


@pytest.fixture
def six_dof_chain_yaml(tmp_path: Path) -> Path:
    """Return the path to a YAML file describing the six-DOF chain."""
    yaml_path = tmp_path / "six_dof_arm.yaml"
    export_yaml_data(six_dof_chain_data(), yaml_path)
    return yaml_path
