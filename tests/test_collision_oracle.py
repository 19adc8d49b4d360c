"""Unit tests for the primitive-shape collision oracle."""

from __future__ import annotations

from pathlib import Path

import pytest

from cartesian_refinement.collision_models import Box, Sphere
from cartesian_refinement.io import export_yaml_data
from cartesian_refinement.kinematics import (
    ChainJoint,
    ChainLink,
    Obstacle,
    PrimitiveCollisionOracle,
    SerialChainModel,
)
from cartesian_refinement.spatial import Pose3D

from .fixtures.chain_fixtures import SIX_DOF_CONFIGURATION, six_dof_chain  # noqa: F401


def stacked_sphere_chain() -> SerialChainModel:
    """Construct a chain whose first and last links are large spheres 0.1 m apart."""
    links = [ChainLink("base", Sphere(0.1)), ChainLink("middle"), ChainLink("top", Sphere(0.1))]
    origin = Pose3D.from_xyz_rpy(z=0.05)
    joints = [
        ChainJoint("joint_a", "base", "middle", origin, (0.0, 0.0, 1.0), -1.0, 1.0),
        ChainJoint("joint_b", "middle", "top", origin, (0.0, 0.0, 1.0), -1.0, 1.0),
    ]
    return SerialChainModel("stacked_spheres", links, joints)


def test_oracle_without_obstacles(six_dof_chain: SerialChainModel) -> None:
    """Verify that an unfolded arm in an empty scene is collision-free."""
    oracle = PrimitiveCollisionOracle(six_dof_chain)

    assert not oracle.is_colliding(SIX_DOF_CONFIGURATION, "manipulator")
    assert oracle.colliding_pairs(SIX_DOF_CONFIGURATION) == []


def test_oracle_detects_obstacle_at_end_effector(six_dof_chain: SerialChainModel) -> None:
    """Verify that an obstacle placed on the end-effector is detected."""
    # Arrange - Place a small box exactly where the end-effector is
    ee_pose = six_dof_chain.link_transform(SIX_DOF_CONFIGURATION, "link_6")
    obstacle = Obstacle("crate", ee_pose, Box(0.05, 0.05, 0.05))
    oracle = PrimitiveCollisionOracle(six_dof_chain, [obstacle])

    # Act - Find the colliding pairs at the configuration
    pairs = oracle.colliding_pairs(SIX_DOF_CONFIGURATION)

    # Assert - Expect the end-effector to collide with the box
    assert ("link_6", "crate") in pairs
    assert oracle.is_colliding(SIX_DOF_CONFIGURATION, "manipulator")


def test_oracle_ignores_distant_obstacle(six_dof_chain: SerialChainModel) -> None:
    """Verify that an obstacle far from every link is not reported."""
    obstacle = Obstacle("wall", Pose3D.from_xyz_rpy(x=5.0), Box(0.1, 2.0, 2.0))
    oracle = PrimitiveCollisionOracle(six_dof_chain, [obstacle])

    assert not oracle.is_colliding(SIX_DOF_CONFIGURATION, "manipulator")


def test_oracle_padding_grows_links() -> None:
    """Verify that padding the link spheres makes a nearby obstacle collide."""
    # Arrange - Create a one-joint arm with a 0.1 m cube at (1, 0, 0), and a box 0.25 m beyond it
    links = [ChainLink("base"), ChainLink("tip", Box(0.1, 0.1, 0.1))]
    joints = [
        ChainJoint(
            "joint",
            "base",
            "tip",
            Pose3D.from_xyz_rpy(x=1.0),
            (0.0, 0.0, 1.0),
            -1.0,
            1.0,
        ),
    ]
    chain = SerialChainModel("pointer", links, joints)
    obstacle = Obstacle("block", Pose3D.from_xyz_rpy(x=1.3), Box(0.1, 0.1, 0.1))
    configuration = chain.default_configuration()

    # Act/Assert - Expect a collision only once the link sphere is padded by a large margin
    unpadded = PrimitiveCollisionOracle(chain, [obstacle])
    padded = PrimitiveCollisionOracle(chain, [obstacle], padding_m=0.2)
    assert not unpadded.is_colliding(configuration, "manipulator")
    assert padded.is_colliding(configuration, "manipulator")


def test_oracle_self_collision() -> None:
    """Verify that overlapping non-adjacent links collide only when self-collisions are checked."""
    # Arrange - Create a chain whose base and top spheres overlap
    chain = stacked_sphere_chain()
    configuration = chain.default_configuration()

    # Act - Create oracles with and without self-collision checking, and with a wider separation
    checking = PrimitiveCollisionOracle(chain)
    not_checking = PrimitiveCollisionOracle(chain, check_self_collisions=False)
    separated = PrimitiveCollisionOracle(chain, min_link_separation=3)

    # Assert - Expect the base-top pair only when it is eligible for checking
    assert checking.colliding_pairs(configuration) == [("base", "top")]
    assert not not_checking.is_colliding(configuration, "manipulator")
    assert not separated.is_colliding(configuration, "manipulator")


def test_oracle_rejects_invalid_separation(six_dof_chain: SerialChainModel) -> None:
    """Verify that links must be separated by at least one joint to be checked."""
    with pytest.raises(ValueError):
        PrimitiveCollisionOracle(six_dof_chain, min_link_separation=0)


def test_oracle_from_yaml(tmp_path: Path, six_dof_chain: SerialChainModel) -> None:
    """Verify that scene obstacles can be loaded from YAML."""
    # Arrange - Export a scene with one obstacle on the end-effector and one far away
    ee_pose = six_dof_chain.link_transform(SIX_DOF_CONFIGURATION, "link_6")
    scene_data = {
        "obstacles": {
            "crate": {
                "pose": list(ee_pose.to_xyz_rpy()),
                "shape": {"type": "box", "x": 0.05, "y": 0.05, "z": 0.05},
            },
            "ball": {
                "pose": {"xyz_rpy": [3.0, 0.0, 0.0, 0.0, 0.0, 0.0], "frame": "world"},
                "shape": {"type": "sphere", "radius": 0.2},
            },
        },
    }
    yaml_path = tmp_path / "scene.yaml"
    export_yaml_data(scene_data, yaml_path)

    # Act - Load an oracle for the scene
    oracle = PrimitiveCollisionOracle.from_yaml(six_dof_chain, yaml_path)

    # Assert - Expect both obstacles, with only the crate colliding
    assert {o.name for o in oracle.obstacles} == {"crate", "ball"}
    assert oracle.colliding_pairs(SIX_DOF_CONFIGURATION) == [("link_6", "crate")]
