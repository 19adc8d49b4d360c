"""Define a kinematic model of a serial chain of revolute joints."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np
from trimesh.transformations import rotation_matrix

from cartesian_refinement.collision_models import (
    PrimitiveShape,
    compute_shape_extents,
    create_primitive_shape,
)
from cartesian_refinement.io.schemata import SerialChainSchema
from cartesian_refinement.spatial import Pose3D, Quaternion

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from numpy.typing import NDArray

    from cartesian_refinement.geometry import Point3D
    from cartesian_refinement.kinematics.kinematics_core import Configuration

IK_POSITION_TOLERANCE_M = 1e-5
IK_ORIENTATION_TOLERANCE_RAD = 1e-4
IK_MAX_STEP_RAD = 0.5
"""Largest change (radians) any joint may make in one iteration of the IK solver."""


@dataclass(frozen=True)
class ChainLink:
    """A rigid link of a serial chain, with an optional collision shape centered on its frame."""

    name: str
    shape: Optional[PrimitiveShape] = None


@dataclass(frozen=True)
class ChainJoint:
    """A revolute joint rotating its child link relative to its parent link."""

    name: str
    parent_link: str
    child_link: str

    origin: Pose3D
    """Pose of the joint frame relative to the parent link frame."""

    axis: tuple[float, float, float]
    """Rotation axis, specified in the joint frame."""

    lower_limit: float
    upper_limit: float


class SerialChainModel:
    """A kinematic model of a serial chain of revolute joints, with numerical inverse kinematics.

    Link k + 1 is attached to link k through joint k. Link 0 is the fixed base.
    """

    def __init__(
        self,
        name: str,
        links: Sequence[ChainLink],
        joints: Sequence[ChainJoint],
        planning_group: str = "manipulator",
        base_pose: Optional[Pose3D] = None,
        max_ik_iterations: int = 500,
        ik_damping: float = 0.05,
    ) -> None:
        """Initialize the chain from its links and joints.

        :param name: Name of the robot
        :param links: Links of the chain in order from the fixed base outward
        :param joints: Joints of the chain, where joint k connects link k to link k + 1
        :param planning_group: Name of the joint group made of every joint in the chain
        :param base_pose: World-frame pose of the base link (defaults to the identity)
        :param max_ik_iterations: Iteration budget of the damped least-squares IK solver
        :param ik_damping: Damping factor of the damped least-squares IK solver
        """
        if len(joints) != len(links) - 1:
            raise ValueError(f"A chain of {len(links)} links needs {len(links) - 1} joints.")
        for index, joint in enumerate(joints):
            if (joint.parent_link, joint.child_link) != (links[index].name, links[index + 1].name):
                raise ValueError(
                    f"Joint '{joint.name}' does not connect links {index} and {index + 1}.",
                )

        self.name = name
        self.planning_group = planning_group
        self.base_pose = base_pose if base_pose is not None else Pose3D.identity()
        self.max_ik_iterations = max_ik_iterations
        self.ik_damping = ik_damping

        self._links = tuple(links)
        self._joints = tuple(joints)
        self._link_index = {link.name: index for index, link in enumerate(self._links)}
        self._lower = np.array([j.lower_limit for j in self._joints])
        self._upper = np.array([j.upper_limit for j in self._joints])

    @classmethod
    def from_schema(cls, schema: SerialChainSchema) -> SerialChainModel:
        """Construct a serial chain model from validated schema data."""
        links = []
        for link in schema.links:
            shape = None if link.shape is None else create_primitive_shape(link.shape.model_dump())
            links.append(ChainLink(link.name, shape))

        joints = [
            ChainJoint(
                name=joint.name,
                parent_link=joint.parent,
                child_link=joint.child,
                origin=Pose3D.from_sequence(joint.origin),
                axis=joint.axis,
                lower_limit=joint.limits[0],
                upper_limit=joint.limits[1],
            )
            for joint in schema.joints
        ]
        return cls(schema.name, links, joints, planning_group=schema.planning_group)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> SerialChainModel:
        """Load a serial chain model from the given YAML file."""
        return cls.from_schema(SerialChainSchema.validate_yaml(yaml_path))

    @property
    def link_names(self) -> tuple[str, ...]:
        """Retrieve the names of the chain's links, fixed base first."""
        return tuple(link.name for link in self._links)

    @property
    def joint_names(self) -> tuple[str, ...]:
        """Retrieve the names of the chain's joints in their canonical order."""
        return tuple(joint.name for joint in self._joints)

    def default_configuration(self) -> Configuration:
        """Construct the all-zero configuration, clamped into the joint limits."""
        zeros = np.zeros(len(self._joints))
        return self._to_configuration(np.clip(zeros, self._lower, self._upper))

    def link_shape(self, link_name: str) -> Optional[PrimitiveShape]:
        """Retrieve the collision shape of the named link (None if it has no geometry)."""
        return self._links[self._index_of(link_name)].shape

    def link_extents(self, link_name: str) -> Point3D:
        """Retrieve the bounding-box extents of the named link's collision shape."""
        return compute_shape_extents(self.link_shape(link_name))

    def link_transform(self, configuration: Configuration, link_name: str) -> Pose3D:
        """Compute the world-frame pose of the named link at the given configuration."""
        link_index = self._index_of(link_name)
        link_matrices, _ = self._forward(self._to_vector(configuration))
        return Pose3D.from_homogeneous_matrix(link_matrices[link_index], self.base_pose.ref_frame)

    def forward_kinematics(self, configuration: Configuration) -> dict[str, Pose3D]:
        """Compute the world-frame poses of every link at the given configuration."""
        link_matrices, _ = self._forward(self._to_vector(configuration))
        frame = self.base_pose.ref_frame
        return {
            link.name: Pose3D.from_homogeneous_matrix(matrix, frame)
            for link, matrix in zip(self._links, link_matrices)
        }

    def solve_ik(
        self,
        group_name: str,
        target: Pose3D,
        tip_link: str,
        seed: Optional[Configuration] = None,
        timeout_s: Optional[float] = None,
    ) -> Optional[Configuration]:
        """Solve for a configuration placing `tip_link` at the target pose (damped least squares).

        :param group_name: Name of the joint group (must be the chain's planning group)
        :param target: World-frame target pose of the tip link
        :param tip_link: Name of the link that should reach the target
        :param seed: Initial guess; the solver descends from it toward the nearest solution
        :param timeout_s: Duration (seconds) after which the solver gives up (optional)
        :return: Configuration solving the IK problem, or None if the solver did not converge
        """
        if group_name != self.planning_group:
            raise KeyError(f"Unknown joint group '{group_name}' for robot '{self.name}'.")
        tip_index = self._index_of(tip_link)
        if target.ref_frame != self.base_pose.ref_frame:
            raise ValueError(f"IK target must be in frame '{self.base_pose.ref_frame}': {target}")

        q = self._to_vector(seed if seed is not None else self.default_configuration())
        q = np.clip(q, self._lower, self._upper)
        target_m = target.to_homogeneous_matrix()
        deadline_s = None if timeout_s is None else time.monotonic() + timeout_s

        for _ in range(self.max_ik_iterations):
            link_matrices, joint_frames = self._forward(q)
            tip_m = link_matrices[tip_index]

            position_error = target_m[:3, 3] - tip_m[:3, 3]
            rotation_error_m = target_m[:3, :3] @ tip_m[:3, :3].T
            rotation_error = Quaternion.from_rotation_matrix(rotation_error_m).to_rotation_vector()

            if (
                np.linalg.norm(position_error) < IK_POSITION_TOLERANCE_M
                and np.linalg.norm(rotation_error) < IK_ORIENTATION_TOLERANCE_RAD
            ):
                return self._to_configuration(q)

            if deadline_s is not None and time.monotonic() > deadline_s:
                break

            # Only joints between the base and the tip link move the tip
            jacobian = np.zeros((6, len(self._joints)))
            for j, (axis_w, origin_w) in enumerate(joint_frames[:tip_index]):
                jacobian[:3, j] = np.cross(axis_w, tip_m[:3, 3] - origin_w)
                jacobian[3:, j] = axis_w

            error = np.concatenate([position_error, rotation_error])
            damped = jacobian @ jacobian.T + (self.ik_damping**2) * np.eye(6)
            step = jacobian.T @ np.linalg.solve(damped, error)
            step = np.clip(step, -IK_MAX_STEP_RAD, IK_MAX_STEP_RAD)
            q = np.clip(q + step, self._lower, self._upper)

        return None

    def _forward(
        self,
        q: NDArray[np.float64],
    ) -> tuple[list[NDArray[np.float64]], list[tuple[NDArray[np.float64], NDArray[np.float64]]]]:
        """Compute link transforms and world-frame joint (axis, origin) pairs for joint values."""
        current_m = self.base_pose.to_homogeneous_matrix()
        link_matrices = [current_m]
        joint_frames = []

        for joint, angle_rad in zip(self._joints, q):
            joint_frame_m = current_m @ joint.origin.to_homogeneous_matrix()
            axis = np.asarray(joint.axis, dtype=np.float64)
            axis_w = joint_frame_m[:3, :3] @ (axis / np.linalg.norm(axis))
            joint_frames.append((axis_w, joint_frame_m[:3, 3].copy()))

            current_m = joint_frame_m @ rotation_matrix(angle_rad, joint.axis)
            link_matrices.append(current_m)

        return link_matrices, joint_frames

    def _index_of(self, link_name: str) -> int:
        """Find the index of the named link within the chain."""
        if link_name not in self._link_index:
            raise KeyError(f"Unknown link '{link_name}' for robot '{self.name}'.")
        return self._link_index[link_name]

    def _to_vector(self, configuration: Configuration) -> NDArray[np.float64]:
        """Convert a configuration into a vector of joint values in canonical order."""
        return np.array([float(configuration.get(j.name, 0.0)) for j in self._joints])

    def _to_configuration(self, q: NDArray[np.float64]) -> Configuration:
        """Convert a vector of joint values into a fresh configuration."""
        return {joint.name: float(value) for joint, value in zip(self._joints, q)}
