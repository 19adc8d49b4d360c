"""Define utility functions to compute various distance metrics."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cartesian_refinement.spatial.poses import Pose3D
    from cartesian_refinement.spatial.rotations import Quaternion


def euclidean_distance_3d_m(pose_a: Pose3D, pose_b: Pose3D) -> float:
    """Compute the Euclidean distance (meters) between two 3D poses.

    :param pose_a: First 3D pose used to compute the distance
    :param pose_b: Second 3D pose used to compute the distance
    :return: Straight-line distance (meters) in 3D space between the two poses
    :raises ValueError: If the poses are expressed in different reference frames
    """
    if pose_a.ref_frame != pose_b.ref_frame:
        raise ValueError(
            f"Cannot measure between frames '{pose_a.ref_frame}' and '{pose_b.ref_frame}'.",
        )

    return pose_a.position.distance_to(pose_b.position)


def angle_between_quaternions_rad(q1: Quaternion, q2: Quaternion) -> float:
    """Compute the angle (radians, in [0, pi]) of the shortest rotation between orientations.

    Reference: https://math.stackexchange.com/a/167828
    """
    return q1.angular_distance_rad(q2)
