"""Unit tests for distance utility functions defined in distances.py."""

import numpy as np
import pytest
from hypothesis import given

from cartesian_refinement.spatial import (
    Pose3D,
    Quaternion,
    angle_between_quaternions_rad,
    euclidean_distance_3d_m,
)

from .strategies.spatial_strategies import poses_3d, quaternions


@given(poses_3d(), poses_3d())
def test_euclidean_distance_3d_m(pose_a: Pose3D, pose_b: Pose3D) -> None:
    """Verify that the Euclidean distance (meters) between any two 3D poses is non-negative."""
    # Arrange/Act - Given two 3D poses, compute the Euclidean distance between them
    distance_m = euclidean_distance_3d_m(pose_a, pose_b)

    # Assert - Euclidean distances should be non-negative, and zero if the pose positions are equal
    assert distance_m >= 0.0
    if all(np.equal(pose_a.position.to_array(), pose_b.position.to_array())):
        assert distance_m == 0.0


def test_euclidean_distance_across_frames() -> None:
    """Verify that distances between poses in different frames are rejected."""
    with pytest.raises(ValueError):
        euclidean_distance_3d_m(Pose3D.identity("world"), Pose3D.identity("base_link"))


@given(quaternions(), quaternions())
def test_angle_between_quaternions(q1: Quaternion, q2: Quaternion) -> None:
    """Verify that the angle between any two orientations is symmetric and within [0, pi]."""
    # Arrange/Act - Compute the angle between the orientations in both orders
    angle_rad = angle_between_quaternions_rad(q1, q2)
    reverse_rad = angle_between_quaternions_rad(q2, q1)

    # Assert - Expect a symmetric angle within [0, pi]
    assert 0.0 <= angle_rad <= np.pi
    assert np.isclose(angle_rad, reverse_rad, atol=1e-9)
