"""Unit tests for axis-aligned bounding boxes (i.e., AABBs)."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given

from cartesian_refinement.geometry import AxisAlignedBoundingBox, Point3D
from cartesian_refinement.spatial import Pose3D

from .strategies.geometry_strategies import aabbs


@given(aabbs())
def test_aabb_vertices(aabb: AxisAlignedBoundingBox) -> None:
    """Verify that any AABB has eight vertices, each at an intersection of box edges."""
    # Arrange/Act - Compute the list of vertices of the given AABB
    vertices_list = list(aabb.vertices)

    # Assert - Verify that there are eight vertices, they're ~distinct, and along the box edges
    expected_total = 8
    assert len(vertices_list) == expected_total

    expected_distinct = 8
    if aabb.min_xyz.x == aabb.max_xyz.x:
        expected_distinct /= 2
    if aabb.min_xyz.y == aabb.max_xyz.y:
        expected_distinct /= 2
    if aabb.min_xyz.z == aabb.max_xyz.z:
        expected_distinct /= 2

    distinct_vertices = {tuple(v) for v in vertices_list}
    assert len(distinct_vertices) == expected_distinct

    for vertex in vertices_list:
        assert vertex.x in (aabb.min_xyz.x, aabb.max_xyz.x)
        assert vertex.y in (aabb.min_xyz.y, aabb.max_xyz.y)
        assert vertex.z in (aabb.min_xyz.z, aabb.max_xyz.z)


def test_aabb_rejects_inverted_corners() -> None:
    """Verify that an AABB whose minimum corner exceeds its maximum corner is rejected."""
    with pytest.raises(ValueError):
        AxisAlignedBoundingBox(Point3D(1.0, 0.0, 0.0), Point3D(0.0, 1.0, 1.0))


@given(aabbs())
def test_aabb_extents(aabb: AxisAlignedBoundingBox) -> None:
    """Verify that the extents are the non-negative side lengths of the box."""
    extents = aabb.extents

    assert min(extents.to_tuple()) >= 0.0
    assert np.allclose(extents.to_array(), aabb.max_xyz.to_array() - aabb.min_xyz.to_array())


@given(aabbs())
def test_aabb_overlaps_sphere_at_its_center(aabb: AxisAlignedBoundingBox) -> None:
    """Verify that a sphere centered in an AABB always overlaps it, however small."""
    center = Point3D.from_array((aabb.min_xyz.to_array() + aabb.max_xyz.to_array()) / 2.0)
    assert aabb.overlaps_sphere(center, radius_m=0.0)


def test_aabb_overlaps_sphere_near_a_face() -> None:
    """Verify that sphere overlap depends on the distance from the sphere to the nearest face."""
    # Arrange - Create a unit cube and a sphere center 0.5 m beyond its +x face
    aabb = AxisAlignedBoundingBox(Point3D(0.0, 0.0, 0.0), Point3D(1.0, 1.0, 1.0))
    center = Point3D(1.5, 0.5, 0.5)

    # Act/Assert - Expect overlap only for radii reaching the face
    assert aabb.overlaps_sphere(center, radius_m=0.6)
    assert not aabb.overlaps_sphere(center, radius_m=0.4)


def test_aabb_transformed_by_rotation() -> None:
    """Verify that a transformed AABB encloses the rotated and translated box."""
    # Arrange - Create a 2 x 1 x 1 box and a pose rotating it 90 degrees about z, then shifting it
    aabb = AxisAlignedBoundingBox(Point3D(-1.0, -0.5, -0.5), Point3D(1.0, 0.5, 0.5))
    pose = Pose3D.from_xyz_rpy(x=3.0, yaw_rad=np.pi / 2)

    # Act - Transform the box by the pose
    result = aabb.transformed(pose.to_homogeneous_matrix())

    # Assert - Expect the long side to lie along y, centered at the translated origin
    assert result.extents.approx_equal(Point3D(1.0, 2.0, 1.0))
    assert result.min_xyz.approx_equal(Point3D(2.5, -1.0, -0.5), atol=1e-9)
    assert result.max_xyz.approx_equal(Point3D(3.5, 1.0, 0.5), atol=1e-9)
