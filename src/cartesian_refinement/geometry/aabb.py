"""Define a class to represent axis-aligned bounding boxes."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cartesian_refinement.geometry.points import Point3D

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray


@dataclass(frozen=True)
class AxisAlignedBoundingBox:
    """An axis-aligned bounding box (AABB) comprised of minimum and maximum (x,y,z) coordinates."""

    min_xyz: Point3D
    max_xyz: Point3D

    def __post_init__(self) -> None:
        """Verify that the minimum corner does not exceed the maximum corner."""
        if np.any(self.min_xyz.to_array() > self.max_xyz.to_array()):
            raise ValueError(f"Invalid AABB: min {self.min_xyz} exceeds max {self.max_xyz}")

    @classmethod
    def from_points(cls, points: NDArray[np.float64]) -> AxisAlignedBoundingBox:
        """Construct the tightest AABB containing an (N,3) array of points."""
        if points.ndim != 2 or points.shape[1] != 3 or points.shape[0] == 0:
            raise ValueError(f"Expected a non-empty (N,3) array of points, got {points.shape}")
        return AxisAlignedBoundingBox(
            min_xyz=Point3D.from_array(points.min(axis=0)),
            max_xyz=Point3D.from_array(points.max(axis=0)),
        )

    @property
    def extents(self) -> Point3D:
        """Get the (x,y,z) side lengths of the bounding box."""
        return Point3D.from_array(self.max_xyz.to_array() - self.min_xyz.to_array())

    @property
    def vertices(self) -> Iterator[Point3D]:
        """Provide an iterator over the eight vertices of the axis-aligned bounding box."""
        min_x, min_y, min_z = self.min_xyz
        max_x, max_y, max_z = self.max_xyz
        all_xyzs = itertools.product((min_x, max_x), (min_y, max_y), (min_z, max_z))
        return (Point3D.from_sequence(xyz) for xyz in all_xyzs)

    def transformed(self, matrix: NDArray[np.float64]) -> AxisAlignedBoundingBox:
        """Compute the AABB enclosing this box after a rigid 4x4 homogeneous transformation."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 homogeneous matrix, got {matrix.shape}")
        coords = np.array([v.to_homogeneous_coordinate() for v in self.vertices])
        moved = (matrix @ coords.T).T
        return AxisAlignedBoundingBox.from_points(moved[:, :3])

    def overlaps_sphere(self, center: Point3D, radius_m: float) -> bool:
        """Evaluate whether a sphere intersects (or touches) the bounding box.

        :param center: Center of the sphere
        :param radius_m: Radius (meters) of the sphere
        :return: True if the closest point of the box lies within the sphere
        """
        c = center.to_array()
        closest = np.clip(c, self.min_xyz.to_array(), self.max_xyz.to_array())
        return bool(np.linalg.norm(c - closest) <= radius_m)
