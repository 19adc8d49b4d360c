"""Define the effective distance traveled by a robot link between two configurations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cartesian_refinement.spatial import angle_between_quaternions_rad, euclidean_distance_3d_m

if TYPE_CHECKING:
    from cartesian_refinement.kinematics import Configuration, KinematicModel


@dataclass(frozen=True)
class LinkDistanceMetric:
    """An upper estimate of how far any point of a link moves between two configurations.

    The estimate adds the displacement of the link's origin to the chord swept at the link's
        outermost reach, taken as the origin's distance from the world origin plus the diagonal
        of the link's collision-shape bounding box:

        d(a, b) = ||p_a - p_b|| + (||p_a|| + diagonal) * sin(theta)

    where p is the link position and theta the angle between the link orientations.
    """

    model: KinematicModel
    link_name: str
    diagonal_m: float

    @classmethod
    def for_link(cls, model: KinematicModel, link_name: str) -> LinkDistanceMetric:
        """Construct the metric for the named link, reading its geometry extent once."""
        return cls(model, link_name, model.link_extents(link_name).norm())

    def __call__(self, config_a: Configuration, config_b: Configuration) -> float:
        """Compute the effective distance (meters) the link travels between the configurations."""
        pose_a = self.model.link_transform(config_a, self.link_name)
        pose_b = self.model.link_transform(config_b, self.link_name)

        theta_rad = angle_between_quaternions_rad(pose_a.orientation, pose_b.orientation)
        sweep_m = (pose_a.position.norm() + self.diagonal_m) * math.sin(theta_rad)
        return euclidean_distance_3d_m(pose_a, pose_b) + sweep_m
