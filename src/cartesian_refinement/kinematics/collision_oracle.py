"""Define a collision oracle that bounds robot links and scene obstacles by simple primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cartesian_refinement.collision_models import create_primitive_shape
from cartesian_refinement.io.schemata import SceneSchema
from cartesian_refinement.spatial import Pose3D

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from cartesian_refinement.collision_models import PrimitiveShape
    from cartesian_refinement.geometry import AxisAlignedBoundingBox
    from cartesian_refinement.kinematics.kinematic_model import KinematicModel
    from cartesian_refinement.kinematics.kinematics_core import Configuration


@dataclass(frozen=True)
class Obstacle:
    """A static obstacle placed in the planning scene."""

    name: str
    pose: Pose3D
    shape: PrimitiveShape

    @property
    def aabb(self) -> AxisAlignedBoundingBox:
        """Get the world-frame axis-aligned bounding box enclosing the obstacle."""
        return self.shape.aabb.transformed(self.pose.to_homogeneous_matrix())


class PrimitiveCollisionOracle:
    """A conservative collision oracle over bounding spheres of links and boxes of obstacles.

    Each link is bounded by a sphere centered on its frame, with radius equal to half the
        diagonal of its collision shape's bounding box. Links without geometry never collide.
    """

    def __init__(
        self,
        model: KinematicModel,
        obstacles: Iterable[Obstacle] = (),
        *,
        check_self_collisions: bool = True,
        min_link_separation: int = 2,
        padding_m: float = 0.0,
    ) -> None:
        """Initialize the oracle with the robot model and the static obstacles of the scene.

        :param model: Kinematic model providing link poses and collision-shape extents
        :param obstacles: Static obstacles in the model's world frame
        :param check_self_collisions: Whether to check link pairs against one another
        :param min_link_separation: Minimum chain-index separation of link pairs checked for
            self-collision (adjacent links always touch at their shared joint)
        :param padding_m: Margin (meters) added to every link sphere
        """
        if min_link_separation < 1:
            raise ValueError(f"Link separation must be positive, got {min_link_separation}.")

        self.model = model
        self.obstacles = tuple(obstacles)
        self.check_self_collisions = check_self_collisions
        self.min_link_separation = min_link_separation
        self.padding_m = padding_m

        self._obstacle_aabbs = tuple(o.aabb for o in self.obstacles)
        self._radii_m = {name: model.link_extents(name).norm() / 2.0 for name in model.link_names}

    @classmethod
    def from_yaml(
        cls,
        model: KinematicModel,
        yaml_path: Path,
        **kwargs: Any,
    ) -> PrimitiveCollisionOracle:
        """Construct an oracle for the given model using obstacles loaded from a YAML file."""
        scene = SceneSchema.validate_yaml(yaml_path)
        obstacles = []
        for name, obstacle in scene.obstacles.items():
            pose_data = obstacle.pose
            if isinstance(pose_data, tuple):
                pose = Pose3D.from_sequence(pose_data, scene.default_frame)
            else:
                pose = Pose3D.from_sequence(pose_data.xyz_rpy, pose_data.frame)
            shape = create_primitive_shape(obstacle.shape.model_dump())
            obstacles.append(Obstacle(name, pose, shape))

        return cls(model, obstacles, **kwargs)

    def colliding_pairs(self, configuration: Configuration) -> list[tuple[str, str]]:
        """Find every (link, obstacle-or-link) pair in collision at the given configuration."""
        link_names = self.model.link_names
        centers = {
            name: self.model.link_transform(configuration, name).position for name in link_names
        }
        radii = {name: radius + self.padding_m for name, radius in self._radii_m.items()}

        pairs = []
        for name in link_names:
            if self._radii_m[name] == 0.0:
                continue
            for obstacle, aabb in zip(self.obstacles, self._obstacle_aabbs):
                if aabb.overlaps_sphere(centers[name], radii[name]):
                    pairs.append((name, obstacle.name))

        if self.check_self_collisions:
            for i, name_i in enumerate(link_names):
                for name_j in link_names[i + self.min_link_separation :]:
                    if self._radii_m[name_i] == 0.0 or self._radii_m[name_j] == 0.0:
                        continue
                    gap_m = centers[name_i].distance_to(centers[name_j])
                    if gap_m <= radii[name_i] + radii[name_j]:
                        pairs.append((name_i, name_j))

        return pairs

    def is_colliding(self, configuration: Configuration, group_name: str) -> bool:
        """Evaluate whether the configuration is self-colliding or colliding with the scene.

        :param configuration: Robot configuration to be checked
        :param group_name: Name of the joint group being planned for (every link is checked)
        :return: True if any link sphere overlaps an obstacle box or a non-adjacent link sphere
        """
        return bool(self.colliding_pairs(configuration))
