"""Define the interfaces through which refinement queries kinematics and collision checking."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cartesian_refinement.geometry import Point3D
    from cartesian_refinement.kinematics.kinematics_core import Configuration
    from cartesian_refinement.spatial import Pose3D


@runtime_checkable
class KinematicModel(Protocol):
    """A kinematic and geometric model of a robot (e.g., loaded from a robot description)."""

    @property
    def link_names(self) -> tuple[str, ...]:
        """Retrieve the names of the robot's links in a stable order, fixed base first."""
        ...

    def link_transform(self, configuration: Configuration, link_name: str) -> Pose3D:
        """Compute the world-frame pose of the named link at the given configuration."""
        ...

    def link_extents(self, link_name: str) -> Point3D:
        """Retrieve the (x,y,z) bounding-box extents of the named link's collision shape."""
        ...

    def solve_ik(
        self,
        group_name: str,
        target: Pose3D,
        tip_link: str,
        seed: Optional[Configuration] = None,
        timeout_s: Optional[float] = None,
    ) -> Optional[Configuration]:
        """Solve for a configuration placing `tip_link` at the world-frame target pose.

        :param group_name: Name of the joint group whose joints may move
        :param target: World-frame target pose of the tip link
        :param tip_link: Name of the link that should reach the target
        :param seed: Configuration the solver should stay near (optional)
        :param timeout_s: Duration (seconds) after which the solver gives up (optional)
        :return: Configuration solving the IK problem, or None if no solution was found
        """
        ...


@runtime_checkable
class CollisionOracle(Protocol):
    """An oracle reporting whether robot configurations are in collision."""

    def is_colliding(self, configuration: Configuration, group_name: str) -> bool:
        """Evaluate whether the configuration is self-colliding or colliding with the scene."""
        ...
