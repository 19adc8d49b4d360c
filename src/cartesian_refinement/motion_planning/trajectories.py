"""Define classes to represent planned paths and trajectories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Sequence

from cartesian_refinement.io.yaml_utils import export_yaml_data
from cartesian_refinement.kinematics import Configuration
from cartesian_refinement.spatial import Pose3D

if TYPE_CHECKING:
    from pathlib import Path as FilePath

    from cartesian_refinement.kinematics import KinematicModel
    from cartesian_refinement.motion_planning.refined_path import RefinedPath

Path = Sequence[Configuration]
"""A path is a sequence of robot configurations."""

CartesianPath = Sequence[Pose3D]
"""A Cartesian path is a sequence of target poses (e.g., for an end-effector)."""


@dataclass
class TrajectoryPoint:
    """A planned state of joint values at a specified time in a trajectory."""

    time_s: float
    """Time (seconds) since the trajectory started."""

    positions: Configuration
    velocities: Configuration

    @property
    def joint_names(self) -> list[str]:
        """Retrieve the names of the joints specified by the point."""
        return list(self.positions.keys())

    def to_yaml_data(self) -> dict[str, Any]:
        """Convert the trajectory point into a dictionary of YAML data."""
        return {
            "time_s": self.time_s,
            "positions": dict(self.positions),
            "velocities": dict(self.velocities),
        }


@dataclass
class Trajectory:
    """A sequence of planned configurations at specified times."""

    points: list[TrajectoryPoint]

    def __post_init__(self) -> None:
        """Verify properties expected of any valid trajectory."""
        if not self.points:
            return

        # All points in any non-empty trajectory should use the same joint names
        j0_names = self.points[0].joint_names
        for p in self.points[1:]:
            jn_names = p.joint_names
            if j0_names != jn_names:
                raise ValueError(f"Trajectory points used joint names: {j0_names} and {jn_names}.")

    @property
    def joint_names(self) -> list[str]:
        """Retrieve the names of the joints specified by the trajectory."""
        return [] if not self.points else self.points[0].joint_names

    @property
    def duration_s(self) -> float:
        """Retrieve the time (seconds) at which the trajectory ends."""
        return 0.0 if not self.points else self.points[-1].time_s

    def to_yaml_data(self) -> dict[str, Any]:
        """Convert the trajectory into a dictionary of YAML data."""
        return {
            "joint_names": self.joint_names,
            "points": [p.to_yaml_data() for p in self.points],
        }


class TrajectoryConsumer(Protocol):
    """A recipient of validated paths (e.g., a controller or a visualizer)."""

    def consume(self, path: RefinedPath) -> None:
        """Receive a path whose every sample has been refined and validated."""
        ...


def time_parameterize(
    samples: Path,
    joint_names: Sequence[str],
    period_s: float,
) -> Trajectory:
    """Assign uniformly spaced times to a path of configurations.

    Velocities are estimated by central differences and are zero at both ends of the path.

    :param samples: Configurations of the path, in order
    :param joint_names: Names of the joints included in the trajectory, in order
    :param period_s: Duration (seconds) between consecutive samples
    :return: Trajectory visiting each sample in turn
    :raises KeyError: If a sample lacks one of the given joints
    """
    if period_s <= 0.0:
        raise ValueError(f"Trajectory period must be positive, got {period_s}.")

    positions = [{name: float(sample[name]) for name in joint_names} for sample in samples]

    points = []
    last = len(positions) - 1
    for k, position in enumerate(positions):
        if k in (0, last):
            velocities = {name: 0.0 for name in joint_names}
        else:
            velocities = {
                name: (positions[k + 1][name] - positions[k - 1][name]) / (2.0 * period_s)
                for name in joint_names
            }
        points.append(TrajectoryPoint(k * period_s, position, velocities))

    return Trajectory(points)


def cartesian_waypoints(samples: Path, model: KinematicModel, link_name: str) -> CartesianPath:
    """Compute the world-frame poses of a link at each sample of a path."""
    return [model.link_transform(sample, link_name) for sample in samples]


def export_trajectory(trajectory: Trajectory, yaml_path: FilePath) -> None:
    """Export the given trajectory to a YAML file."""
    export_yaml_data(trajectory.to_yaml_data(), yaml_path)
