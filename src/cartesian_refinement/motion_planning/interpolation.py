"""Interpolate straight-line Cartesian paths and solve them into robot configurations."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from cartesian_refinement.io.logging import log_debug, log_error
from cartesian_refinement.motion_planning.outcome import FailedCheck, Failure, FailureKind, Outcome
from cartesian_refinement.motion_planning.refined_path import RefinedPath

if TYPE_CHECKING:
    from cartesian_refinement.kinematics import Configuration, KinematicModel
    from cartesian_refinement.motion_planning.config import RefinementConfig
    from cartesian_refinement.spatial import Pose3D


def default_step_count(start_pose: Pose3D, goal_pose: Pose3D, step_m: float) -> int:
    """Compute how many intermediate steps split a translation into pieces of the given length.

    :param start_pose: Pose at which the translation begins
    :param goal_pose: Pose at which the translation ends
    :param step_m: Nominal length (meters) of each step
    :return: Ceiling of the translation distance divided by the step length
    """
    if step_m <= 0.0:
        raise ValueError(f"Step length must be positive, got {step_m}.")
    return math.ceil(start_pose.position.distance_to(goal_pose.position) / step_m)


class CartesianInterpolator:
    """Generates configurations whose end-effector poses follow a straight line in task space."""

    def __init__(self, model: KinematicModel, config: RefinementConfig) -> None:
        """Initialize the interpolator with the robot model and the run's configuration."""
        self.model = model
        self.config = config

    def end_effector_pose(self, configuration: Configuration) -> Pose3D:
        """Compute the world-frame end-effector pose at the given configuration."""
        return self.model.link_transform(configuration, self.config.end_effector_link)

    def resolve_goal(self, source: Configuration, goal: Pose3D, *, global_frame: bool) -> Pose3D:
        """Express the goal in the world frame (a local goal is relative to the end-effector)."""
        start_pose = self.end_effector_pose(source)
        return goal if global_frame else start_pose @ goal

    def interpolate(
        self,
        source: Configuration,
        goal: Pose3D,
        steps: int,
        *,
        global_frame: bool = True,
    ) -> Outcome[list[Configuration]]:
        """Solve a sequence of configurations between the source and the goal pose.

        Step i of n targets the pose at fraction i / (n + 1) along the path; orientations follow
            slerp and positions follow affine interpolation. Each IK solve is seeded with the
            previous configuration of the sequence.

        :param source: Configuration at which the sequence begins (not modified)
        :param goal: Goal pose of the end-effector
        :param steps: Number of intermediate poses to be solved
        :param global_frame: Whether the goal is a world-frame pose (else end-effector relative)
        :return: Outcome holding the source followed by `steps` solved configurations
        """
        if steps < 0:
            raise ValueError(f"Number of interpolation steps cannot be negative, got {steps}.")

        start_pose = self.end_effector_pose(source)
        target = self.resolve_goal(source, goal, global_frame=global_frame)

        sequence = [dict(source)]
        for i in range(1, steps + 1):
            fraction = i / (steps + 1)
            pose = start_pose.interpolate(target, fraction)
            solution = self._solve(pose, seed=sequence[-1])
            if solution is None:
                message = f"IK failed at interpolation step {i} of {steps} (target {pose})."
                log_error(message)
                return Outcome.failed(_ik_failure(message))
            sequence.append(solution)

        return Outcome.succeeded(sequence, f"Interpolated {steps} intermediate configurations.")

    def build_path(
        self,
        start: Configuration,
        goal: Pose3D,
        steps: Optional[int] = None,
        *,
        global_frame: Optional[bool] = None,
    ) -> Outcome[RefinedPath]:
        """Build a path of configurations from the start configuration to the goal pose.

        :param start: Configuration at which the path begins
        :param goal: Goal pose of the end-effector
        :param steps: Number of intermediate steps (defaults to the translation divided by the
            configured step length, rounded up)
        :param global_frame: Whether the goal is a world-frame pose (defaults to the config)
        :return: Outcome holding the built path (no path exists after a failure)
        """
        if global_frame is None:
            global_frame = self.config.global_reference_frame

        start_pose = self.end_effector_pose(start)
        target = self.resolve_goal(start, goal, global_frame=global_frame)
        if steps is None:
            steps = default_step_count(start_pose, target, self.config.interpolation_step_m)

        outcome = self.interpolate(start, target, steps, global_frame=True)
        if not outcome.success:
            return Outcome.failed(outcome.failure)

        samples = outcome.output
        if self.config.reach_goal and not start_pose.approx_equal(target):
            final = self._solve(target, seed=samples[-1])
            if final is None:
                message = f"IK failed at the goal pose {target}."
                log_error(message)
                return Outcome.failed(_ik_failure(message))
            samples.append(final)

        log_debug(f"Built Cartesian path of {len(samples)} samples ({steps} steps).")
        return Outcome.succeeded(RefinedPath(samples), f"Built path of {len(samples)} samples.")

    def _solve(self, pose: Pose3D, seed: Configuration) -> Optional[Configuration]:
        """Solve IK for the end-effector at the given pose, seeded for continuity."""
        return self.model.solve_ik(
            self.config.planning_group,
            pose,
            self.config.end_effector_link,
            seed=seed,
            timeout_s=self.config.ik_timeout_s,
        )


def _ik_failure(message: str) -> Failure:
    """Describe an IK solve that failed while building the Cartesian path."""
    return Failure(FailureKind.INTERPOLATION_FAILURE, FailedCheck.IK, message)
