"""Refine a path of configurations until no link moves too far between adjacent samples."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cartesian_refinement.io.logging import log_debug, log_error, log_info, log_warning
from cartesian_refinement.motion_planning.link_distance import LinkDistanceMetric
from cartesian_refinement.motion_planning.outcome import FailedCheck, Failure, FailureKind, Outcome

if TYPE_CHECKING:
    from cartesian_refinement.kinematics import KinematicModel
    from cartesian_refinement.motion_planning.config import RefinementConfig
    from cartesian_refinement.motion_planning.interpolation import CartesianInterpolator
    from cartesian_refinement.motion_planning.refined_path import RefinedPath


class ConvergenceGuard:
    """Counts consecutive subdivisions of a segment that failed to halve its distance.

    The streak starts at zero, so refinement stops on the `max_attempts`-th consecutive miss
        (one miss later than a counter starting at one would allow). This keeps `max_attempts`
        equal to the number of non-halving subdivisions a segment actually tolerates.
    """

    def __init__(self, max_attempts: int) -> None:
        """Initialize the guard with the number of non-halving subdivisions tolerated in a row."""
        if max_attempts < 1:
            raise ValueError(f"Attempt bound must be positive, got {max_attempts}.")
        self.max_attempts = max_attempts
        self.streak = 0

    def reset(self) -> None:
        """Forget the current streak of non-halving subdivisions."""
        self.streak = 0

    def record(self, previous_m: float, current_m: float) -> bool:
        """Record one subdivision and report whether the attempt bound has been reached.

        :param previous_m: Distance (meters) of the segment before it was subdivided
        :param current_m: Distance (meters) of the segment's first half after subdivision
        :return: True if `max_attempts` consecutive subdivisions have now failed to halve
        """
        if current_m <= previous_m / 2.0:
            self.streak = 0
        else:
            self.streak += 1
        return self.streak >= self.max_attempts


class LinkDistanceRefiner:
    """Inserts interpolated samples wherever a link travels farther than the critical distance."""

    def __init__(
        self,
        model: KinematicModel,
        interpolator: CartesianInterpolator,
        config: RefinementConfig,
    ) -> None:
        """Initialize the refiner with the robot model, a pose interpolator, and the run config."""
        self.model = model
        self.interpolator = interpolator
        self.config = config

    def refine(self, path: RefinedPath, link_name: str) -> Outcome[int]:
        """Subdivide the path until the named link moves at most the critical distance per step.

        Pairs of adjacent samples are checked left to right. A pair whose effective link distance
            exceeds the threshold is split by solving the end-effector pose halfway between its
            samples, and the first half is checked again before the cursor advances.

        :param path: Path to be refined in place (samples are only ever inserted)
        :param link_name: Name of the link whose travel is bounded
        :return: Outcome holding the number of inserted samples
        """
        metric = LinkDistanceMetric.for_link(self.model, link_name)
        threshold_m = self.config.critical_distance_m
        guard = ConvergenceGuard(self.config.max_attempts)

        original_ids = {id(sample) for sample in path.snapshot()}
        inserted = 0
        segment_insertions = 0  # Since the latest sample that predates this pass

        i = 0
        while i < len(path) - 1:
            sample_a = path[i]
            if id(sample_a) in original_ids:
                segment_insertions = 0

            distance_m = metric(sample_a, path[i + 1])
            guard.reset()
            while distance_m > threshold_m:
                log_warning(
                    f"Link '{link_name}' moves {distance_m:.5f} m between samples {i} and {i + 1}.",
                )
                if segment_insertions >= self.config.max_segment_insertions:
                    return self._fail(
                        FailedCheck.THRESHOLD_CONVERGENCE,
                        f"Space jump: {segment_insertions} samples inserted after sample {i} "
                        f"without meeting the {threshold_m} m threshold.",
                        link_name,
                        i + 1,
                    )

                goal_pose = self.interpolator.end_effector_pose(path[i + 1])
                halfway = self.interpolator.interpolate(sample_a, goal_pose, 1, global_frame=True)
                if not halfway.success:
                    return self._fail(
                        FailedCheck.IK,
                        f"Space jump: no IK solution between samples {i} and {i + 1}.",
                        link_name,
                        i + 1,
                    )

                midpoint = path.insert(i + 1, halfway.output[1])
                inserted += 1
                segment_insertions += 1

                halved_distance_m = metric(sample_a, midpoint)
                if guard.record(distance_m, halved_distance_m):
                    return self._fail(
                        FailedCheck.THRESHOLD_CONVERGENCE,
                        f"Space jump: distance after sample {i} failed to halve in "
                        f"{guard.streak} consecutive subdivisions.",
                        link_name,
                        i + 1,
                    )
                distance_m = halved_distance_m

            log_debug(f"Link '{link_name}' moves {distance_m:.5f} m between samples {i}, {i + 1}.")
            i += 1

        log_info(f"Refined link '{link_name}' by inserting {inserted} samples.")
        return Outcome.succeeded(inserted, f"Inserted {inserted} samples for link '{link_name}'.")

    def _fail(
        self,
        check: FailedCheck,
        message: str,
        link_name: str,
        sample_index: int,
    ) -> Outcome[int]:
        """Log and return a failed outcome for the link being refined."""
        log_error(message)
        failure = Failure(FailureKind.TRAJECTORY_INVALID, check, message, link_name, sample_index)
        return Outcome.failed(failure)
