"""Define the pipeline that builds, refines, and validates Cartesian trajectories."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Collection, Optional, Sequence

from cartesian_refinement.io.logging import log_debug, log_error, log_info
from cartesian_refinement.motion_planning.config import RefinementConfig
from cartesian_refinement.motion_planning.interpolation import CartesianInterpolator
from cartesian_refinement.motion_planning.outcome import FailedCheck, Failure, FailureKind, Outcome
from cartesian_refinement.motion_planning.refinement import LinkDistanceRefiner
from cartesian_refinement.motion_planning.validation import CollisionValidator

if TYPE_CHECKING:
    from cartesian_refinement.kinematics import CollisionOracle, Configuration, KinematicModel
    from cartesian_refinement.motion_planning.refined_path import RefinedPath
    from cartesian_refinement.motion_planning.trajectories import TrajectoryConsumer
    from cartesian_refinement.spatial import Pose3D


class ValidationThread:
    """A thread that validates a fixed snapshot of samples and stores the outcome."""

    def __init__(
        self,
        validator: CollisionValidator,
        samples: Sequence[Configuration],
        skip_ids: Collection[int],
    ) -> None:
        """Initialize and start a thread validating the given samples."""
        self._validator = validator
        self._samples = samples
        self._skip_ids = skip_ids
        self.outcome: Optional[Outcome[int]] = None
        self._error: Optional[Exception] = None

        self._thread = threading.Thread(target=self._run, name="collision-validator", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        """Validate the stored samples, keeping any error for the thread that joins this one."""
        try:
            self.outcome = self._validator.validate(self._samples, skip_ids=self._skip_ids)
        except Exception as exc:  # Re-raised by join()
            self._error = exc

    def join(self) -> Outcome[int]:
        """Wait for validation to finish and return its outcome.

        :return: Outcome of validating the snapshot
        :raises Exception: Whatever the collision oracle raised during validation
        """
        self._thread.join()
        if self._error is not None:
            raise self._error
        if self.outcome is None:
            raise RuntimeError("Collision validation thread exited without an outcome.")
        return self.outcome


class CartesianRefinementPipeline:
    """Produces collision-free paths whose links never move farther than a critical distance.

    For each link of interest, the refiner subdivides the path in the calling thread while a
        validation thread checks a snapshot of the path taken before that link's refinement.
    """

    def __init__(
        self,
        model: KinematicModel,
        oracle: CollisionOracle,
        config: Optional[RefinementConfig] = None,
    ) -> None:
        """Initialize the pipeline with a robot model, a collision oracle, and a run config."""
        self.model = model
        self.oracle = oracle
        self.config = RefinementConfig() if config is None else config

        self.interpolator = CartesianInterpolator(model, self.config)
        self.refiner = LinkDistanceRefiner(model, self.interpolator, self.config)
        self.validator = CollisionValidator(oracle, self.config.planning_group)

    def links_of_interest(self) -> tuple[str, ...]:
        """Retrieve the links whose travel is bounded, in the order they are refined."""
        if self.config.refined_links is not None:
            return self.config.refined_links
        return tuple(self.model.link_names[1:])  # Skip the fixed base

    def refine_and_validate(self, path: RefinedPath) -> Outcome[RefinedPath]:
        """Refine the path for every link of interest and validate all of its samples.

        Links are refined in passes until a whole pass inserts no samples, so that samples
            inserted for one link are also measured against the links refined before it.

        :param path: Path to be refined in place
        :return: Outcome holding the refined path, or the first failure encountered
        """
        certified_ids: set[int] = set()

        for pass_number in range(1, self.config.max_refinement_passes + 1):
            inserted = 0
            for link_name in self.links_of_interest():
                refined = self._refine_link(path, link_name, certified_ids)
                if not refined.success:
                    return Outcome.failed(refined.failure)
                inserted += refined.output

            log_debug(f"Refinement pass {pass_number} inserted {inserted} samples.")
            if inserted == 0:
                break
        else:
            message = (
                f"Space jump: links still exceeded the {self.config.critical_distance_m} m "
                f"threshold after {self.config.max_refinement_passes} refinement passes."
            )
            log_error(message)
            failure = Failure(
                FailureKind.TRAJECTORY_INVALID,
                FailedCheck.THRESHOLD_CONVERGENCE,
                message,
            )
            return Outcome.failed(failure)

        # Only paths without any links of interest still hold uncertified samples here
        final = self.validator.validate(path.snapshot(), skip_ids=certified_ids)
        if not final.success:
            return Outcome.failed(final.failure)

        log_info(f"Refined and validated a path of {len(path)} samples.")
        return Outcome.succeeded(path, f"Produced a valid path of {len(path)} samples.")

    def _refine_link(
        self,
        path: RefinedPath,
        link_name: str,
        certified_ids: set[int],
    ) -> Outcome[int]:
        """Refine the path for one link while another thread validates its uncertified samples.

        :param path: Path to be refined in place
        :param link_name: Name of the link whose travel is bounded
        :param certified_ids: Identities of samples already validated (updated on success)
        :return: Outcome holding the number of inserted samples (collisions are reported first)
        """
        snapshot = path.snapshot()
        validation = ValidationThread(self.validator, snapshot, frozenset(certified_ids))

        try:
            refined = self.refiner.refine(path, link_name)
        finally:
            validated = validation.join()

        if not validated.success:
            return Outcome.failed(validated.failure)
        if not refined.success:
            return refined

        certified_ids.update(id(sample) for sample in snapshot)
        log_debug(f"Link '{link_name}': {validated.output} samples validated concurrently.")
        return refined

    def plan(
        self,
        start: Configuration,
        goal: Pose3D,
        steps: Optional[int] = None,
    ) -> Outcome[RefinedPath]:
        """Build a Cartesian path from the start configuration to the goal, then refine it.

        :param start: Configuration at which the path begins
        :param goal: Goal pose of the end-effector (world or local frame, per the config)
        :param steps: Number of intermediate interpolation steps (optional)
        :return: Outcome holding the refined and validated path
        """
        built = self.interpolator.build_path(start, goal, steps)
        if not built.success:
            return Outcome.failed(built.failure)
        return self.refine_and_validate(built.output)

    def run(
        self,
        start: Configuration,
        goal: Pose3D,
        consumer: TrajectoryConsumer,
        steps: Optional[int] = None,
    ) -> Outcome[RefinedPath]:
        """Plan a path and hand it to the consumer only if it is fully valid."""
        outcome = self.plan(start, goal, steps)
        if outcome.success:
            consumer.consume(outcome.output)
        return outcome
