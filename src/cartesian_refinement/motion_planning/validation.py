"""Validate that every sample of a path is free of collisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cartesian_refinement.io.logging import log_debug, log_error
from cartesian_refinement.motion_planning.outcome import FailedCheck, Failure, FailureKind, Outcome

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from cartesian_refinement.kinematics import CollisionOracle, Configuration


class CollisionValidator:
    """Queries a collision oracle for each sample of a path, stopping at the first collision."""

    def __init__(self, oracle: CollisionOracle, group_name: str) -> None:
        """Initialize the validator with the oracle and the joint group being planned for."""
        self.oracle = oracle
        self.group_name = group_name

    def validate(
        self,
        samples: Sequence[Configuration],
        *,
        skip_ids: Collection[int] = frozenset(),
    ) -> Outcome[int]:
        """Check the given samples for collisions in order.

        :param samples: Configurations to be checked (e.g., a snapshot of a refined path)
        :param skip_ids: Identities (`id()`) of samples already known to be collision-free
        :return: Outcome holding the number of samples queried, or the first collision found
        """
        queried = 0
        for index, sample in enumerate(samples):
            if id(sample) in skip_ids:
                continue

            queried += 1
            if self.oracle.is_colliding(sample, self.group_name):
                message = f"Trajectory sample {index} of {len(samples)} is in collision."
                log_error(message)
                failure = Failure(
                    FailureKind.TRAJECTORY_INVALID,
                    FailedCheck.COLLISION,
                    message,
                    sample_index=index,
                )
                return Outcome.failed(failure)

        log_debug(f"Validated {queried} of {len(samples)} samples as collision-free.")
        return Outcome.succeeded(queried, f"Validated {queried} samples.")
