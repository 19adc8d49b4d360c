"""Unit tests for outcomes and failures of trajectory production."""

import pytest

from cartesian_refinement.motion_planning import (
    FailedCheck,
    Failure,
    FailureKind,
    InterpolationFailure,
    Outcome,
    TrajectoryError,
    TrajectoryInvalid,
)


def test_successful_outcome_unwraps_output() -> None:
    """Verify that a successful outcome returns its output when unwrapped."""
    outcome = Outcome.succeeded([1, 2, 3])

    assert outcome.success
    assert outcome.failure is None
    assert outcome.unwrap() == [1, 2, 3]


@pytest.mark.parametrize(
    ("kind", "error_type"),
    [
        (FailureKind.INTERPOLATION_FAILURE, InterpolationFailure),
        (FailureKind.TRAJECTORY_INVALID, TrajectoryInvalid),
    ],
)
def test_failed_outcome_raises_matching_error(kind: FailureKind, error_type: type) -> None:
    """Verify that unwrapping a failed outcome raises the error matching its kind."""
    # Arrange - Create a failed outcome describing a collision at sample 7
    failure = Failure(kind, FailedCheck.COLLISION, "Sample 7 collides.", sample_index=7)
    outcome = Outcome.failed(failure)

    # Act/Assert - Expect the matching error, carrying the failure
    assert not outcome.success
    assert outcome.message == "Sample 7 collides."
    with pytest.raises(error_type) as error_info:
        outcome.unwrap()

    assert isinstance(error_info.value, TrajectoryError)
    assert isinstance(error_info.value, RuntimeError)
    assert error_info.value.failure is failure
    assert kind.value in str(error_info.value)


def test_inconsistent_outcome_is_rejected() -> None:
    """Verify that successes cannot carry failures and failures must carry one."""
    failure = Failure(FailureKind.TRAJECTORY_INVALID, FailedCheck.IK, "No IK solution.")

    with pytest.raises(ValueError):
        Outcome(success=True, message="Succeeded.", failure=failure)

    with pytest.raises(ValueError):
        Outcome(success=False, message="Failed.")
