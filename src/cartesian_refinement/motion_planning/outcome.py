"""Define the outcome of a trajectory-production step and the failures it can report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

OutputT = TypeVar("OutputT")
"""Type variable representing output data associated with an outcome."""


class FailureKind(Enum):
    """The kinds of failure that abort trajectory production."""

    INTERPOLATION_FAILURE = "InterpolationFailure"
    """An IK solve failed for a pose requested while building the Cartesian path."""

    TRAJECTORY_INVALID = "TrajectoryInvalid"
    """The path could not be refined below the distance threshold, or a sample collides."""


class FailedCheck(Enum):
    """The check that detected a failure."""

    IK = "ik"
    THRESHOLD_CONVERGENCE = "threshold convergence"
    COLLISION = "collision"


@dataclass(frozen=True)
class Failure:
    """A description of why trajectory production failed."""

    kind: FailureKind
    check: FailedCheck
    message: str

    link_name: Optional[str] = None
    """Link being refined when the failure occurred (if any)."""

    sample_index: Optional[int] = None
    """Index of the offending trajectory sample (if any)."""

    def to_exception(self) -> TrajectoryError:
        """Convert the failure into the matching exception type."""
        if self.kind is FailureKind.INTERPOLATION_FAILURE:
            return InterpolationFailure(self)
        return TrajectoryInvalid(self)


class TrajectoryError(RuntimeError):
    """Base class of errors raised when a failed outcome is unwrapped."""

    def __init__(self, failure: Failure) -> None:
        """Initialize the error with the failure it reports."""
        self.failure = failure
        super().__init__(f"{failure.kind.value} ({failure.check.value}): {failure.message}")


class InterpolationFailure(TrajectoryError):
    """An IK solve failed while interpolating the Cartesian path."""


class TrajectoryInvalid(TrajectoryError):
    """The trajectory could not be refined or is in collision."""


@dataclass(frozen=True)
class Outcome(Generic[OutputT]):
    """An outcome (and optional output value) from one step of trajectory production."""

    success: bool
    message: str
    output: Optional[OutputT] = None
    """Output value of a successful step (None after a failure)."""

    failure: Optional[Failure] = None
    """Description of the failure (None after a success)."""

    def __post_init__(self) -> None:
        """Verify that exactly the failed outcomes carry a failure."""
        if self.success == (self.failure is not None):
            raise ValueError(f"Outcome(success={self.success}) inconsistent with {self.failure}.")

    @classmethod
    def succeeded(cls, output: OutputT, message: str = "Succeeded.") -> Outcome[OutputT]:
        """Construct a successful outcome holding the given output."""
        return cls(success=True, message=message, output=output)

    @classmethod
    def failed(cls, failure: Failure) -> Outcome[OutputT]:
        """Construct a failed outcome reporting the given failure."""
        return cls(success=False, message=failure.message, failure=failure)

    def unwrap(self) -> OutputT:
        """Retrieve the output of a successful outcome.

        :raises InterpolationFailure: If an IK solve failed while building the path
        :raises TrajectoryInvalid: If refinement or collision validation failed
        """
        if self.failure is not None:
            raise self.failure.to_exception()
        return self.output  # type: ignore[return-value]
