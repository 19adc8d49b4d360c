"""Define the configuration of Cartesian path interpolation, refinement, and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from cartesian_refinement.io.yaml_utils import load_yaml_data

STANDARD_INTERPOLATION_STEP_M = 0.01
CRITICAL_LINK_DISTANCE_M = 0.005
MAX_NON_CONVERGING_ATTEMPTS = 10


class RefinementConfig(BaseModel):
    """Parameters held constant for one run of the Cartesian refinement pipeline."""

    planning_group: str = "manipulator"
    """Joint group solved for by inverse kinematics."""

    end_effector_link: str = "link_6"
    """Link whose pose follows the interpolated Cartesian path."""

    critical_distance_m: float = Field(default=CRITICAL_LINK_DISTANCE_M, gt=0)
    """Largest effective distance (meters) any link may travel between adjacent samples."""

    interpolation_step_m: float = Field(default=STANDARD_INTERPOLATION_STEP_M, gt=0)
    """Nominal end-effector translation (meters) between samples of a newly built path."""

    max_attempts: int = Field(default=MAX_NON_CONVERGING_ATTEMPTS, gt=0)
    """Consecutive non-halving subdivisions of one segment tolerated before failing."""

    max_segment_insertions: int = Field(default=1000, gt=0)
    """Samples that may be inserted between two samples that existed before a link's pass."""

    max_refinement_passes: int = Field(default=10, gt=0)
    """Passes over every link of interest allowed before one of them inserts no samples."""

    global_reference_frame: bool = True
    """Whether goals are world-frame poses (else they are relative to the end-effector)."""

    reach_goal: bool = True
    """Whether built paths end with a sample solved exactly at the goal pose."""

    ik_timeout_s: Optional[float] = Field(default=None, gt=0)
    """Duration (seconds) after which each IK solve gives up (None leaves it to the solver)."""

    refined_links: Optional[Tuple[str, ...]] = None
    """Links whose travel is bounded (None selects every link except the fixed base)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> RefinementConfig:
        """Load the configuration from a YAML file.

        The parameters may sit at the top level of the file or under a `refinement` key.

        :param yaml_path: Path to the YAML file to be loaded
        :return: Validated configuration (missing parameters take their defaults)
        """
        yaml_data = load_yaml_data(yaml_path) or {}
        if isinstance(yaml_data, dict) and "refinement" in yaml_data:
            yaml_data = yaml_data["refinement"]
        return cls.model_validate(yaml_data)
