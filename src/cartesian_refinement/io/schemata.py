"""Define Pydantic models for validating robot-description and scene YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing_extensions import Annotated

from cartesian_refinement.io.yaml_utils import load_yaml_data

# =============================================================================
# Pose Schemata
# =============================================================================

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""A six-tuple of floats representing an SE(3) pose."""


class Pose3DDictSchema(BaseModel):
    """Schema for specifying a Pose3D as a dictionary."""

    xyz_rpy: XYZ_RPY
    frame: str

    model_config = ConfigDict(extra="forbid")


Pose3DSchema = Union[XYZ_RPY, Pose3DDictSchema]
"""A Pose3D can be specified using a 6-tuple or a dictionary with `xyz_rpy` and `frame`."""

# =============================================================================
# Primitive Shape Schemata
# =============================================================================


class BoxPrimitiveSchema(BaseModel):
    """Schema for a 3D box primitive."""

    type: Literal["box"]
    x: float = Field(gt=0, description="X dimension size (meters)")
    y: float = Field(gt=0, description="Y dimension size (meters)")
    z: float = Field(gt=0, description="Z dimension size (meters)")

    model_config = ConfigDict(extra="forbid")


class SpherePrimitiveSchema(BaseModel):
    """Schema for a sphere primitive shape."""

    type: Literal["sphere"]
    radius: float = Field(gt=0, description="Radius (meters)")

    model_config = ConfigDict(extra="forbid")


class CylinderPrimitiveSchema(BaseModel):
    """Schema for a cylinder primitive shape."""

    type: Literal["cylinder"]
    height: float = Field(gt=0, description="Height (meters)")
    radius: float = Field(gt=0, description="Radius (meters)")

    model_config = ConfigDict(extra="forbid")


PrimitiveShapeSchema = Annotated[
    Union[BoxPrimitiveSchema, SpherePrimitiveSchema, CylinderPrimitiveSchema],
    Field(discriminator="type"),
]

# =============================================================================
# Serial Chain Schemata
# =============================================================================


class ChainLinkSchema(BaseModel):
    """Schema for a rigid link of a serial kinematic chain."""

    name: str
    shape: Optional[PrimitiveShapeSchema] = None
    """Collision shape centered on the link frame (None if the link has no geometry)."""

    model_config = ConfigDict(extra="forbid")


class ChainJointSchema(BaseModel):
    """Schema for a revolute joint connecting two links of a serial chain."""

    name: str
    parent: str
    child: str
    origin: XYZ_RPY = (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    """Pose of the joint frame relative to the parent link frame."""

    axis: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    limits: Tuple[float, float] = Field(description="Lower and upper joint limits (radians)")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_limits_and_axis(self) -> ChainJointSchema:
        """Validate that the limits are ordered and the axis is non-zero."""
        lower, upper = self.limits
        if lower > upper:
            raise ValueError(f"Joint '{self.name}' has lower limit {lower} above upper {upper}.")
        if not any(self.axis):
            raise ValueError(f"Joint '{self.name}' has a zero-valued axis.")
        return self


class SerialChainSchema(BaseModel):
    """Schema for a serial kinematic chain of revolute joints."""

    name: str
    planning_group: str = "manipulator"
    links: List[ChainLinkSchema] = Field(min_length=2)
    joints: List[ChainJointSchema] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_chain_structure(self) -> SerialChainSchema:
        """Validate that joint k connects link k to link k + 1."""
        if len(self.joints) != len(self.links) - 1:
            raise ValueError(
                f"A chain of {len(self.links)} links needs {len(self.links) - 1} joints, "
                f"got {len(self.joints)}.",
            )

        for index, joint in enumerate(self.joints):
            expected_parent = self.links[index].name
            expected_child = self.links[index + 1].name
            if (joint.parent, joint.child) != (expected_parent, expected_child):
                raise ValueError(
                    f"Joint '{joint.name}' connects '{joint.parent}' -> '{joint.child}', "
                    f"expected '{expected_parent}' -> '{expected_child}'.",
                )
        return self

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> SerialChainSchema:
        """Validate a serial chain YAML file and return the resulting schema.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated SerialChainSchema instance
        """
        yaml_data = load_yaml_data(yaml_path)

        try:
            return SerialChainSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err


# =============================================================================
# Scene Schemata
# =============================================================================


class ObstacleSchema(BaseModel):
    """Schema for a static obstacle in the planning scene."""

    pose: Pose3DSchema
    shape: PrimitiveShapeSchema

    model_config = ConfigDict(extra="forbid")


class SceneSchema(BaseModel):
    """Schema for a planning scene made of named static obstacles."""

    obstacles: Dict[str, ObstacleSchema] = Field(default_factory=dict)
    default_frame: str = "world"

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> SceneSchema:
        """Validate a planning scene YAML file and return the resulting schema."""
        yaml_data = load_yaml_data(yaml_path)

        try:
            return SceneSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err
