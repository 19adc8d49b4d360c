"""Unit tests for the effective distance traveled by a robot link."""

import numpy as np
from hypothesis import given
from hypothesis import strategies as st

from cartesian_refinement.geometry import Point3D
from cartesian_refinement.motion_planning import LinkDistanceMetric
from cartesian_refinement.spatial import Pose3D

from .fixtures.fake_robots import EE_LINK, ScriptedArm, ee_config


def turning_link(configuration: dict) -> Pose3D:
    """Place a link at (0.3, 0.4, 0) that turns about z with the tool's yaw."""
    return Pose3D.from_xyz_rpy(0.3, 0.4, 0.0, yaw_rad=configuration["yaw"])


def test_link_distance_pure_translation() -> None:
    """Verify that a link translating without rotating moves by its displacement."""
    # Arrange - Create the metric for the tool link, which has no geometry
    arm = ScriptedArm()
    metric = LinkDistanceMetric.for_link(arm, EE_LINK)

    # Act - Measure the distance between two tool positions 0.5 m apart
    distance_m = metric(ee_config(0.1, 0.2), ee_config(0.4, 0.6))

    # Assert - Expect the straight-line displacement
    assert metric.diagonal_m == 0.0
    assert np.isclose(distance_m, 0.5)


def test_link_distance_includes_rotational_sweep() -> None:
    """Verify that rotation adds the chord swept at the link's reach plus its diagonal."""
    # Arrange - Create a link 0.5 m from the origin whose bounding box has a 0.3 m diagonal
    arm = ScriptedArm(
        links={"turner": turning_link},
        extents={"turner": Point3D(0.1, 0.2, 0.2)},
    )
    metric = LinkDistanceMetric.for_link(arm, "turner")

    # Act - Rotate the link by 30 degrees in place
    distance_m = metric(ee_config(0.0), ee_config(0.0, yaw_rad=np.pi / 6))

    # Assert - Expect (0.5 + 0.3) * sin(30 degrees) with no translation
    assert np.isclose(metric.diagonal_m, 0.3)
    assert np.isclose(distance_m, 0.4)


@given(
    st.floats(min_value=-1.0, max_value=1.0),
    st.floats(min_value=-1.0, max_value=1.0),
    st.floats(min_value=-np.pi, max_value=np.pi),
)
def test_link_distance_is_non_negative(x_m: float, y_m: float, yaw_rad: float) -> None:
    """Verify that the effective distance is non-negative and zero between equal samples."""
    # Arrange - Create the metric of a turning link with geometry
    arm = ScriptedArm(links={"turner": turning_link}, extents={"turner": Point3D(0.1, 0.1, 0.1)})
    metric = LinkDistanceMetric.for_link(arm, "turner")
    sample = ee_config(x_m, y_m, yaw_rad=yaw_rad)

    # Act/Assert - Measure from the sample to the origin and to itself
    assert metric(ee_config(0.0), sample) >= 0.0
    assert np.isclose(metric(sample, sample), 0.0, atol=1e-7)
