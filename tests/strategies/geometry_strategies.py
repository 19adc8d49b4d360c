"""Define strategies for generating geometric primitives for property-based testing."""

import hypothesis.strategies as st

from cartesian_refinement.geometry import AxisAlignedBoundingBox, Point3D

from .common_strategies import real_ranges


@st.composite
def positions(draw: st.DrawFn, bound_m: float = 10.0) -> Point3D:
    """Generate random (x,y,z) points within a cube of the given half-width (meters)."""
    x = draw(st.floats(min_value=-bound_m, max_value=bound_m))
    y = draw(st.floats(min_value=-bound_m, max_value=bound_m))
    z = draw(st.floats(min_value=-bound_m, max_value=bound_m))
    return Point3D(x, y, z)


@st.composite
def aabbs(draw: st.DrawFn) -> AxisAlignedBoundingBox:
    """Generate random axis-aligned bounding boxes."""
    min_x, max_x = draw(real_ranges(-100.0, 100.0))
    min_y, max_y = draw(real_ranges(-100.0, 100.0))
    min_z, max_z = draw(real_ranges(-100.0, 100.0))

    min_xyz = Point3D(min_x, min_y, min_z)
    max_xyz = Point3D(max_x, max_y, max_z)

    return AxisAlignedBoundingBox(min_xyz, max_xyz)
