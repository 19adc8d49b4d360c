"""Define constants related to 3D reference frames."""

DEFAULT_FRAME = "world"
"""Name of the reference frame assumed when none is specified."""
