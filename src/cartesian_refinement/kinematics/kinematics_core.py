"""Implement core definitions for kinematics."""

from typing import Dict

Configuration = Dict[str, float]
"""A map from joint names to positions (rad or m)."""
