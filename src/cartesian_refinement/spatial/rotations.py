"""Define classes to represent 3D rotations and orientations."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import TYPE_CHECKING

import numpy as np
from pyquaternion import Quaternion as Q
from trimesh.transformations import (
    euler_from_quaternion,
    quaternion_from_euler,
    quaternion_from_matrix,
    quaternion_matrix,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from numpy.typing import NDArray


@dataclass(frozen=True)
class EulerRPY:
    """A 3D rotation represented using three fixed-frame Euler angles."""

    roll_rad: float
    pitch_rad: float
    yaw_rad: float

    def __iter__(self) -> Iterator[float]:
        """Provide an iterator over the roll, pitch, and yaw values."""
        yield from astuple(self)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> EulerRPY:
        """Construct Euler angles from a sequence of angle values (in radians)."""
        if len(values) != 3:
            raise ValueError(f"EulerRPY expects 3 values, got {len(values)}")
        return EulerRPY(float(values[0]), float(values[1]), float(values[2]))

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert the Euler angles into a (roll, pitch, yaw) tuple."""
        return (float(self.roll_rad), float(self.pitch_rad), float(self.yaw_rad))

    def to_quaternion(self) -> Quaternion:
        """Convert the Euler angles into an equivalent unit quaternion."""
        w, x, y, z = quaternion_from_euler(self.roll_rad, self.pitch_rad, self.yaw_rad, axes="sxyz")
        return Quaternion(x=x, y=y, z=z, w=w)


@dataclass
class Quaternion:
    """A unit quaternion representing a 3D orientation."""

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        """Normalize the quaternion after it is initialized."""
        self.normalize()

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Return the Hamilton product of this quaternion and another.

        Reference: https://kieranwynn.github.io/pyquaternion/#quaternion-operations
        """
        if not isinstance(other, Quaternion):
            raise TypeError(f"Cannot multiply a Quaternion with a {type(other)}: {other}.")
        product = self._to_pyquaternion() * other._to_pyquaternion()
        return Quaternion(product.x, product.y, product.z, product.w)

    def _to_pyquaternion(self) -> Q:
        """Convert into the equivalent `pyquaternion` object (which stores w first)."""
        return Q(self.w, self.x, self.y, self.z)

    def normalize(self) -> None:
        """Normalize the quaternion to ensure it is a unit quaternion."""
        norm = float(np.linalg.norm(self.to_array()))
        if norm == 0:
            raise ValueError(f"Cannot normalize a zero-valued quaternion: {self}")

        self.x = float(self.x) / norm
        self.y = float(self.y) / norm
        self.z = float(self.z) / norm
        self.w = float(self.w) / norm

    def conjugate(self) -> Quaternion:
        """Compute the conjugate of this quaternion.

        Reference: https://mathworld.wolfram.com/QuaternionConjugate.html
        """
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    @classmethod
    def identity(cls) -> Quaternion:
        """Construct a Quaternion corresponding to the identity rotation."""
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float], angle_rad: float) -> Quaternion:
        """Construct the quaternion rotating by the given angle (radians) about an axis."""
        rotation = Q(axis=np.asarray(axis, dtype=np.float64), angle=angle_rad)
        return Quaternion(rotation.x, rotation.y, rotation.z, rotation.w)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Quaternion:
        """Construct a quaternion from a NumPy array of the form [x,y,z,w]."""
        if arr.shape != (4,):
            raise ValueError(f"Quaternion expects a 4-vector, got {arr.shape}")

        return cls(float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3]))

    def to_array(self) -> NDArray[np.float64]:
        """Convert the quaternion to a NumPy array of the form [x,y,z,w]."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def to_euler_rpy(self) -> EulerRPY:
        """Convert the quaternion into equivalent Euler roll, pitch, and yaw angles."""
        r, p, y = euler_from_quaternion(quaternion=[self.w, self.x, self.y, self.z], axes="sxyz")
        return EulerRPY(float(r), float(p), float(y))

    @classmethod
    def from_rotation_matrix(cls, r_matrix: NDArray[np.float64]) -> Quaternion:
        """Construct a quaternion from a 3x3 rotation matrix."""
        if r_matrix.shape != (3, 3):
            raise ValueError(f"Quaternion expects a 3x3 rotation matrix, got {r_matrix.shape}")

        matrix = np.eye(4)
        matrix[:3, :3] = r_matrix

        return cls.from_homogeneous_matrix(matrix)

    @classmethod
    def from_homogeneous_matrix(cls, matrix: NDArray[np.float64]) -> Quaternion:
        """Construct a quaternion from a 4x4 homogeneous transformation matrix."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Quaternion expects a 4x4 homogeneous matrix, got {matrix.shape}")
        w, x, y, z = quaternion_from_matrix(matrix)  # Note: trimesh puts w (q's real value) first
        return Quaternion(x=float(x), y=float(y), z=float(z), w=float(w))

    def to_homogeneous_matrix(self) -> NDArray[np.float64]:
        """Convert the quaternion to a 4x4 homogeneous transformation matrix."""
        return quaternion_matrix(quaternion=[self.w, self.x, self.y, self.z])

    def slerp(self, other: Quaternion, fraction: float) -> Quaternion:
        """Spherically interpolate from this orientation toward another along the shorter arc.

        :param other: Orientation reached when `fraction` equals one
        :param fraction: Interpolation parameter within [0, 1]
        :return: Interpolated unit quaternion
        """
        result = Q.slerp(self._to_pyquaternion(), other._to_pyquaternion(), amount=fraction)
        return Quaternion(result.x, result.y, result.z, result.w)

    def angular_distance_rad(self, other: Quaternion) -> float:
        """Compute the angle (radians, in [0, pi]) of the shortest rotation reaching another."""
        relative = self.conjugate() * other
        vector_norm = float(np.linalg.norm([relative.x, relative.y, relative.z]))
        return float(2.0 * np.arctan2(vector_norm, abs(relative.w)))

    def to_rotation_vector(self) -> NDArray[np.float64]:
        """Convert the rotation into an axis-angle vector (unit axis scaled by angle in radians)."""
        w = self.w
        vector = np.array([self.x, self.y, self.z])
        if w < 0.0:  # Select the equivalent quaternion on the shorter arc
            w, vector = -w, -vector
        vector_norm = float(np.linalg.norm(vector))
        if vector_norm < 1e-12:
            return np.zeros(3)
        angle_rad = 2.0 * np.arctan2(vector_norm, w)
        return vector / vector_norm * angle_rad

    def approx_equal(self, other: Quaternion, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Evaluate whether another Quaternion is approximately equal to this one.

        Note: A quaternion is considered equal to its negation, as they express the same rotation.
        """
        self_array = self.to_array()
        other_array = other.to_array()

        return bool(
            np.allclose(self_array, other_array, rtol=rtol, atol=atol)
            or np.allclose(-self_array, other_array, rtol=rtol, atol=atol),
        )
