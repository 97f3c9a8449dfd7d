"""
Vector model - 3D positions on (and around) the unit sphere

Vec3 is an immutable value type. Positions stored in the document are always
built through Vec3.unit(), which projects raw input onto the unit sphere and
rejects input that has no direction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from geco.models.errors import InvalidPosition

# Tolerance used by is_unit() checks
UNIT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Vec3:
    """3D vector. Document positions are unit length."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # === CONSTRUCTORS ===

    @classmethod
    def unit(cls, x: float, y: float, z: float) -> Vec3:
        """
        Project raw coordinates onto the unit sphere

        Args:
            x, y, z: Raw coordinates (any magnitude)

        Returns:
            Unit-length Vec3 pointing the same way

        Raises:
            InvalidPosition: zero-length or non-finite input
        """
        x, y, z = float(x), float(y), float(z)
        if not all(math.isfinite(c) for c in (x, y, z)):
            raise InvalidPosition(x, y, z, reason="non-finite coordinate")

        # Scale by the largest component first so squaring cannot overflow or underflow
        scale = max(abs(x), abs(y), abs(z))
        if scale == 0.0:
            raise InvalidPosition(x, y, z)

        sx, sy, sz = x / scale, y / scale, z / scale
        length = math.hypot(sx, sy, sz)
        v = cls(sx / length, sy / length, sz / length)
        if not v.is_unit():
            raise InvalidPosition(x, y, z, reason="cannot be normalized")
        return v

    @staticmethod
    def unit_x() -> Vec3:
        return Vec3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> Vec3:
        return Vec3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> Vec3:
        return Vec3(0.0, 0.0, 1.0)

    # === ARITHMETIC ===

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return self.__mul__(scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.hypot(self.x, self.y, self.z)

    def normalized(self) -> Vec3:
        """
        Rescale to unit length.

        Unlike unit(), this is used on already-valid internal results
        (blends of unit vectors), so a zero vector is returned unchanged.
        """
        ln = self.length()
        if ln < 1e-12:
            return self
        return Vec3(self.x / ln, self.y / ln, self.z / ln)

    def lerp(self, other: Vec3, t: float) -> Vec3:
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t
        )

    def angle_to(self, other: Vec3) -> float:
        """Angle in radians between two unit vectors (dot clamped to [-1, 1])"""
        return math.acos(max(-1.0, min(1.0, self.dot(other))))

    def is_unit(self, tolerance: float = UNIT_TOLERANCE) -> bool:
        return abs(self.length() - 1.0) <= tolerance

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)
