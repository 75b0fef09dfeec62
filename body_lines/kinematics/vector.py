"""Immutable 2D vector used for every position, displacement and velocity."""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from body_lines.utils.config import Config


@dataclass(frozen=True, eq=False)
class Vector2D:
    """2D vector with value semantics.

    Equality compares components with an absolute tolerance of
    ``Config.VECTOR_TOLERANCE`` so that positions recomputed through chains of
    trigonometry still compare equal.

    Attributes:
        x (float): Horizontal component.
        y (float): Vertical component (screen convention, +y is down).
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2D":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return (
            abs(self.x - other.x) <= Config.VECTOR_TOLERANCE
            and abs(self.y - other.y) <= Config.VECTOR_TOLERANCE
        )

    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.6g}, {self.y:.6g})"

    def length(self) -> float:
        """Returns the Euclidean magnitude."""
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance(self, other: "Vector2D") -> float:
        return (self - other).length()

    def distance_squared(self, other: "Vector2D") -> float:
        return (self - other).length_squared()

    def normalized(self) -> "Vector2D":
        """Returns a unit vector in the same direction; the zero vector stays zero."""
        magnitude = self.length()
        if magnitude == 0.0:
            return Vector2D(0.0, 0.0)
        return self / magnitude

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2D") -> float:
        """Returns the z-component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def rotate(self, angle: float) -> "Vector2D":
        """Returns this vector rotated by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2D(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    def angle(self) -> float:
        """Returns the direction of the vector in radians, in ``(-pi, pi]``."""
        return math.atan2(self.y, self.x)

    def angle_between(self, other: "Vector2D") -> float:
        """Returns the unsigned angle between two vectors in ``[0, pi]``.

        Zero-length vectors yield ``0.0``.
        """
        denominator = self.length() * other.length()
        if denominator == 0.0:
            return 0.0
        cosine = max(-1.0, min(1.0, self.dot(other) / denominator))
        return math.acos(cosine)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @classmethod
    def from_array(cls, values) -> "Vector2D":
        """Builds a vector from any two-element sequence or numpy array."""
        x, y = np.asarray(values, dtype=float).reshape(2)
        return cls(float(x), float(y))

    @classmethod
    def from_polar(cls, length: float, angle: float) -> "Vector2D":
        return cls(length * math.cos(angle), length * math.sin(angle))


__all__ = ["Vector2D"]
