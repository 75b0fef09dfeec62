"""
circle.py

This module defines the Circle class used both for the object the walker tries to grab
and for the projectile/target pair of the snowball scenario. A circle can optionally carry
ballistic state (velocity and gravity) and advance itself as a free-falling point mass.
"""

import math

from body_lines.kinematics.vector import Vector2D


class Circle:
    """A position plus a non-negative radius, with optional point-mass ballistics.

    Attributes:
        center (Vector2D): Centre of the circle.
        velocity (Vector2D): Current velocity (only meaningful when ``has_physics``).
        gravity (float): Vertical acceleration applied while ``has_physics``.
        has_physics (bool): Whether ``update_position`` advances the circle.
    """

    def __init__(self, center: Vector2D = Vector2D(0.0, 0.0), radius: float = 10.0):
        self.center = center
        self.radius = radius
        self.velocity = Vector2D(0.0, 0.0)
        self.gravity = 0.0
        self.has_physics = False

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float):
        self._radius = max(0.0, float(value))

    @property
    def area(self) -> float:
        return math.pi * self._radius * self._radius

    @property
    def circumference(self) -> float:
        return 2.0 * math.pi * self._radius

    def move(self, displacement: Vector2D) -> None:
        self.center = self.center + displacement

    def set_ballistics(self, initial_velocity: Vector2D, gravity: float) -> None:
        """Enables point-mass motion.

        Args:
            initial_velocity (Vector2D): Launch velocity.
            gravity (float): Vertical acceleration (positive pulls towards +y).

        Raises:
            ValueError: If the velocity or gravity is not finite.
        """
        if not initial_velocity.is_finite() or not math.isfinite(gravity):
            raise ValueError(f"Non-finite ballistic state: velocity={initial_velocity}, gravity={gravity}")
        self.velocity = initial_velocity
        self.gravity = float(gravity)
        self.has_physics = True

    def clear_ballistics(self) -> None:
        self.velocity = Vector2D(0.0, 0.0)
        self.gravity = 0.0
        self.has_physics = False

    def update_position(self, time_step: float) -> None:
        """Advances the circle by one time step if ballistics are enabled.

        The centre moves with the current velocity first, then gravity updates the
        vertical velocity component.

        Args:
            time_step (float): Time step in seconds.
        """
        if not self.has_physics:
            return
        self.center = self.center + self.velocity * time_step
        self.velocity = Vector2D(self.velocity.x, self.velocity.y + self.gravity * time_step)

    def contains(self, point: Vector2D) -> bool:
        return self.center.distance_squared(point) <= self._radius * self._radius

    def intersects(self, other: "Circle") -> bool:
        radii = self._radius + other.radius
        return self.center.distance_squared(other.center) <= radii * radii

    def is_on_ground(self, ground_level: float) -> bool:
        return self.center.y + self._radius >= ground_level

    def distance_to(self, other: "Circle") -> float:
        """Returns the gap between the two circle edges (0 when they overlap)."""
        return max(0.0, self.center.distance(other.center) - self._radius - other.radius)

    def distance_to_center(self, other: "Circle") -> float:
        return self.center.distance(other.center)

    def __repr__(self) -> str:
        return f"Circle(center={self.center!r}, radius={self._radius:.6g})"


__all__ = ["Circle"]
