"""Rigid, rotation-constrained line segment and the angle helpers it relies on.

Angles follow screen conventions: 0 points along +x, +pi/2 points down (+y) and
-pi/2 points up. A joint range ``[min_angle, max_angle]`` with
``min_angle > max_angle`` wraps through 0 (e.g. 270 deg to 90 deg).
"""

import math
from typing import Optional

from body_lines.kinematics.vector import Vector2D
from body_lines.utils.config import Config

MIN_SEGMENT_LENGTH = 0.1


def normalize_angle(angle: float) -> float:
    """Maps an angle into ``[0, 2pi)``."""
    normalized = math.fmod(angle, Config.TWO_PI)
    if normalized < 0.0:
        normalized += Config.TWO_PI
    if normalized >= Config.TWO_PI:
        # fmod of a tiny negative number plus 2pi can round up to exactly 2pi.
        normalized -= Config.TWO_PI
    return normalized


def wrap_to_pi(angle: float) -> float:
    """Maps an angle into ``(-pi, pi]``."""
    wrapped = math.fmod(angle + math.pi, Config.TWO_PI)
    if wrapped <= 0.0:
        wrapped += Config.TWO_PI
    return wrapped - math.pi


def angular_distance(a: float, b: float) -> float:
    """Returns the shortest unsigned distance between two angles, in ``[0, pi]``."""
    difference = abs(normalize_angle(a) - normalize_angle(b))
    return min(difference, Config.TWO_PI - difference)


def clamp_angle(angle: float, min_angle: float, max_angle: float) -> float:
    """Constrains an angle to a joint range.

    Angles already inside the range are returned unchanged, equivalent angles
    (differing by whole turns) are brought into the range, and anything else
    snaps to the angularly closer bound (``min_angle`` on a tie). A range covering
    a full turn or more accepts every direction and wraps it into
    ``[min_angle, min_angle + 2pi)``. The function never raises and
    ``clamp_angle(clamp_angle(a)) == clamp_angle(a)``.

    Args:
        angle (float): Requested angle in radians.
        min_angle (float): Lower bound of the range.
        max_angle (float): Upper bound; smaller than ``min_angle`` for ranges that
            wrap through 0.

    Returns:
        float: An angle inside the range.
    """
    if min_angle <= max_angle:
        if min_angle <= angle <= max_angle:
            return angle
        shifted = min_angle + normalize_angle(angle - min_angle)
        if shifted <= max_angle or max_angle - min_angle >= Config.TWO_PI:
            return shifted
    else:
        normalized = normalize_angle(angle)
        if normalized >= normalize_angle(min_angle) or normalized <= normalize_angle(max_angle):
            return normalized

    if angular_distance(angle, min_angle) <= angular_distance(angle, max_angle):
        return min_angle
    return max_angle


class Segment:
    """A rigid link with a fixed length and a constrained angle.

    Attributes:
        id (str): Name of the segment, unique within a body.
        start (Vector2D): Start point (attached to the parent's end, or the body base).
        length (float): Length of the link, never below ``MIN_SEGMENT_LENGTH``.
        min_angle (float): Lower joint limit in radians.
        max_angle (float): Upper joint limit in radians.
        parent (Optional[Segment]): Non-owning reference to the parent link.
    """

    def __init__(
        self,
        segment_id: str,
        start: Vector2D,
        length: float,
        angle: float,
        min_angle: float = -math.pi,
        max_angle: float = math.pi,
    ):
        self.id = segment_id
        self.start = start
        self.length = max(MIN_SEGMENT_LENGTH, float(length))
        self.min_angle = float(min_angle)
        self.max_angle = float(max_angle)
        self._angle = self.clamp_angle(float(angle))
        self.parent: Optional["Segment"] = None

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def end(self) -> Vector2D:
        return Vector2D(
            self.start.x + self.length * math.cos(self._angle),
            self.start.y + self.length * math.sin(self._angle),
        )

    def clamp_angle(self, angle: float) -> float:
        return clamp_angle(angle, self.min_angle, self.max_angle)

    def set_angle(self, angle: float) -> None:
        """Sets the angle, clamped to the joint range."""
        self._angle = self.clamp_angle(angle)

    def set_angle_limits(self, min_angle: float, max_angle: float) -> None:
        """Replaces the joint range and re-clamps the current angle."""
        self.min_angle = float(min_angle)
        self.max_angle = float(max_angle)
        self._angle = self.clamp_angle(self._angle)

    def rotate(self, delta_angle: float) -> bool:
        """Rotates by ``delta_angle``; see :meth:`rotate_to` for the return value."""
        return self.rotate_to(self._angle + delta_angle)

    def rotate_to(self, target_angle: float) -> bool:
        """Rotates to ``target_angle``, clamped to the joint range.

        Returns:
            bool: True if the requested angle was reached, False if the joint limit
            constrained it.
        """
        clamped = self.clamp_angle(target_angle)
        self._angle = clamped
        return angular_distance(clamped, target_angle) <= Config.ANGLE_TOLERANCE

    def move(self, displacement: Vector2D) -> None:
        self.start = self.start + displacement

    def connect_to(self, parent: "Segment") -> None:
        """Attaches this segment to ``parent`` and snaps the start to the parent's end."""
        self.parent = parent
        self.start = parent.end

    def update_connected_segments(self) -> None:
        """Re-attaches the start point to the parent's current end, if there is a parent."""
        if self.parent is not None:
            self.start = self.parent.end

    def closest_point_to(self, point: Vector2D) -> Vector2D:
        end = self.end
        direction = end - self.start
        length_squared = direction.length_squared()
        if length_squared == 0.0:
            return self.start
        projection = (point - self.start).dot(direction) / length_squared
        projection = max(0.0, min(1.0, projection))
        return self.start + direction * projection

    def distance_to_point(self, point: Vector2D) -> float:
        return point.distance(self.closest_point_to(point))

    def contains_point(self, point: Vector2D, threshold: float = 1.0) -> bool:
        return self.distance_to_point(point) <= threshold

    def is_start_contacting_ground(self, ground_level: float, threshold: float = 1.0) -> bool:
        return abs(self.start.y - ground_level) <= threshold

    def is_end_contacting_ground(self, ground_level: float, threshold: float = 1.0) -> bool:
        return abs(self.end.y - ground_level) <= threshold

    def __repr__(self) -> str:
        return (
            f"Segment({self.id!r}, start={self.start!r}, length={self.length:.6g}, "
            f"angle={self._angle:.6g}, limits=({self.min_angle:.6g}, {self.max_angle:.6g}))"
        )


__all__ = ["Segment", "clamp_angle", "normalize_angle", "wrap_to_pi", "angular_distance", "MIN_SEGMENT_LENGTH"]
