"""
body.py

This module defines the Body class: a forest of named segments anchored at a base position
above a horizontal ground line. Segments live in an arena keyed by name; the hierarchy is an
edge table (parent -> children, child -> parent) plus an insertion-ordered list of roots.

Whenever a segment's geometry changes, every descendant is re-attached depth-first so that
``child.start == parent.end`` holds for every edge before control returns to the caller.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from body_lines.kinematics.circle import Circle
from body_lines.kinematics.segment import Segment, angular_distance
from body_lines.kinematics.vector import Vector2D
from body_lines.utils.config import Config
from body_lines.utils.dataclasses import BodyGeometry, SegmentLine

logger = logging.getLogger(__name__)


class Body:
    """Articulated figure made of connected, rotation-constrained segments.

    Attributes:
        base_position (Vector2D): Anchor point of every root segment.
        ground_level (float): y-coordinate of the ground line.
        contact_threshold (float): Maximum vertical distance for a ground contact.
    """

    def __init__(
        self,
        base_position: Vector2D = Vector2D(Config.BODY_X, Config.BODY_Y),
        ground_level: float = Config.GROUND_LEVEL,
        contact_threshold: float = Config.GROUND_CONTACT_THRESHOLD,
    ):
        self.base_position = base_position
        self.ground_level = float(ground_level)
        self.contact_threshold = float(contact_threshold)
        self._segments: Dict[str, Segment] = {}
        self._children: Dict[str, List[str]] = {}
        self._parents: Dict[str, str] = {}
        self._roots: List[str] = []
        self._rest_pose: Dict[str, float] = {}

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------
    def add_segment(
        self,
        name: str,
        length: float,
        angle: float,
        min_angle: float = -math.pi,
        max_angle: float = math.pi,
    ) -> bool:
        """Adds a new root segment starting at the base position.

        Args:
            name (str): Unique segment name.
            length (float): Segment length.
            angle (float): Initial angle in radians (clamped to the range).
            min_angle (float, optional): Lower joint limit.
            max_angle (float, optional): Upper joint limit.

        Returns:
            bool: False if a segment with the same name already exists.
        """
        if name in self._segments:
            logger.warning(f"Segment '{name}' already exists; ignoring duplicate.")
            return False
        segment = Segment(name, self.base_position, length, angle, min_angle, max_angle)
        self._segments[name] = segment
        self._children[name] = []
        self._roots.append(name)
        self._rest_pose[name] = segment.angle
        return True

    def connect_segment(self, parent_name: str, child_name: str) -> bool:
        """Makes ``child_name`` a child of ``parent_name``.

        The edge is rejected when either segment is missing, the child already has a
        parent, or the edge would close a cycle.

        Returns:
            bool: True if the edge was added.
        """
        if parent_name not in self._segments or child_name not in self._segments:
            logger.warning(f"Cannot connect '{parent_name}' -> '{child_name}': segment not found.")
            return False
        if child_name in self._parents:
            logger.warning(
                f"Cannot connect '{parent_name}' -> '{child_name}': "
                f"'{child_name}' is already attached to '{self._parents[child_name]}'."
            )
            return False
        if self._is_ancestor_or_self(child_name, parent_name):
            logger.warning(f"Cannot connect '{parent_name}' -> '{child_name}': the edge would create a cycle.")
            return False

        parent = self._segments[parent_name]
        child = self._segments[child_name]
        self._children[parent_name].append(child_name)
        self._parents[child_name] = parent_name
        self._roots.remove(child_name)
        child.connect_to(parent)
        self._propagate(child_name)
        return True

    def _is_ancestor_or_self(self, candidate: str, name: str) -> bool:
        current: Optional[str] = name
        while current is not None:
            if current == candidate:
                return True
            current = self._parents.get(current)
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_segment(self, name: str) -> Optional[Segment]:
        return self._segments.get(name)

    @property
    def segment_names(self) -> List[str]:
        return list(self._segments)

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __contains__(self, name: str) -> bool:
        return name in self._segments

    @property
    def roots(self) -> List[str]:
        return list(self._roots)

    def children_of(self, name: str) -> List[str]:
        return list(self._children.get(name, ()))

    def parent_of(self, name: str) -> Optional[str]:
        return self._parents.get(name)

    def is_root(self, name: str) -> bool:
        return name in self._segments and name not in self._parents

    def is_end_point(self, name: str) -> bool:
        """True for segments with no children (end-effectors)."""
        return name in self._segments and not self._children[name]

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------
    def rotate_segment(self, name: str, delta_angle: float) -> bool:
        """Rotates a segment by ``delta_angle`` and re-attaches its descendants.

        Returns:
            bool: False if the segment is unknown or the joint limit constrained the
            rotation. Descendants are updated in both cases when the segment exists.
        """
        segment = self._segments.get(name)
        if segment is None:
            logger.warning(f"Cannot rotate unknown segment '{name}'.")
            return False
        reached = segment.rotate(delta_angle)
        self._propagate(name)
        return reached

    def rotate_segment_to(self, name: str, angle: float) -> bool:
        segment = self._segments.get(name)
        if segment is None:
            logger.warning(f"Cannot rotate unknown segment '{name}'.")
            return False
        reached = segment.rotate_to(angle)
        self._propagate(name)
        return reached

    def move_base_to(self, new_base: Vector2D) -> None:
        """Translates the whole body so that its base sits at ``new_base``."""
        displacement = new_base - self.base_position
        self.base_position = new_base
        for root in self._roots:
            self._segments[root].move(displacement)
            self._propagate(root)

    def update_segments(self) -> None:
        """Pins every root to the base position and re-attaches every descendant."""
        for root in self._roots:
            self._segments[root].start = self.base_position
            self._propagate(root)

    def reset_pose(self) -> None:
        """Restores every segment to the angle it had when it was added."""
        for name, angle in self._rest_pose.items():
            self._segments[name].set_angle(angle)
        self.update_segments()

    def is_in_rest_pose(self) -> bool:
        return all(
            angular_distance(self._segments[name].angle, angle) <= Config.ANGLE_TOLERANCE
            for name, angle in self._rest_pose.items()
        )

    def _propagate(self, name: str) -> None:
        stack = list(reversed(self._children[name]))
        while stack:
            current = stack.pop()
            self._segments[current].update_connected_segments()
            stack.extend(reversed(self._children[current]))

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------
    def count_ground_contacts(self) -> int:
        """Counts segment endpoints (starts and ends) resting on the ground."""
        count = 0
        for segment in self._segments.values():
            if segment.is_start_contacting_ground(self.ground_level, self.contact_threshold):
                count += 1
            if segment.is_end_contacting_ground(self.ground_level, self.contact_threshold):
                count += 1
        return count

    def has_minimum_ground_contacts(self, min_contacts: int = 2) -> bool:
        return self.count_ground_contacts() >= min_contacts

    def get_segments_contacting_ground(self) -> List[str]:
        return [
            name
            for name, segment in self._segments.items()
            if segment.is_start_contacting_ground(self.ground_level, self.contact_threshold)
            or segment.is_end_contacting_ground(self.ground_level, self.contact_threshold)
        ]

    def get_segments_touching_object(self, target: Circle) -> List[str]:
        """Returns the end-effectors touching ``target``.

        A leaf touches the object when its end lies inside the circle or when the
        segment passes within one radius of the centre.
        """
        touching = []
        for name, segment in self._segments.items():
            if not self.is_end_point(name):
                continue
            if target.contains(segment.end) or segment.distance_to_point(target.center) <= target.radius:
                touching.append(name)
        return touching

    def can_reach_object(self, target: Circle, min_touching_points: int = 3) -> bool:
        return len(self.get_segments_touching_object(target)) >= min_touching_points

    # ------------------------------------------------------------------
    # Geometry export
    # ------------------------------------------------------------------
    def get_segment_lines(self) -> List[Tuple[Vector2D, Vector2D]]:
        """Returns ``(start, end)`` for every segment in insertion order."""
        return [(segment.start, segment.end) for segment in self._segments.values()]

    def get_geometry(self) -> BodyGeometry:
        lines = [
            SegmentLine(
                name=name,
                start=segment.start,
                end=segment.end,
                is_root=self.is_root(name),
                is_leaf=self.is_end_point(name),
            )
            for name, segment in self._segments.items()
        ]
        return BodyGeometry(lines=lines, base_position=self.base_position, ground_level=self.ground_level)

    def __repr__(self) -> str:
        return f"Body(base={self.base_position!r}, segments={len(self._segments)}, roots={self._roots})"


__all__ = ["Body"]
