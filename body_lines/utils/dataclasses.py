"""Shared dataclass definitions for moves, geometry and driver status.

These structures are plain records exchanged between the kinematic core, the
movement strategies and the drivers (text loop, pygame renderer) so that none
of the drivers has to reach into strategy internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover - assist typing only
    from body_lines.kinematics.vector import Vector2D


class MoveType(Enum):
    """Kinds of atomic action a planner can queue."""

    WALK = "walk"
    REACH = "reach"
    GRAB = "grab"
    RESET_POSE = "reset_pose"


@dataclass(frozen=True)
class Move:
    """A planned atomic action.

    Attributes:
        type (MoveType): Kind of action.
        position (Optional[Vector2D]): Waypoint for the body base (walk moves) or the
            object position the move was planned against (reach moves).
        segment_name (str): Segment rotated by a reach move.
        rotation (float): Planned rotation delta in radians for a reach move.
    """

    type: MoveType
    position: Optional["Vector2D"] = None
    segment_name: str = ""
    rotation: float = 0.0


@dataclass
class SegmentLine:
    """Named line primitive exported by ``Body.get_geometry``.

    Attributes:
        name (str): Segment name.
        start (Vector2D): World-space start point.
        end (Vector2D): World-space end point.
        is_root (bool): True when the segment hangs directly off the body base.
        is_leaf (bool): True when the segment has no children (an end-effector).
    """

    name: str
    start: "Vector2D"
    end: "Vector2D"
    is_root: bool
    is_leaf: bool


@dataclass
class BodyGeometry:
    """Container returned by ``Body.get_geometry``.

    Attributes:
        lines (List[SegmentLine]): One entry per segment, in insertion order.
        base_position (Vector2D): Current body base.
        ground_level (float): y-coordinate of the ground.
    """

    lines: List[SegmentLine]
    base_position: "Vector2D"
    ground_level: float


@dataclass
class SimulationStatus:
    """Snapshot answered by ``Simulation.status``.

    Mode-specific flags are ``None`` when they do not apply to the active mode.
    """

    mode: str
    sequence_complete: bool
    last_step_succeeded: Optional[bool]
    body_position: "Vector2D"
    target_position: "Vector2D"
    segment_count: int
    ground_contacts: int
    object_caught: Optional[bool] = None
    strategy_state: str = ""
    snowball_active: Optional[bool] = None
    hit_target: Optional[bool] = None
    hit_ground: Optional[bool] = None
    snowball_position: Optional["Vector2D"] = None
    extra: dict = field(default_factory=dict)


__all__ = ["MoveType", "Move", "SegmentLine", "BodyGeometry", "SimulationStatus"]
