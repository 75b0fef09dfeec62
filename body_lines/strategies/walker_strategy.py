"""
walker_strategy.py

Scripted catch behaviour: walk the body toward a circular object, rotate the arms toward it
and try to grab it with enough end-effectors.

The plan is a FIFO queue of ``Move`` records built in ``plan_sequence`` and consumed one per
``execute_next_move`` call. A failed move is consumed like any other; there is no retry.
"""

import copy
import logging
import math
from collections import deque
from enum import Enum
from typing import Any, Deque, Dict, Iterable, List, Optional

from body_lines.kinematics.body import Body
from body_lines.kinematics.circle import Circle
from body_lines.kinematics.segment import wrap_to_pi
from body_lines.kinematics.vector import Vector2D
from body_lines.strategies.base_strategy import MovementStrategy
from body_lines.utils.config import Config
from body_lines.utils.dataclasses import Move, MoveType
from body_lines.utils.event_log import BaseEventLog

logger = logging.getLogger(__name__)


class WalkerState(Enum):
    PLANNING = "planning"
    WALKING = "walking"
    REACHING = "reaching"
    GRABBING = "grabbing"
    DONE = "done"


class WalkerStrategy(MovementStrategy):
    """Walk toward the target, reach for it, grab it.

    Attributes:
        walk_speed (float): Horizontal distance covered by one walk move.
        reach_distance (float): Horizontal distance from the target at which walking stops.
        reach_segments (List[str]): Segments rotated toward the target, in order.
        min_ground_contacts (int): Ground contacts required before walking or reaching.
        min_object_contacts (int): End-effectors that must touch the target for a grab.
        object_caught (bool): Set by a successful grab; cleared by ``plan_sequence``.
        last_move_result (Optional[bool]): Result of the most recent move, if any.
    """

    def __init__(
        self,
        body: Body,
        target: Circle,
        walk_speed: float = Config.WALK_SPEED,
        reach_distance: float = Config.REACH_DISTANCE,
        reach_segments: Optional[Iterable[str]] = None,
        min_ground_contacts: int = Config.MIN_GROUND_CONTACTS,
        min_object_contacts: int = Config.MIN_OBJECT_CONTACTS,
        event_log: Optional[BaseEventLog] = None,
    ) -> None:
        super().__init__(body, target, event_log)
        self.walk_speed = float(walk_speed)
        self.reach_distance = float(reach_distance)
        if reach_segments is None:
            reach_segments = Config.REACH_SEGMENTS["humanoid"]
        self.reach_segments: List[str] = list(reach_segments)
        self.min_ground_contacts = int(min_ground_contacts)
        self.min_object_contacts = int(min_object_contacts)
        self.object_caught = False
        self.last_move_result: Optional[bool] = None
        self._moves: Deque[Move] = deque()
        self._move_index = 0
        self._planned = False

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def plan_sequence(self, object_position: Optional[Vector2D] = None) -> None:
        """Replaces the queue with a fresh catch sequence.

        Args:
            object_position (Vector2D, optional): Point to walk and reach toward.
                Defaults to the target centre.
        """
        if object_position is None:
            object_position = self.target.center

        self._moves.clear()
        self.object_caught = False
        self.last_move_result = None
        self._move_index = 0
        self._planned = True

        distance = object_position.distance(self.body.base_position)
        self.event_log.log_message("Planning catch sequence")
        self.event_log.log_message(f"Distance to object: {distance:.2f}")

        if not self.body.is_in_rest_pose():
            self._moves.append(Move(MoveType.RESET_POSE))

        waypoints = self._plan_walk(object_position)
        self._plan_reach(object_position, waypoints[-1] if waypoints else self.body.base_position)
        self._moves.append(Move(MoveType.GRAB, position=object_position))

        self.event_log.log_message(f"Total planned moves: {len(self._moves)}")
        logger.debug("Planned %d moves toward %s", len(self._moves), object_position)

    def _plan_walk(self, object_position: Vector2D) -> List[Vector2D]:
        start = self.body.base_position
        walking_distance = abs(object_position.x - start.x) - self.reach_distance
        if walking_distance <= 0:
            return []
        if self.walk_speed <= 0:
            self.event_log.log_warning(f"Walk speed {self.walk_speed} is not positive; no walk moves planned")
            return []

        direction = 1.0 if object_position.x >= start.x else -1.0
        step_count = math.ceil(walking_distance / self.walk_speed)
        waypoints = []
        for i in range(step_count):
            offset = min((i + 1) * self.walk_speed, walking_distance)
            waypoint = Vector2D(start.x + direction * offset, start.y)
            waypoints.append(waypoint)
            self._moves.append(Move(MoveType.WALK, position=waypoint))

        self.event_log.log_message(f"Added walking sequence: {step_count} moves")
        return waypoints

    def _plan_reach(self, object_position: Vector2D, final_base: Vector2D) -> None:
        # Deltas are measured on a preview of the pose the body will have when each move runs.
        preview = copy.deepcopy(self.body)
        if not preview.is_in_rest_pose():
            preview.reset_pose()
        preview.move_base_to(final_base)

        for name in self.reach_segments:
            segment = preview.get_segment(name)
            if segment is None:
                self.event_log.log_warning(f"Reach segment not found: {name}")
                self._moves.append(Move(MoveType.REACH, position=object_position, segment_name=name))
                continue
            to_target = object_position - segment.start
            rotation = wrap_to_pi(math.atan2(to_target.y, to_target.x) - segment.angle)
            preview.rotate_segment(name, rotation)
            self._moves.append(
                Move(MoveType.REACH, position=object_position, segment_name=name, rotation=rotation)
            )

        self.event_log.log_message(f"Added reaching sequence: {len(self.reach_segments)} moves")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def execute_next_move(self) -> bool:
        if not self._moves:
            return False

        move = self._moves.popleft()
        if move.type is MoveType.WALK:
            success = self._execute_walk(move)
        elif move.type is MoveType.REACH:
            success = self._execute_reach(move)
        elif move.type is MoveType.GRAB:
            success = self._execute_grab()
        else:
            self.body.reset_pose()
            success = True

        self._move_index += 1
        self.last_move_result = success
        self.event_log.log_message(
            f"Completed move {self._move_index} of {self._move_index + len(self._moves)}"
        )
        return success

    def _execute_walk(self, move: Move) -> bool:
        if not self.body.has_minimum_ground_contacts(self.min_ground_contacts):
            self.event_log.log_warning("Cannot move - insufficient ground contacts")
            return False
        self.body.move_base_to(move.position)
        return True

    def _execute_reach(self, move: Move) -> bool:
        if not self.body.has_minimum_ground_contacts(self.min_ground_contacts):
            self.event_log.log_warning("Cannot reach - insufficient ground contacts")
            return False
        if self.body.get_segment(move.segment_name) is None:
            self.event_log.log_warning(f"Segment not found: {move.segment_name}")
            return False
        return self.body.rotate_segment(move.segment_name, move.rotation)

    def _execute_grab(self) -> bool:
        if self.body.can_reach_object(self.target, self.min_object_contacts):
            self.object_caught = True
            self.event_log.log_message("Object caught successfully!")
            return True
        self.event_log.log_message("Failed to grab object")
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_sequence_complete(self) -> bool:
        return not self._moves

    def has_object_been_caught(self) -> bool:
        return self.object_caught

    @property
    def pending_moves(self) -> List[Move]:
        return list(self._moves)

    @property
    def move_index(self) -> int:
        return self._move_index

    @property
    def state(self) -> WalkerState:
        """Phase of the catch sequence, derived from the next pending move."""
        if not self._planned:
            return WalkerState.PLANNING
        if not self._moves:
            return WalkerState.DONE
        next_type = self._moves[0].type
        if next_type in (MoveType.WALK, MoveType.RESET_POSE):
            return WalkerState.WALKING
        if next_type is MoveType.REACH:
            return WalkerState.REACHING
        return WalkerState.GRABBING

    def status_flags(self) -> Dict[str, Any]:
        return {
            "object_caught": self.object_caught,
            "state": self.state.value,
            "pending_moves": len(self._moves),
        }
