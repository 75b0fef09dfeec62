"""
snowball_strategy.py

Scripted throw behaviour: launch a circular projectile from above the body along a ballistic
arc toward the target circle, then advance it one fixed time step per ``update`` call until it
strikes the ground or the target.

The integrator updates the vertical velocity before the position (semi-implicit Euler), and
``predict_trajectory`` reproduces the same sequence in closed form for renderers.
"""

import logging
import math
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from body_lines.kinematics.body import Body
from body_lines.kinematics.circle import Circle
from body_lines.kinematics.vector import Vector2D
from body_lines.strategies.base_strategy import MovementStrategy
from body_lines.utils.config import Config
from body_lines.utils.event_log import BaseEventLog

logger = logging.getLogger(__name__)


class AimError(ValueError):
    """Raised when no ballistic launch velocity reaches the target."""


def solve_launch_velocity(launch: Vector2D, target: Vector2D, gravity: float) -> Vector2D:
    """Computes a launch velocity whose arc passes through ``target``.

    The flight time is ``t = sqrt(2 * dx / g)``; the horizontal speed covers ``dx`` in that
    time and the vertical speed is chosen so the arc ends at ``dy``.

    Args:
        launch (Vector2D): Launch position.
        target (Vector2D): Point the arc must pass through.
        gravity (float): Vertical acceleration (positive pulls toward +y).

    Returns:
        Vector2D: Launch velocity.

    Raises:
        AimError: If ``gravity`` is zero or the target lies on the wrong side for the
            given gravity (``2 * dx / g <= 0``).
    """
    if gravity == 0.0:
        raise AimError("Cannot aim without gravity")
    dx = target.x - launch.x
    dy = target.y - launch.y
    time_squared = 2.0 * dx / gravity
    if not time_squared > 0.0:
        raise AimError(f"Target at dx={dx:.2f} is unreachable with gravity {gravity:.2f}")
    flight_time = math.sqrt(time_squared)
    return Vector2D(dx / flight_time, -gravity * flight_time / 2.0 + dy / flight_time)


class SnowballState(Enum):
    IDLE = "idle"
    THROWN = "thrown"
    HIT_TARGET = "hit_target"
    HIT_GROUND = "hit_ground"


class SnowballStrategy(MovementStrategy):
    """Throws one snowball per plan at the target.

    Attributes:
        projectile (Circle): Snowball position (``center``), velocity and radius.
        gravity (float): Vertical acceleration applied during flight.
        throw_standoff (float): Height above the body base at which the snowball is released.
        max_flight_steps (int): Updates after which an unfinished flight is abandoned.
        throw_rejected (bool): True when the last attempt to aim failed.
        timed_out (bool): True when the last flight was abandoned.
    """

    def __init__(
        self,
        body: Body,
        target: Circle,
        snowball_radius: float = Config.SNOWBALL_RADIUS,
        gravity: float = Config.GRAVITY,
        throw_standoff: float = Config.THROW_STANDOFF,
        max_flight_steps: int = Config.MAX_FLIGHT_STEPS,
        event_log: Optional[BaseEventLog] = None,
    ) -> None:
        super().__init__(body, target, event_log)
        self.projectile = Circle(Vector2D(0.0, 0.0), snowball_radius)
        self.gravity = float(gravity)
        self.throw_standoff = float(throw_standoff)
        self.max_flight_steps = int(max_flight_steps)
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Returns to an armed IDLE state with zeroed position and velocity."""
        self.projectile.center = Vector2D(0.0, 0.0)
        self.projectile.velocity = Vector2D(0.0, 0.0)
        self._active = False
        self._hit_target = False
        self._hit_ground = False
        self._throw_pending = True
        self._prepared = False
        self._flight_steps = 0
        self.throw_rejected = False
        self.timed_out = False

    def plan_sequence(self) -> None:
        self.reset()
        self.event_log.log_message("Snowball sequence planned")

    def launch_position(self) -> Vector2D:
        base = self.body.base_position
        return Vector2D(base.x, base.y - self.throw_standoff)

    def prepare_throw(self, position: Vector2D, velocity: Vector2D) -> bool:
        """Sets an explicit launch state and re-arms the throw.

        Args:
            position (Vector2D): Launch position.
            velocity (Vector2D): Launch velocity.

        Returns:
            bool: False if a flight is in progress or the input is not finite.
        """
        if self._active:
            self.event_log.log_warning("Cannot prepare a throw while the snowball is in flight")
            return False
        if not position.is_finite() or not velocity.is_finite():
            self.event_log.log_error(f"Rejected non-finite throw: position={position}, velocity={velocity}")
            return False
        self.reset()
        self.projectile.center = position
        self.projectile.velocity = velocity
        self._prepared = True
        self.event_log.log_message(f"Snowball prepared at position {position.x:.2f}, {position.y:.2f}")
        return True

    def throw_snowball(self) -> bool:
        """Launches the snowball, aiming first unless ``prepare_throw`` supplied the state.

        Returns:
            bool: True if the snowball is now in flight.
        """
        if self._active:
            return False
        if not self._prepared:
            launch = self.launch_position()
            try:
                velocity = solve_launch_velocity(launch, self.target.center, self.gravity)
            except AimError as err:
                self.throw_rejected = True
                self.event_log.log_error(f"Throw rejected: {err}")
                logger.warning("Throw rejected: %s", err)
                return False
            self.projectile.center = launch
            self.projectile.velocity = velocity
            self._prepared = True

        self._active = True
        self._hit_target = False
        self._hit_ground = False
        self._flight_steps = 0
        self.throw_rejected = False
        self.timed_out = False
        self.event_log.log_snowball_throw(self.projectile.center, self.projectile.velocity)
        return True

    def execute_next_move(self) -> bool:
        if not self._throw_pending or self._active:
            return False
        self._throw_pending = False
        return self.throw_snowball()

    # ------------------------------------------------------------------
    # Flight
    # ------------------------------------------------------------------
    def update(self, time_step: float = Config.FLIGHT_TIME_STEP) -> None:
        """Advances the flight by one step and resolves collisions.

        The ground is tested before the target, so a snowball that reaches both in the
        same step counts as a miss.
        """
        if not self._active:
            return

        velocity = self.projectile.velocity
        velocity = Vector2D(velocity.x, velocity.y + self.gravity * time_step)
        self.projectile.velocity = velocity
        self.projectile.center = self.projectile.center + velocity * time_step
        self._flight_steps += 1

        if self.projectile.is_on_ground(self.body.ground_level):
            self._finish_flight(hit_target=False)
        elif self.projectile.intersects(self.target):
            self._finish_flight(hit_target=True)
        elif self._flight_steps >= self.max_flight_steps:
            self._active = False
            self.timed_out = True
            self.event_log.log_warning(f"Snowball flight abandoned after {self._flight_steps} steps")

    def _finish_flight(self, hit_target: bool) -> None:
        self._active = False
        self._hit_target = hit_target
        self._hit_ground = not hit_target
        self.event_log.log_snowball_hit(self.projectile.center, hit_target)

    def predict_trajectory(
        self, steps: int = Config.TRAJECTORY_PREVIEW_STEPS, time_step: float = Config.FLIGHT_TIME_STEP
    ) -> np.ndarray:
        """Predicts the positions the integrator will visit.

        Starts from the current flight state, the prepared launch state, or a fresh aim
        from the launch position, in that order of preference.

        Args:
            steps (int): Number of future steps.
            time_step (float): Step length in seconds.

        Returns:
            np.ndarray: ``(steps + 1, 2)`` array of positions, starting with the current one;
            an empty ``(0, 2)`` array when the target cannot be aimed at.
        """
        if self._active or self._prepared:
            start = self.projectile.center
            velocity = self.projectile.velocity
        else:
            start = self.launch_position()
            try:
                velocity = solve_launch_velocity(start, self.target.center, self.gravity)
            except AimError:
                return np.empty((0, 2), dtype=float)

        n = np.arange(steps + 1, dtype=float)
        xs = start.x + velocity.x * time_step * n
        ys = start.y + velocity.y * time_step * n + self.gravity * time_step**2 * n * (n + 1) / 2.0
        return np.column_stack((xs, ys))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_sequence_complete(self) -> bool:
        return not self._throw_pending and not self._active

    @property
    def state(self) -> SnowballState:
        if self._active:
            return SnowballState.THROWN
        if self._hit_target:
            return SnowballState.HIT_TARGET
        if self._hit_ground:
            return SnowballState.HIT_GROUND
        return SnowballState.IDLE

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def has_hit_target(self) -> bool:
        return self._hit_target

    @property
    def has_hit_ground(self) -> bool:
        return self._hit_ground

    @property
    def is_throw_pending(self) -> bool:
        return self._throw_pending

    @property
    def position(self) -> Vector2D:
        return self.projectile.center

    @property
    def velocity(self) -> Vector2D:
        return self.projectile.velocity

    @property
    def radius(self) -> float:
        return self.projectile.radius

    def get_projectile(self) -> Optional[Circle]:
        return self.projectile

    def status_flags(self) -> Dict[str, Any]:
        return {
            "active": self._active,
            "hit_target": self._hit_target,
            "hit_ground": self._hit_ground,
            "throw_rejected": self.throw_rejected,
            "timed_out": self.timed_out,
            "state": self.state.value,
        }
