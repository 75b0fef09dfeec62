"""
simulation.py

Scenario driver shared by the text loop, the pygame GUI and headless runs. It owns the body,
the target and the active movement strategy, tagged by ``SimulationMode``, and advances the
scenario one synchronous step at a time.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np

from body_lines.kinematics.body import Body
from body_lines.kinematics.builder import BodyBuilder
from body_lines.kinematics.circle import Circle
from body_lines.kinematics.vector import Vector2D
from body_lines.strategies import MovementStrategy, get_strategy
from body_lines.utils.config import Config
from body_lines.utils.dataclasses import BodyGeometry, SimulationStatus
from body_lines.utils.event_log import BaseEventLog, NullEventLog

logger = logging.getLogger(__name__)


class SimulationMode(Enum):
    WALKER = "walker"
    SNOWBALL = "snowball"


class Simulation:
    """Runs one scenario at a time on a freshly built body.

    Settings are read from keyword arguments or fall back to defaults specified in the Config.
    Recognized keys: ground_level, body_x, body_y, body_preset, target_x, target_y,
    snowball_target_x, snowball_target_y, target_radius, walk_speed, reach_distance,
    reach_segments, snowball_radius, gravity, throw_standoff, flight_time_step,
    auto_step_interval and simulation_type.
    """

    def __init__(self, event_log: Optional[BaseEventLog] = None, **kwargs):
        self.event_log: BaseEventLog = event_log if event_log is not None else NullEventLog()

        self.ground_level = float(kwargs.get("ground_level", Config.GROUND_LEVEL))
        self.body_position = Vector2D(
            float(kwargs.get("body_x", Config.BODY_X)), float(kwargs.get("body_y", Config.BODY_Y))
        )
        self.body_preset = kwargs.get("body_preset", Config.BODY_PRESET)
        self.target_position = Vector2D(
            float(kwargs.get("target_x", Config.TARGET_X)), float(kwargs.get("target_y", Config.TARGET_Y))
        )
        self.snowball_target_position = Vector2D(
            float(kwargs.get("snowball_target_x", Config.SNOWBALL_TARGET_X)),
            float(kwargs.get("snowball_target_y", Config.SNOWBALL_TARGET_Y)),
        )
        self.target_radius = float(kwargs.get("target_radius", Config.TARGET_RADIUS))

        self.walk_speed = float(kwargs.get("walk_speed", Config.WALK_SPEED))
        self.reach_distance = float(kwargs.get("reach_distance", Config.REACH_DISTANCE))
        self.reach_segments = kwargs.get("reach_segments")

        self.snowball_radius = float(kwargs.get("snowball_radius", Config.SNOWBALL_RADIUS))
        self.gravity = float(kwargs.get("gravity", Config.GRAVITY))
        self.throw_standoff = float(kwargs.get("throw_standoff", Config.THROW_STANDOFF))
        self.flight_time_step = float(kwargs.get("flight_time_step", Config.FLIGHT_TIME_STEP))
        self.auto_step_interval = float(kwargs.get("auto_step_interval", Config.AUTO_STEP_INTERVAL))

        self.mode = SimulationMode.WALKER
        self.body: Body
        self.target: Circle
        self.strategy: MovementStrategy
        self.steps_taken = 0
        self.last_step_result: Optional[bool] = None

        self.set_mode(kwargs.get("simulation_type", SimulationMode.WALKER))

    # ------------------------------------------------------------------
    # Scenario activation
    # ------------------------------------------------------------------
    def set_mode(self, mode: Union[SimulationMode, str]) -> None:
        """Activates a scenario: rebuilds the body, places the target and plans the strategy.

        Args:
            mode (SimulationMode | str): Scenario to activate. Unknown names fall back to walker.
        """
        if not isinstance(mode, SimulationMode):
            try:
                mode = SimulationMode(str(mode).lower())
            except ValueError:
                logger.warning("Simulation type '%s' not recognized; using walker.", mode)
                mode = SimulationMode.WALKER
        self.mode = mode

        self.body = (
            BodyBuilder.from_preset(self.body_preset)
            .set_base_position(self.body_position)
            .set_ground_level(self.ground_level)
            .build()
        )

        if mode is SimulationMode.WALKER:
            self.target = Circle(self.target_position, self.target_radius)
            reach_segments = self.reach_segments
            if reach_segments is None:
                preset = (self.body_preset or "humanoid").lower()
                reach_segments = Config.REACH_SEGMENTS.get(preset, Config.REACH_SEGMENTS["humanoid"])
            strategy_kwargs = {
                "walk_speed": self.walk_speed,
                "reach_distance": self.reach_distance,
                "reach_segments": reach_segments,
            }
        else:
            self.target = Circle(self.snowball_target_position, self.target_radius)
            strategy_kwargs = {
                "snowball_radius": self.snowball_radius,
                "gravity": self.gravity,
                "throw_standoff": self.throw_standoff,
            }

        self.strategy = get_strategy(mode.value, self.body, self.target, event_log=self.event_log, **strategy_kwargs)
        self.strategy.plan_sequence()
        self.steps_taken = 0
        self.last_step_result = None
        self.event_log.log_message(f"Configured for {mode.value.capitalize()} scenario")
        logger.info("Activated %s scenario with %d segments", mode.value, len(self.body))

    def reset(self) -> None:
        """Re-activates the current scenario from scratch."""
        self.set_mode(self.mode)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def step(self, time_step: Optional[float] = None) -> bool:
        """Performs one synchronous step of the active scenario.

        Walker: executes the next planned move. Snowball: throws if a throw is armed,
        otherwise advances the flight by ``time_step``.

        Returns:
            bool: Result of the step; False when there was nothing left to do.
        """
        if time_step is None:
            time_step = self.flight_time_step

        if self.mode is SimulationMode.WALKER:
            if self.strategy.is_sequence_complete():
                return False
            result = self.strategy.execute_next_move()
        else:
            if self.strategy.is_throw_pending:
                result = self.strategy.execute_next_move()
            elif self.strategy.is_active:
                self.strategy.update(time_step)
                result = True
            else:
                return False

        self.steps_taken += 1
        self.last_step_result = result
        return result

    def is_complete(self) -> bool:
        return self.strategy.is_sequence_complete()

    def run(self, max_steps: int = Config.MAX_AUTO_STEPS) -> SimulationStatus:
        """Steps until the scenario completes or ``max_steps`` steps have been taken."""
        for _ in range(max_steps):
            if self.is_complete():
                break
            self.step()
        return self.status()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def status(self) -> SimulationStatus:
        flags = self.strategy.status_flags()
        status = SimulationStatus(
            mode=self.mode.value,
            sequence_complete=self.strategy.is_sequence_complete(),
            last_step_succeeded=self.last_step_result,
            body_position=self.body.base_position,
            target_position=self.target.center,
            segment_count=len(self.body),
            ground_contacts=self.body.count_ground_contacts(),
            strategy_state=str(flags.get("state", "")),
        )
        if self.mode is SimulationMode.WALKER:
            status.object_caught = bool(flags.get("object_caught", False))
            status.extra["pending_moves"] = flags.get("pending_moves", 0)
        else:
            status.snowball_active = bool(flags.get("active", False))
            status.hit_target = bool(flags.get("hit_target", False))
            status.hit_ground = bool(flags.get("hit_ground", False))
            status.snowball_position = self.strategy.position
            status.extra["throw_rejected"] = flags.get("throw_rejected", False)
            status.extra["timed_out"] = flags.get("timed_out", False)
        return status

    def get_segment_lines(self) -> List[Tuple[Vector2D, Vector2D]]:
        return self.body.get_segment_lines()

    def get_geometry(self) -> BodyGeometry:
        return self.body.get_geometry()

    def get_projectile(self) -> Optional[Circle]:
        return self.strategy.get_projectile()

    def predict_trajectory(self, steps: int = Config.TRAJECTORY_PREVIEW_STEPS) -> np.ndarray:
        """Returns the predicted snowball path, or an empty ``(0, 2)`` array in walker mode."""
        if self.mode is not SimulationMode.SNOWBALL:
            return np.empty((0, 2), dtype=float)
        return self.strategy.predict_trajectory(steps, self.flight_time_step)

    def close(self) -> None:
        self.event_log.close()
