"""
event_log.py

Event-log capability injected into movement strategies and the simulation driver.

``BaseEventLog`` defines the capability and doubles as the no-op default, so the
kinematic core and the strategies work without any sink attached.
``SimulationEventLog`` forwards events to a named ``logging.Logger`` and can
optionally append them to a log file with timestamps.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from body_lines.kinematics.vector import Vector2D


class BaseEventLog:
    """Event sink for scenario events.

    Every method is a no-op here; subclasses override the ones they care about.
    """

    def log_message(self, text: str) -> None:
        """Records a free-form message.

        Args:
            text (str): Message text.
        """
        pass

    def log_warning(self, text: str) -> None:
        """Records a recoverable problem (e.g. a refused move)."""
        pass

    def log_error(self, text: str) -> None:
        """Records an error that aborted an operation."""
        pass

    def log_snowball_throw(self, position: Vector2D, velocity: Vector2D) -> None:
        """Records the launch of a projectile.

        Args:
            position (Vector2D): Launch position.
            velocity (Vector2D): Launch velocity.
        """
        pass

    def log_snowball_hit(self, position: Vector2D, hit_target: bool) -> None:
        """Records the end of a projectile flight.

        Args:
            position (Vector2D): Position at which the flight ended.
            hit_target (bool): True if the target was hit, False if the ground was.
        """
        pass

    def close(self) -> None:
        """Releases any resources held by the sink."""
        pass


class NullEventLog(BaseEventLog):
    """Explicit no-op sink used when no event log is injected."""


class SimulationEventLog(BaseEventLog):
    """Event sink backed by the standard logging module.

    Attributes:
        logger (logging.Logger): Logger receiving every event.
        log_file (Optional[Path]): File the events are appended to, if any.
    """

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self, log_file: Optional[Union[str, Path]] = None, logger_name: str = "body_lines.events"):
        """Initializes the event log.

        Args:
            log_file (str | Path, optional): File to append events to. When ``None``
                events only flow through the logging hierarchy.
            logger_name (str, optional): Name of the logger receiving the events.
        """
        self.logger = logging.getLogger(logger_name)
        self.log_file: Optional[Path] = Path(log_file) if log_file is not None else None
        self._handler: Optional[logging.Handler] = None
        if self.log_file is not None:
            self._handler = logging.FileHandler(self.log_file, mode="a", encoding="utf-8")
            self._handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s", datefmt=self.TIMESTAMP_FORMAT))
            self.logger.addHandler(self._handler)
            if self.logger.getEffectiveLevel() > logging.INFO:
                self.logger.setLevel(logging.INFO)
            self.log_message("Logger initialized")

    def log_message(self, text: str) -> None:
        self.logger.info(text)

    def log_warning(self, text: str) -> None:
        self.logger.warning("WARNING: %s", text)

    def log_error(self, text: str) -> None:
        self.logger.error("ERROR: %s", text)

    def log_snowball_throw(self, position: Vector2D, velocity: Vector2D) -> None:
        self.log_message(
            f"Snowball thrown from ({position.x:.2f}, {position.y:.2f}) "
            f"with velocity ({velocity.x:.2f}, {velocity.y:.2f})"
        )

    def log_snowball_hit(self, position: Vector2D, hit_target: bool) -> None:
        if hit_target:
            self.log_message(f"Snowball hit target at ({position.x:.2f}, {position.y:.2f})")
        else:
            self.log_message(f"Snowball missed target at ({position.x:.2f}, {position.y:.2f})")

    def close(self) -> None:
        """Detaches and closes the file handler, if one was attached."""
        if self._handler is not None:
            self.logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None


__all__ = ["BaseEventLog", "NullEventLog", "SimulationEventLog"]
