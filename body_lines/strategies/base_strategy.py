from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from body_lines.kinematics.body import Body
from body_lines.kinematics.circle import Circle
from body_lines.utils.event_log import BaseEventLog, NullEventLog


class MovementStrategy(ABC):
    """Shared contract of the scripted behaviours that drive a Body.

    A strategy is created per scenario activation and holds shared references to the
    body and the target circle; it owns neither. Steps are synchronous and never raise:
    failures surface as ``False`` from ``execute_next_move``.

    Attributes:
        body (Body): Body driven by the strategy.
        target (Circle): Object the behaviour aims at.
        event_log (BaseEventLog): Sink for scenario events (a no-op by default).
    """

    def __init__(self, body: Body, target: Circle, event_log: Optional[BaseEventLog] = None) -> None:
        self.body = body
        self.target = target
        self.event_log: BaseEventLog = event_log if event_log is not None else NullEventLog()

    @abstractmethod
    def plan_sequence(self) -> None:
        """Discards any pending work and plans the behaviour from the current state."""
        pass

    @abstractmethod
    def execute_next_move(self) -> bool:
        """Performs one planned step.

        Returns:
            bool: True if the step succeeded, False if it failed or nothing was pending.
        """
        pass

    @abstractmethod
    def is_sequence_complete(self) -> bool:
        """Returns True when no planned work remains."""
        pass

    def enable_logging(self, event_log: Optional[BaseEventLog]) -> None:
        """Attaches an event sink; ``None`` restores the no-op sink."""
        self.event_log = event_log if event_log is not None else NullEventLog()

    def set_target(self, target: Circle) -> None:
        """Replaces the target. Call ``plan_sequence`` afterwards to plan against it."""
        self.target = target

    def status_flags(self) -> Dict[str, Any]:
        """Returns the variant-specific status flags.

        Returns:
            Dict[str, Any]: Flag name to value; empty for strategies without extra state.
        """
        return {}

    def get_projectile(self) -> Optional[Circle]:
        """Returns the projectile drawn by renderers, if the behaviour has one."""
        return None
