"""Movement strategies that drive a Body through a scripted behaviour.

The module exposes a factory returning a concrete MovementStrategy for a string
identifier. Built-in options are the walker (walk, reach, grab) and the snowball
thrower; unknown names fall back to the walker.
"""

import logging

from body_lines.kinematics.body import Body
from body_lines.kinematics.circle import Circle

from .base_strategy import MovementStrategy
from .snowball_strategy import AimError, SnowballState, SnowballStrategy, solve_launch_velocity
from .walker_strategy import WalkerState, WalkerStrategy

logger = logging.getLogger(__name__)


def get_strategy(name: str, body: Body, target: Circle, **kwargs) -> MovementStrategy:
    """Factory returning a strategy instance for the requested name.

    Args:
        name (str): Strategy identifier ("walker" or "snowball").
        body (Body): Body driven by the strategy.
        target (Circle): Target of the behaviour.
        **kwargs: Keyword arguments forwarded to the strategy constructor.

    Returns:
        MovementStrategy: Instantiated strategy.
    """
    mapping = {
        "walker": WalkerStrategy,
        "snowball": SnowballStrategy,
    }

    key = (name or "walker").lower()
    strategy_cls = mapping.get(key)
    if strategy_cls is None:
        logger.warning("Strategy '%s' not recognized; using walker.", name)
        strategy_cls = WalkerStrategy
    return strategy_cls(body, target, **kwargs)


__all__ = [
    "MovementStrategy",
    "WalkerStrategy",
    "WalkerState",
    "SnowballStrategy",
    "SnowballState",
    "AimError",
    "solve_launch_velocity",
    "get_strategy",
]
