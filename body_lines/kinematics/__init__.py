"""Kinematic chain model: vectors, circles, constrained segments and segment forests.

Bodies are usually created through ``BodyBuilder``, either from explicit segment
specs or from one of the named presets in ``PRESETS``.
"""

from .vector import Vector2D
from .circle import Circle
from .segment import Segment, angular_distance, clamp_angle, normalize_angle, wrap_to_pi
from .body import Body
from .builder import PRESETS, BodyBuilder

__all__ = [
    "Vector2D",
    "Circle",
    "Segment",
    "Body",
    "BodyBuilder",
    "PRESETS",
    "clamp_angle",
    "normalize_angle",
    "wrap_to_pi",
    "angular_distance",
]
