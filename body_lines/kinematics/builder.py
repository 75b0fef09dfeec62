"""Fluent construction of Body instances and the packaged body presets.

Builders collect segment specs and connections first and only create the Body in
``build()``, so specs may be declared in any order relative to their connections.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from body_lines.kinematics.body import Body
from body_lines.kinematics.vector import Vector2D
from body_lines.utils.config import Config

logger = logging.getLogger(__name__)

# Leg tilt of the humanoid preset: a 3-4-5 triangle puts the knees and feet on the ground.
LEG_ANGLE = math.atan2(3.0, 4.0)


@dataclass
class SegmentSpec:
    length: float
    angle: float
    min_angle: float = -math.pi
    max_angle: float = math.pi


class BodyBuilder:
    """Accumulates segment specs and connections, then builds a Body."""

    def __init__(self):
        self.base_position = Vector2D(Config.BODY_X, Config.BODY_Y)
        self.ground_level = Config.GROUND_LEVEL
        self.contact_threshold = Config.GROUND_CONTACT_THRESHOLD
        self._specs: Dict[str, SegmentSpec] = {}
        self._connections: List[Tuple[str, str]] = []

    def set_base_position(self, position: Vector2D) -> "BodyBuilder":
        self.base_position = position
        return self

    def set_ground_level(self, level: float) -> "BodyBuilder":
        self.ground_level = float(level)
        return self

    def set_contact_threshold(self, threshold: float) -> "BodyBuilder":
        self.contact_threshold = float(threshold)
        return self

    def add_segment(
        self,
        name: str,
        length: float,
        angle: float,
        min_angle: float = -math.pi,
        max_angle: float = math.pi,
    ) -> "BodyBuilder":
        """Records a segment spec; a repeated name replaces the earlier spec."""
        self._specs[name] = SegmentSpec(length, angle, min_angle, max_angle)
        return self

    def connect_segments(self, parent_name: str, child_name: str) -> "BodyBuilder":
        self._connections.append((parent_name, child_name))
        return self

    def reset(self) -> "BodyBuilder":
        """Clears specs and connections; base position and ground level are kept."""
        self._specs.clear()
        self._connections.clear()
        return self

    def build(self) -> Body:
        """Creates the Body: inserts every spec, applies every connection, lays it out once.

        Invalid connections are skipped with a warning by ``Body.connect_segment``.
        """
        body = Body(self.base_position, self.ground_level, self.contact_threshold)
        for name, spec in self._specs.items():
            body.add_segment(name, spec.length, spec.angle, spec.min_angle, spec.max_angle)
        for parent_name, child_name in self._connections:
            body.connect_segment(parent_name, child_name)
        body.update_segments()
        logger.debug("Built body with %d segments", len(body))
        return body

    def build_humanoid_body(self) -> "BodyBuilder":
        """Loads the 14-segment humanoid preset, standing with both feet on the ground.

        The upper arms hang from the shoulder with the forearms and hands held forward,
        and the neck can bend forward far enough for the head to meet an object held
        between the hands.
        """
        self.reset()
        pi = math.pi

        self.add_segment("torso", 60.0, -pi / 2, -pi, 0.0)
        self.add_segment("head", 35.0, -pi / 2, -3 * pi / 4, pi / 4)
        self.connect_segments("torso", "head")

        self.add_segment("left_upper_arm", 40.0, 2 * pi / 3, pi / 2, 3 * pi / 2)
        self.connect_segments("torso", "left_upper_arm")
        self.add_segment("left_lower_arm", 40.0, 0.0, -pi / 2, pi / 2)
        self.connect_segments("left_upper_arm", "left_lower_arm")
        self.add_segment("left_hand", 20.0, 0.0, -pi / 4, pi / 4)
        self.connect_segments("left_lower_arm", "left_hand")

        self.add_segment("right_upper_arm", 40.0, pi / 2, 0.0, pi)
        self.connect_segments("torso", "right_upper_arm")
        self.add_segment("right_lower_arm", 40.0, 0.0, -pi / 2, pi / 2)
        self.connect_segments("right_upper_arm", "right_lower_arm")
        self.add_segment("right_hand", 20.0, 0.0, -pi / 4, pi / 4)
        self.connect_segments("right_lower_arm", "right_hand")

        self.add_segment("left_upper_leg", 50.0, pi - LEG_ANGLE, 0.0, pi)
        self.connect_segments("torso", "left_upper_leg")
        self.add_segment("left_lower_leg", 50.0, pi - LEG_ANGLE, 0.0, pi)
        self.connect_segments("left_upper_leg", "left_lower_leg")
        self.add_segment("left_foot", 30.0, pi, 3 * pi / 4, 5 * pi / 4)
        self.connect_segments("left_lower_leg", "left_foot")

        self.add_segment("right_upper_leg", 50.0, LEG_ANGLE, 0.0, pi)
        self.connect_segments("torso", "right_upper_leg")
        self.add_segment("right_lower_leg", 50.0, LEG_ANGLE, 0.0, pi)
        self.connect_segments("right_upper_leg", "right_lower_leg")
        self.add_segment("right_foot", 30.0, 0.0, -pi / 4, pi / 4)
        self.connect_segments("right_lower_leg", "right_foot")
        return self

    def build_simple_body(self) -> "BodyBuilder":
        """Loads the 5-segment preset: a torso with four limbs hanging off it."""
        self.reset()
        pi = math.pi
        self.add_segment("torso", 50.0, -pi / 2, -pi, pi)
        self.add_segment("left_arm", 40.0, -3 * pi / 4, -pi, pi / 2)
        self.connect_segments("torso", "left_arm")
        self.add_segment("right_arm", 40.0, -pi / 4, -pi / 2, pi / 2)
        self.connect_segments("torso", "right_arm")
        self.add_segment("left_leg", 50.0, pi / 2, 0.0, pi)
        self.connect_segments("torso", "left_leg")
        self.add_segment("right_leg", 50.0, pi / 2, 0.0, pi)
        self.connect_segments("torso", "right_leg")
        return self

    @classmethod
    def from_preset(cls, name: str = "humanoid") -> "BodyBuilder":
        """Returns a builder loaded with the named preset.

        Args:
            name (str): Key of ``PRESETS``. Unknown names fall back to the humanoid.

        Returns:
            BodyBuilder: Builder ready for further configuration or ``build()``.
        """
        key = (name or "humanoid").lower()
        loader = PRESETS.get(key)
        if loader is None:
            logger.warning("Body preset '%s' not recognized; using humanoid.", name)
            loader = PRESETS["humanoid"]
        return loader(cls())


PRESETS = {
    "humanoid": BodyBuilder.build_humanoid_body,
    "simple": BodyBuilder.build_simple_body,
}


__all__ = ["BodyBuilder", "SegmentSpec", "PRESETS", "LEG_ANGLE"]
