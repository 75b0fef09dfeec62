import logging
import math

import pytest

from body_lines.kinematics.builder import PRESETS, BodyBuilder
from body_lines.kinematics.vector import Vector2D

HUMANOID_SEGMENTS = {
    "torso", "head",
    "left_upper_arm", "left_lower_arm", "left_hand",
    "right_upper_arm", "right_lower_arm", "right_hand",
    "left_upper_leg", "left_lower_leg", "left_foot",
    "right_upper_leg", "right_lower_leg", "right_foot",
}


def test_build_applies_specs_and_connections():
    body = (
        BodyBuilder()
        .set_base_position(Vector2D(10.0, 20.0))
        .set_ground_level(50.0)
        .set_contact_threshold(2.0)
        .add_segment("a", 10.0, 0.0)
        .add_segment("b", 5.0, math.pi / 2)
        .connect_segments("a", "b")
        .build()
    )
    assert body.base_position == Vector2D(10.0, 20.0)
    assert body.ground_level == 50.0
    assert body.contact_threshold == 2.0
    assert body.roots == ["a"]
    assert body.get_segment("b").start == Vector2D(20.0, 20.0)


def test_build_skips_invalid_connections(caplog):
    builder = BodyBuilder().add_segment("a", 10.0, 0.0).connect_segments("a", "ghost")
    with caplog.at_level(logging.WARNING):
        body = builder.build()
    assert len(body) == 1
    assert "ghost" in caplog.text


def test_repeated_spec_replaces_earlier_one():
    body = BodyBuilder().add_segment("a", 10.0, 0.0).add_segment("a", 30.0, 0.0).build()
    assert len(body) == 1
    assert body.get_segment("a").length == 30.0


def test_reset_keeps_base_position():
    builder = BodyBuilder().set_base_position(Vector2D(1.0, 2.0)).add_segment("a", 10.0, 0.0)
    builder.reset()
    body = builder.build()
    assert len(body) == 0
    assert body.base_position == Vector2D(1.0, 2.0)


def test_humanoid_preset_stands_on_the_ground():
    body = BodyBuilder().build_humanoid_body().build()
    assert set(body.segment_names) == HUMANOID_SEGMENTS
    assert body.roots == ["torso"]
    assert body.parent_of("head") == "torso"
    assert body.parent_of("left_hand") == "left_lower_arm"
    assert body.parent_of("right_foot") == "right_lower_leg"
    # Torso base plus both lower-leg ends and both ends of each foot.
    assert body.count_ground_contacts() == 7
    assert body.has_minimum_ground_contacts(2)
    assert body.get_segment("left_foot").end.y == pytest.approx(400.0)
    assert body.get_segment("right_foot").end.y == pytest.approx(400.0)
    assert body.get_segment("head").end == Vector2D(100.0, 305.0)


def test_humanoid_preset_angles_are_inside_their_ranges():
    body = BodyBuilder().build_humanoid_body().build()
    for name in body.segment_names:
        segment = body.get_segment(name)
        assert segment.clamp_angle(segment.angle) == pytest.approx(segment.angle)
    assert body.is_in_rest_pose()


def test_simple_preset():
    body = BodyBuilder().build_simple_body().build()
    assert len(body) == 5
    assert body.roots == ["torso"]
    assert body.get_segment("right_arm").angle == pytest.approx(-math.pi / 4)
    assert body.count_ground_contacts() == 3


def test_from_preset(caplog):
    assert set(PRESETS) == {"humanoid", "simple"}
    assert len(BodyBuilder.from_preset("simple").build()) == 5
    assert len(BodyBuilder.from_preset("HUMANOID").build()) == 14
    with caplog.at_level(logging.WARNING):
        body = BodyBuilder.from_preset("octopus").build()
    assert "octopus" in caplog.text
    assert len(body) == 14
