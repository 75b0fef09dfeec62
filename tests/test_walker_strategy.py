import math

import pytest

from body_lines.kinematics.builder import BodyBuilder
from body_lines.kinematics.circle import Circle
from body_lines.kinematics.vector import Vector2D
from body_lines.strategies.walker_strategy import WalkerState, WalkerStrategy
from body_lines.utils.dataclasses import MoveType
from body_lines.utils.event_log import BaseEventLog


class RecordingEventLog(BaseEventLog):
    def __init__(self):
        self.messages = []
        self.warnings = []

    def log_message(self, text):
        self.messages.append(text)

    def log_warning(self, text):
        self.warnings.append(text)


@pytest.fixture
def catching_body():
    # A short torso with three long arms hanging down, plus a foot so the body stands.
    builder = (
        BodyBuilder()
        .set_base_position(Vector2D(0.0, 0.0))
        .set_ground_level(0.0)
        .add_segment("torso", 10.0, -math.pi / 2)
        .add_segment("foot", 10.0, 0.0)
    )
    for name in ("a", "b", "c"):
        builder.add_segment(name, 50.0, math.pi / 2).connect_segments("torso", name)
    return builder.build()


@pytest.fixture
def catching_walker(catching_body):
    target = Circle(Vector2D(60.0, -10.0), 5.0)
    return WalkerStrategy(catching_body, target, walk_speed=5.0, reach_distance=50.0, reach_segments=["a", "b", "c"])


def move_types(strategy):
    return [move.type for move in strategy.pending_moves]


def test_walk_step_count_for_default_scenario():
    body = BodyBuilder().build_humanoid_body().build()
    strategy = WalkerStrategy(body, Circle(Vector2D(500.0, 350.0), 20.0), walk_speed=5.0, reach_distance=50.0)
    strategy.plan_sequence()
    walks = [move for move in strategy.pending_moves if move.type is MoveType.WALK]
    assert len(walks) == 70
    assert walks[0].position == Vector2D(105.0, 400.0)
    assert walks[-1].position == Vector2D(450.0, 400.0)
    assert move_types(strategy)[70:] == [MoveType.REACH] * 5 + [MoveType.GRAB]


def test_reach_rotations_are_measured_at_the_final_waypoint():
    body = BodyBuilder().build_humanoid_body().build()
    strategy = WalkerStrategy(body, Circle(Vector2D(500.0, 350.0), 20.0), walk_speed=5.0, reach_distance=50.0)
    strategy.plan_sequence()
    reaches = [move for move in strategy.pending_moves if move.type is MoveType.REACH]
    assert [move.segment_name for move in reaches] == [
        "head", "left_lower_arm", "right_lower_arm", "left_hand", "right_hand"
    ]
    # The neck sits at (450, 340) once walking is done, not at (100, 340) where planning starts.
    assert reaches[0].rotation == pytest.approx(math.atan2(10.0, 50.0) + math.pi / 2)
    assert reaches[2].rotation == pytest.approx(math.atan2(-30.0, 50.0))
    # Each hand is already lined up by its forearm, so it turns by the same amount.
    assert reaches[3].rotation == pytest.approx(reaches[1].rotation)
    assert reaches[4].rotation == pytest.approx(reaches[2].rotation)
    # The body itself is untouched until the moves execute.
    assert body.is_in_rest_pose()
    assert body.base_position == Vector2D(100.0, 400.0)


def test_final_walk_move_is_clamped_to_remainder():
    body = BodyBuilder().build_humanoid_body().build()
    strategy = WalkerStrategy(body, Circle(Vector2D(412.0, 350.0), 20.0), walk_speed=5.0, reach_distance=50.0)
    strategy.plan_sequence()
    walks = [move for move in strategy.pending_moves if move.type is MoveType.WALK]
    # 262 units to cover: 52 full steps and one 2-unit step.
    assert len(walks) == 53
    assert walks[-1].position == Vector2D(362.0, 400.0)


def test_walk_toward_target_on_the_left():
    body = BodyBuilder().set_base_position(Vector2D(300.0, 400.0)).build_humanoid_body().build()
    strategy = WalkerStrategy(body, Circle(Vector2D(100.0, 350.0), 20.0), walk_speed=10.0, reach_distance=50.0)
    strategy.plan_sequence()
    walks = [move for move in strategy.pending_moves if move.type is MoveType.WALK]
    assert len(walks) == 15
    assert walks[-1].position == Vector2D(150.0, 400.0)


def test_no_walk_when_already_close(catching_body):
    strategy = WalkerStrategy(catching_body, Circle(Vector2D(30.0, -10.0), 5.0), reach_segments=["a"])
    strategy.plan_sequence()
    assert move_types(strategy) == [MoveType.REACH, MoveType.GRAB]


def test_non_positive_walk_speed_plans_no_walks(catching_body):
    log = RecordingEventLog()
    strategy = WalkerStrategy(
        catching_body, Circle(Vector2D(200.0, -10.0), 5.0), walk_speed=0.0, reach_segments=["a"], event_log=log
    )
    strategy.plan_sequence()
    assert MoveType.WALK not in move_types(strategy)
    assert log.warnings


def test_catch_sequence_succeeds(catching_walker):
    catching_walker.plan_sequence()
    assert move_types(catching_walker) == [MoveType.WALK] * 2 + [MoveType.REACH] * 3 + [MoveType.GRAB]
    for move in catching_walker.pending_moves[2:5]:
        assert move.rotation == pytest.approx(-math.pi / 2)

    results = []
    while not catching_walker.is_sequence_complete():
        results.append(catching_walker.execute_next_move())
    assert results == [True] * 6
    assert catching_walker.object_caught
    assert catching_walker.body.base_position == Vector2D(10.0, 0.0)
    assert catching_walker.body.get_segment("a").end == Vector2D(60.0, -10.0)
    assert catching_walker.state is WalkerState.DONE


def test_state_follows_the_plan(catching_walker):
    assert catching_walker.state is WalkerState.PLANNING
    catching_walker.plan_sequence()
    assert catching_walker.state is WalkerState.WALKING
    catching_walker.execute_next_move()
    catching_walker.execute_next_move()
    assert catching_walker.state is WalkerState.REACHING
    for _ in range(3):
        catching_walker.execute_next_move()
    assert catching_walker.state is WalkerState.GRABBING
    catching_walker.execute_next_move()
    assert catching_walker.state is WalkerState.DONE
    assert catching_walker.status_flags() == {"object_caught": True, "state": "done", "pending_moves": 0}


def test_empty_queue_returns_false(catching_walker):
    assert not catching_walker.execute_next_move()
    catching_walker.plan_sequence()
    while not catching_walker.is_sequence_complete():
        catching_walker.execute_next_move()
    assert not catching_walker.execute_next_move()


def test_grab_fails_when_too_few_leaves_touch(catching_body):
    strategy = WalkerStrategy(
        catching_body, Circle(Vector2D(60.0, -10.0), 5.0), reach_distance=50.0, reach_segments=["a", "b"]
    )
    strategy.plan_sequence()
    results = [strategy.execute_next_move() for _ in range(len(strategy.pending_moves))]
    assert results[-1] is False
    assert not strategy.object_caught
    assert strategy.is_sequence_complete()


def test_moves_refused_without_ground_contact():
    body = (
        BodyBuilder()
        .set_base_position(Vector2D(0.0, 0.0))
        .set_ground_level(100.0)
        .add_segment("arm", 10.0, 0.0)
        .build()
    )
    log = RecordingEventLog()
    strategy = WalkerStrategy(body, Circle(Vector2D(200.0, 0.0), 5.0), reach_segments=["arm"], event_log=log)
    strategy.plan_sequence()
    pending = len(strategy.pending_moves)
    assert not strategy.execute_next_move()
    # The failed move is consumed and the body does not move.
    assert len(strategy.pending_moves) == pending - 1
    assert body.base_position == Vector2D(0.0, 0.0)
    assert "Cannot move - insufficient ground contacts" in log.warnings


def test_missing_reach_segment_fails_at_execution(catching_body):
    strategy = WalkerStrategy(catching_body, Circle(Vector2D(30.0, -10.0), 5.0), reach_segments=["ghost"])
    strategy.plan_sequence()
    reach = strategy.pending_moves[0]
    assert reach.type is MoveType.REACH
    assert reach.segment_name == "ghost"
    assert reach.rotation == 0.0
    assert not strategy.execute_next_move()


def test_replanning_from_a_moved_pose_resets_first(catching_walker):
    catching_walker.body.rotate_segment("a", 1.0)
    catching_walker.plan_sequence()
    assert move_types(catching_walker)[0] is MoveType.RESET_POSE
    assert catching_walker.execute_next_move()
    assert catching_walker.body.is_in_rest_pose()
    while not catching_walker.is_sequence_complete():
        catching_walker.execute_next_move()
    assert catching_walker.object_caught


def test_plan_discards_previous_progress(catching_walker):
    catching_walker.plan_sequence()
    catching_walker.execute_next_move()
    catching_walker.plan_sequence()
    # One 5-unit step was already taken, so only one walk move remains.
    assert move_types(catching_walker) == [MoveType.WALK] + [MoveType.REACH] * 3 + [MoveType.GRAB]
    assert catching_walker.move_index == 0
    assert not catching_walker.object_caught


def test_progress_is_logged(catching_walker):
    log = RecordingEventLog()
    catching_walker.enable_logging(log)
    catching_walker.plan_sequence()
    catching_walker.execute_next_move()
    assert "Planning catch sequence" in log.messages
    assert "Total planned moves: 6" in log.messages
    assert "Completed move 1 of 6" in log.messages
