import importlib.resources

import numpy as np
import pytest

from body_lines import scenarios
from body_lines.kinematics.vector import Vector2D
from body_lines.simulation import Simulation, SimulationMode
from body_lines.utils.helpers import load_scenarios


def test_default_walker_status():
    simulation = Simulation()
    status = simulation.status()
    assert simulation.mode is SimulationMode.WALKER
    assert status.mode == "walker"
    assert status.segment_count == 14
    assert status.ground_contacts == 7
    assert status.body_position == Vector2D(100.0, 400.0)
    assert status.target_position == Vector2D(500.0, 350.0)
    assert status.object_caught is False
    assert status.hit_target is None
    # 70 walks, 5 reaches and the grab.
    assert status.extra["pending_moves"] == 76
    assert status.last_step_succeeded is None


def test_walker_run_completes():
    simulation = Simulation()
    assert simulation.step()
    assert simulation.status().body_position == Vector2D(105.0, 400.0)
    status = simulation.run()
    assert status.sequence_complete
    assert status.object_caught is True
    assert status.body_position == Vector2D(450.0, 400.0)
    assert simulation.steps_taken == 76
    assert not simulation.step()
    assert len(simulation.get_segment_lines()) == 14


def test_default_walker_catches_object():
    simulation = Simulation()
    status = simulation.run()
    assert status.object_caught is True
    touching = simulation.body.get_segments_touching_object(simulation.target)
    assert touching == ["head", "left_hand", "right_hand"]
    assert simulation.body.count_ground_contacts() == 7


@pytest.mark.parametrize("scenario", ["walker", "simple_walker", "gui"])
def test_packaged_walker_scenarios_catch_object(scenario):
    scenario_list = load_scenarios(importlib.resources.files(scenarios) / "scenarios.json")
    settings = {key: value for key, value in scenario_list[scenario].items() if key not in ("interface", "steps")}
    status = Simulation(**settings).run()
    assert status.sequence_complete
    assert status.object_caught is True


def test_simple_preset_catches_with_arms_and_leg():
    simulation = Simulation(body_preset="simple")
    status = simulation.run()
    assert status.object_caught is True
    assert simulation.body.get_segments_touching_object(simulation.target) == ["left_arm", "right_arm", "right_leg"]


def test_preset_name_case_selects_matching_reach_segments():
    simulation = Simulation(body_preset="Simple")
    assert len(simulation.body) == 5
    assert simulation.strategy.reach_segments == ["left_arm", "right_arm", "right_leg"]
    assert simulation.run().object_caught is True


def test_snowball_scenario_hits_target():
    simulation = Simulation(simulation_type="snowball")
    assert simulation.mode is SimulationMode.SNOWBALL
    assert simulation.target.center == Vector2D(400.0, 300.0)
    status = simulation.run()
    assert status.hit_target
    assert not status.hit_ground
    assert status.sequence_complete
    # One throw plus 72 flight updates.
    assert simulation.steps_taken == 73
    assert not simulation.step()


def test_set_mode_and_reset_rebuild_the_body():
    simulation = Simulation()
    for _ in range(5):
        simulation.step()
    assert simulation.body.base_position == Vector2D(125.0, 400.0)
    old_body = simulation.body
    simulation.reset()
    assert simulation.body is not old_body
    assert simulation.body.base_position == Vector2D(100.0, 400.0)
    assert simulation.steps_taken == 0

    simulation.set_mode(SimulationMode.SNOWBALL)
    assert simulation.status().snowball_active is False
    simulation.set_mode("walker")
    assert simulation.mode is SimulationMode.WALKER


def test_unknown_simulation_type_falls_back_to_walker():
    simulation = Simulation(simulation_type="juggling")
    assert simulation.mode is SimulationMode.WALKER


def test_settings_override_defaults():
    simulation = Simulation(
        body_preset="simple", body_x=50.0, body_y=300.0, ground_level=300.0, target_x=200.0, walk_speed=10.0
    )
    assert len(simulation.body) == 5
    assert simulation.body.base_position == Vector2D(50.0, 300.0)
    assert simulation.strategy.reach_segments == ["left_arm", "right_arm", "right_leg"]
    # 150 - 50 = 100 units of walking at 10 per move, three reaches and the grab.
    assert simulation.status().extra["pending_moves"] == 14


def test_geometry_and_trajectory_queries():
    simulation = Simulation()
    geometry = simulation.get_geometry()
    assert len(geometry.lines) == 14
    assert simulation.predict_trajectory().shape == (0, 2)
    assert simulation.get_projectile() is None

    simulation.set_mode(SimulationMode.SNOWBALL)
    trajectory = simulation.predict_trajectory(10)
    assert trajectory.shape == (11, 2)
    np.testing.assert_allclose(trajectory[0], [100.0, 350.0])
    assert simulation.get_projectile() is not None


def test_rejected_throw_is_reported():
    simulation = Simulation(simulation_type="snowball", snowball_target_x=20.0)
    assert not simulation.step()
    status = simulation.status()
    assert status.extra["throw_rejected"]
    assert status.sequence_complete
    assert status.last_step_succeeded is False
