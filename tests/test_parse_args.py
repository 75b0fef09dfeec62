import pytest

from body_lines.utils.config import Config
from body_lines.utils.parse_args import parse_args

SCENARIOS = {
    "walker": {"interface": "text", "simulation_type": "walker"},
    "gui": {"interface": "gui", "steps": 50},
}


def test_parse_args_defaults(monkeypatch):
    monkeypatch.setattr("sys.argv", ["program"])
    args = parse_args(SCENARIOS)
    assert args.scenario == "walker"
    assert args.mode == "text"
    assert args.steps == Config.MAX_AUTO_STEPS
    # Simulation settings are left unset so that scenario and config values apply.
    assert args.simulation_type is None
    assert args.walk_speed is None
    assert args.config is None
    assert args.log_file is None


def test_parse_args_scenario_defaults(monkeypatch):
    monkeypatch.setattr("sys.argv", ["program", "--scenario", "gui"])
    args = parse_args(SCENARIOS)
    assert args.mode == "gui"
    assert args.steps == 50


def test_parse_args_overrides():
    args = parse_args(
        SCENARIOS,
        ["--scenario", "gui", "--mode", "headless", "--simulation_type", "snowball", "--gravity", "4.5"],
    )
    assert args.mode == "headless"
    assert args.simulation_type == "snowball"
    assert args.gravity == 4.5


def test_parse_args_unknown_scenario():
    with pytest.raises(ValueError):
        parse_args(SCENARIOS, ["--scenario", "missing"])
