import argparse

from body_lines.utils.config import Config


def parse_args(scenarios: dict, argv=None) -> argparse.Namespace:
    """Parses command-line arguments using scenario defaults.

    A preliminary parse extracts the scenario name so that the chosen scenario (loaded from
    "scenarios.json") can supply the defaults of the interface options. Simulation settings
    (positions, gravity, speeds) default to ``None`` so that ``main`` can layer them over
    the scenario and an optional ``.cfg`` file.

    Args:
        scenarios (dict): Scenario configurations keyed by name. Each value may contain
            "interface", "simulation_type", "body_preset", "steps" and any simulation setting.
        argv (list, optional): Arguments to parse instead of ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed command-line arguments.

    Raises:
        ValueError: If the requested scenario is not in the scenarios dictionary.
    """
    # Preliminary parser to extract the scenario argument.
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--scenario",
        type=str,
        default="walker",
        help="Scenario name to use (as defined in scenarios.json)"
    )
    args, _ = parser.parse_known_args(argv)

    scenario_name = args.scenario
    if scenario_name not in scenarios:
        raise ValueError(f"Scenario '{scenario_name}' not found in scenario file (scenarios/scenarios.json).")

    scenario_defaults = scenarios[scenario_name]
    default_interface = scenario_defaults.get("interface", "text")
    default_steps = scenario_defaults.get("steps", Config.MAX_AUTO_STEPS)

    parser = argparse.ArgumentParser(
        description="Articulated body-lines simulation: walk-and-grab and snowball-throw scenarios"
    )
    parser.add_argument(
        "--scenario",
        type=str,
        default="walker",
        help="Scenario name to use (as defined in scenarios.json)"
    )
    parser.add_argument(
        "--mode",
        choices=["text", "gui", "headless"],
        default=default_interface,
        help="Interface to run (text|gui|headless)"
    )
    parser.add_argument(
        "--simulation_type",
        choices=["walker", "snowball"],
        default=None,
        help="Scenario behaviour (overrides scenario default)"
    )
    parser.add_argument(
        "--body_preset",
        type=str,
        default=None,
        help="Body preset to build (overrides scenario default)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a key=value configuration file applied over the scenario"
    )
    parser.add_argument(
        "--log_file",
        type=str,
        default=None,
        help=f"Append simulation events to this file (e.g. {Config.DEFAULT_LOG_FILE})"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=default_steps,
        help="Maximum number of steps for headless and auto-run modes"
    )
    parser.add_argument(
        "--walk_speed",
        type=float,
        default=None,
        help="Distance covered by one walk move (overrides scenario default)"
    )
    parser.add_argument(
        "--gravity",
        type=float,
        default=None,
        help="Gravity applied to the snowball (overrides scenario default)"
    )
    parser.add_argument(
        "--auto_step_interval",
        type=float,
        default=None,
        help="Seconds between automatic steps (overrides scenario default)"
    )
    return parser.parse_args(argv)
