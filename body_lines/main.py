#!/usr/bin/env python3
"""
main.py

This is the main entry point for body_lines, an articulated stick-figure simulation.
It loads scenario defaults, parses command-line arguments, layers an optional key=value
configuration file over the scenario, and runs the simulation through the text menu,
the pygame GUI or a headless auto-run.
"""
import sys
import os
import importlib
import importlib.resources
import logging

from body_lines import scenarios
from body_lines.simulation import Simulation
from body_lines.utils.event_log import SimulationEventLog
from body_lines.utils.helpers import load_config_file, load_scenarios, merge_settings
from body_lines.utils.parse_args import parse_args

logger = logging.getLogger(__name__)

# Scenario entries that configure the driver rather than the simulation.
INTERFACE_KEYS = ("interface", "steps")


def main(argv=None):
    """Main entry point for body_lines.

    The function performs the following steps:
      1. Loads scenario defaults from the packaged JSON file.
      2. Parses command-line arguments using the scenario defaults.
      3. Merges scenario settings, the optional configuration file and CLI overrides.
      4. Builds the Simulation with an event log and runs the requested interface.

    Args:
        argv (list, optional): Arguments to parse instead of ``sys.argv[1:]``.

    Raises:
        SystemExit: If scenarios, the configuration file or the arguments cannot be loaded.
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s: %(message)s", stream=sys.stdout)
    logger.info("body_lines started in %s", os.getcwd())

    # --- Scenario and Argument Parsing ---
    try:
        scenario_list = load_scenarios(importlib.resources.files(scenarios) / "scenarios.json")
    except RuntimeError:
        logger.fatal("Error loading scenarios", exc_info=True)
        sys.exit(1)

    try:
        args = parse_args(scenario_list, argv)
    except (ValueError, KeyError):
        logger.fatal("Error parsing arguments", exc_info=True)
        sys.exit(1)

    scenario_settings = {
        key: value for key, value in scenario_list[args.scenario].items() if key not in INTERFACE_KEYS
    }
    del scenario_list

    config_settings = {}
    if args.config:
        try:
            config_settings = load_config_file(args.config)
        except RuntimeError:
            logger.fatal("Error loading configuration file", exc_info=True)
            sys.exit(1)
        logger.info("Loaded configuration from %s", args.config)

    cli_settings = {
        "simulation_type": args.simulation_type,
        "body_preset": args.body_preset,
        "walk_speed": args.walk_speed,
        "gravity": args.gravity,
        "auto_step_interval": args.auto_step_interval,
    }
    settings = merge_settings(scenario_settings, config_settings, cli_settings)

    # --- Simulation Setup ---
    event_log = SimulationEventLog(args.log_file)
    simulation = Simulation(event_log=event_log, **settings)
    event_log.log_message("Simulation started")

    try:
        if args.mode == "gui":
            # Import GUI only if needed.
            BodyLinesGUI = importlib.import_module("body_lines.gui").BodyLinesGUI
            BodyLinesGUI(simulation).run()
        elif args.mode == "text":
            from body_lines.text_interface import TextSimulation

            TextSimulation(simulation, step_delay=simulation.auto_step_interval, max_steps=args.steps).run()
        else:
            logger.info("Running in headless mode for at most %d steps", args.steps)
            status = simulation.run(args.steps)
            logger.info(
                "Finished after %d steps: complete=%s, caught=%s, hit_target=%s",
                simulation.steps_taken,
                status.sequence_complete,
                status.object_caught,
                status.hit_target,
            )
    except KeyboardInterrupt:
        logger.warning("Simulation interrupted.")
    finally:
        event_log.log_message("Simulation ended")
        simulation.close()


if __name__ == "__main__":
    main()
