"""
text_interface.py

Line-oriented menu loop around a Simulation. Input and output are injectable so the loop can
be driven from tests or other front ends.
"""

import logging
import time
from typing import Callable

from body_lines.simulation import Simulation, SimulationMode
from body_lines.utils.config import Config

logger = logging.getLogger(__name__)

INSTRUCTIONS = """
=== Body Lines Text Simulation ===
s - Execute a single step
a - Auto-execute all steps
r - Reset simulation
w - Switch to Walker scenario
b - Switch to Snowball scenario
h - Show this help
q - Quit
=================================="""


class TextSimulation:
    """Menu loop reading single-letter commands.

    Attributes:
        simulation (Simulation): Scenario driver being controlled.
        step_delay (float): Seconds slept between steps during auto-run.
        max_steps (int): Step cap for a single auto-run.
        running (bool): False once the user quits.
    """

    def __init__(
        self,
        simulation: Simulation,
        input_fn: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
        step_delay: float = Config.AUTO_STEP_DELAY,
        max_steps: int = Config.MAX_AUTO_STEPS,
    ):
        self.simulation = simulation
        self.input_fn = input_fn
        self.write = write
        self.step_delay = step_delay
        self.max_steps = max_steps
        self.running = False
        self.commands = {
            "s": self.execute_step,
            "a": self.auto_execute,
            "r": self.reset,
            "w": lambda: self.switch_mode(SimulationMode.WALKER),
            "b": lambda: self.switch_mode(SimulationMode.SNOWBALL),
            "h": self.show_instructions,
        }

    def run(self) -> None:
        """Reads commands until ``q`` or end of input."""
        self.running = True
        self.show_instructions()
        self.display_status()
        while self.running:
            try:
                command = self.input_fn("> ").strip().lower()
            except EOFError:
                break
            self.handle_command(command)
        self.running = False
        self.write("Simulation ended.")

    def handle_command(self, command: str) -> None:
        if command == "q":
            self.running = False
            return
        action = self.commands.get(command[:1])
        if action is None:
            logger.debug("Ignoring unknown command '%s'", command)
            self.write("Unknown command")
            return
        action()
        if command[:1] != "h":
            self.display_status()

    def execute_step(self) -> None:
        if self.simulation.is_complete():
            self.write("Sequence already complete")
            return
        success = self.simulation.step()
        self.write(f"Executed step: {'Success' if success else 'Failed'}")
        self._report_outcome()

    def auto_execute(self) -> None:
        self.write("Auto-executing sequence...")
        steps = 0
        while not self.simulation.is_complete() and steps < self.max_steps:
            self.simulation.step()
            steps += 1
            if self.step_delay > 0:
                time.sleep(self.step_delay)
        if not self.simulation.is_complete():
            self.write(f"Stopped after {steps} steps.")
        self._report_outcome()
        self.write("Auto-execution complete.")

    def reset(self) -> None:
        self.simulation.event_log.log_message("Simulation reset")
        self.simulation.reset()
        self.write("Simulation reset")

    def switch_mode(self, mode: SimulationMode) -> None:
        self.simulation.set_mode(mode)
        self.write(f"{mode.value.capitalize()} scenario initialized")

    def show_instructions(self) -> None:
        self.write(INSTRUCTIONS)

    def _report_outcome(self) -> None:
        status = self.simulation.status()
        if status.object_caught:
            self.write("Object caught successfully!")
        elif status.hit_target:
            self.write("Target hit!")
        elif status.hit_ground:
            self.write("Snowball hit the ground.")
        elif status.extra.get("throw_rejected"):
            self.write("Throw rejected: the target cannot be reached.")

    def display_status(self) -> None:
        status = self.simulation.status()
        lines = [
            "",
            "----- Current Status -----",
            f"Mode: {status.mode.capitalize()}",
            f"Target position: ({status.target_position.x:.2f}, {status.target_position.y:.2f})",
            f"Body position: ({status.body_position.x:.2f}, {status.body_position.y:.2f})",
        ]
        if status.mode == SimulationMode.WALKER.value:
            lines += [
                f"Segments: {status.segment_count}",
                f"Ground contacts: {status.ground_contacts}",
                f"Object caught: {'Yes' if status.object_caught else 'No'}",
            ]
        else:
            position = status.snowball_position
            lines += [
                f"Snowball position: ({position.x:.2f}, {position.y:.2f})",
                f"Snowball thrown: {'Yes' if status.snowball_active else 'No'}",
                f"Target hit: {'Yes' if status.hit_target else 'No'}",
            ]
        lines.append(f"Sequence complete: {'Yes' if status.sequence_complete else 'No'}")
        self.write("\n".join(lines))
