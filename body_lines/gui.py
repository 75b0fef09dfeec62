"""
BodyLinesGUI Module

This module provides the BodyLinesGUI class, which manages a pygame window to visualize a running
Simulation: the ground line, the target circle, the body segments, the snowball and its predicted
arc. Keyboard input switches scenarios, steps the simulation and toggles automatic stepping.
"""

import sys
import time

import pygame

from body_lines.simulation import Simulation, SimulationMode
from body_lines.utils.config import Config

# Colour constants
WHITE = (255, 255, 255)
LIGHT_BLUE = (128, 200, 255)
GREEN = (100, 200, 100)
BLUE = (0, 0, 255)
DARK_GREY = (50, 50, 50)
BLACK = (0, 0, 0)
ORANGE = (255, 165, 0)
RED = (220, 60, 60)


class BodyLinesGUI:
    """Manages a pygame window to visualize and control a Simulation.

    Keys: W walker scenario, S or B snowball scenario, Space single step, A toggle automatic
    stepping, R reset, Esc quit.

    Attributes:
        simulation (Simulation): Scenario driver being rendered.
        auto_mode (bool): Whether the simulation steps automatically.
        auto_step_interval (float): Seconds between automatic steps.
        screen (pygame.Surface): The main display surface.
        clock (pygame.time.Clock): Clock used for regulating frame rate.
        font (pygame.font.Font): Font used for rendering status text.
    """

    def __init__(self, simulation: Simulation, auto_step_interval: float = None):
        """Initializes the BodyLinesGUI.

        Args:
            simulation (Simulation): Scenario driver to render.
            auto_step_interval (float, optional): Seconds between automatic steps. Defaults to
                the simulation's own interval.
        """
        self.simulation = simulation
        self.auto_mode = False
        self.auto_step_interval = (
            auto_step_interval if auto_step_interval is not None else simulation.auto_step_interval
        )
        self._last_auto_step = 0.0
        self.running = True

        pygame.init()
        pygame.display.set_caption("Body Lines")
        self.screen = pygame.display.set_mode((Config.SCREEN_WIDTH, Config.SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 24)

    def run(self):
        """Renders frames until the window is closed or Esc is pressed."""
        while self.running:
            if self.auto_mode and not self.simulation.is_complete():
                now = time.monotonic()
                if now - self._last_auto_step >= self.auto_step_interval:
                    self.simulation.step()
                    self._last_auto_step = now
            self.render()
        pygame.quit()

    def render(self):
        """Handles pygame events, then draws the scene and regulates the frame rate."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                sys.exit(0)
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

        self.screen.fill(BLACK)
        self._draw_ground()
        self._draw_target()
        if self.simulation.mode is SimulationMode.SNOWBALL:
            self._draw_trajectory()
            self._draw_snowball()
        self._draw_body()
        self._draw_status_text()
        pygame.display.flip()
        self.clock.tick(Config.FPS)

    def handle_key(self, key: int):
        """Applies the action bound to a pygame key code.

        Args:
            key (int): Pygame key constant (e.g. ``pygame.K_SPACE``).
        """
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_w:
            self.auto_mode = False
            self.simulation.set_mode(SimulationMode.WALKER)
        elif key in (pygame.K_s, pygame.K_b):
            self.auto_mode = False
            self.simulation.set_mode(SimulationMode.SNOWBALL)
        elif key == pygame.K_SPACE:
            self.simulation.step()
        elif key == pygame.K_a:
            self.auto_mode = not self.auto_mode
        elif key == pygame.K_r:
            self.auto_mode = False
            self.simulation.reset()

    def _draw_ground(self):
        ground_y = self.world_to_screen_y(self.simulation.ground_level)
        ground_rect = pygame.Rect(0, ground_y, Config.SCREEN_WIDTH, max(0, Config.SCREEN_HEIGHT - ground_y))
        pygame.draw.rect(self.screen, DARK_GREY, ground_rect)
        pygame.draw.line(self.screen, GREEN, (0, ground_y), (Config.SCREEN_WIDTH, ground_y), 2)

    def _draw_target(self):
        target = self.simulation.target
        colour = ORANGE
        status = self.simulation.status()
        if status.object_caught or status.hit_target:
            colour = GREEN
        pygame.draw.circle(
            self.screen,
            colour,
            self.world_to_screen(*target.center),
            max(1, int(target.radius * Config.RENDER_SCALE)),
            2,
        )

    def _draw_body(self):
        """Draws every segment; end-effectors in a lighter colour, joints as small dots."""
        geometry = self.simulation.get_geometry()
        for line in geometry.lines:
            start = self.world_to_screen(*line.start)
            end = self.world_to_screen(*line.end)
            colour = LIGHT_BLUE if line.is_leaf else WHITE
            pygame.draw.line(self.screen, colour, start, end, 3)
            pygame.draw.circle(self.screen, WHITE, start, 3)
        pygame.draw.circle(self.screen, RED, self.world_to_screen(*geometry.base_position), 4)

    def _draw_snowball(self):
        projectile = self.simulation.get_projectile()
        status = self.simulation.status()
        if projectile is None or not (status.snowball_active or status.hit_target or status.hit_ground):
            return
        pygame.draw.circle(
            self.screen, WHITE, self.world_to_screen(*projectile.center), max(1, int(projectile.radius))
        )

    def _draw_trajectory(self):
        """Draws the predicted snowball arc as a dotted polyline above the ground."""
        points = self.simulation.predict_trajectory()
        for x, y in points[::3]:
            if y > self.simulation.ground_level:
                break
            pygame.draw.circle(self.screen, LIGHT_BLUE, self.world_to_screen(x, y), 1)

    def _draw_status_text(self):
        status = self.simulation.status()
        text = f"Mode={status.mode}, state={status.strategy_state}, steps={self.simulation.steps_taken}"
        if status.mode == SimulationMode.WALKER.value:
            text += f", contacts={status.ground_contacts}, caught={status.object_caught}"
        else:
            text += f", hit_target={status.hit_target}, hit_ground={status.hit_ground}"
        if self.auto_mode:
            text += ", AUTO"
        text_surface = self.font.render(text, True, WHITE)
        self.screen.blit(text_surface, (10, 10))
        help_surface = self.font.render("W walker | S/B snowball | Space step | A auto | R reset | Esc quit", True, WHITE)
        self.screen.blit(help_surface, (10, Config.SCREEN_HEIGHT - 30))

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        """Converts world coordinates to screen coordinates.

        World coordinates already follow screen conventions (+y down), so the conversion is
        a uniform scale.

        Args:
            x (float): World x-coordinate.
            y (float): World y-coordinate.

        Returns:
            tuple: A tuple (screen_x, screen_y) representing the screen coordinates.
        """
        return self.world_to_screen_x(x), self.world_to_screen_y(y)

    def world_to_screen_x(self, x: float) -> int:
        return int(x * Config.RENDER_SCALE)

    def world_to_screen_y(self, y: float) -> int:
        return int(y * Config.RENDER_SCALE)
