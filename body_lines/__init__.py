"""
body_lines Package

This package simulates an articulated stick figure built from named, connected, rotation-constrained
line segments, and drives it through two scripted behaviours. It encompasses several key modules:

  - kinematics: Vector2D and Circle primitives, constrained Segments, the Body segment forest and the
    BodyBuilder with its humanoid and simple presets.
  - strategies: The MovementStrategy contract and its implementations: a walker that walks toward an
    object, reaches for it and grabs it, and a thrower that launches a snowball along a ballistic arc.
  - simulation: The Simulation driver that activates a scenario and steps it.
  - text_interface / gui: A text menu loop and a pygame window around the Simulation.
  - utils: Configuration constants, scenario and .cfg loading, argument parsing, the event log and
    shared dataclasses.

Run ``body_lines --scenario walker`` (or ``--scenario snowball --mode gui``) to start a simulation.
"""
