"""Packaged scenario presets (``scenarios.json``) read by the command-line entry point."""
