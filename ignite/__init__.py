"""Ignite — guided project scaffolding wizard."""

__version__ = "0.1.0"
