"""Diagnostics helpers."""

from .simulator import GameSimulator, SimulationResult

__all__ = ["GameSimulator", "SimulationResult"]
