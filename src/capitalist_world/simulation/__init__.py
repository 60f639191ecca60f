"""
Simulated time: speed levels and the real-time driven clock.
"""

from .clock import SimulationClock, SimulationClockObserver
from .speed import SPEED_PROFILE, Speed

__all__ = ["SPEED_PROFILE", "SimulationClock", "SimulationClockObserver", "Speed"]
