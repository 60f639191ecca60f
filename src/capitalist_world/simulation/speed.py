"""
Simulation speed levels.

Each level maps to a fixed number of simulated seconds per real second.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional


class Speed(IntEnum):
    """Selectable simulation speeds; X0 pauses the clock."""

    X0 = 0
    X1 = 1
    X2 = 2
    X3 = 3
    X4 = 4
    X5 = 5

    @property
    def simulated_seconds_per_real_second(self) -> float:
        return SPEED_PROFILE[self]

    @property
    def label(self) -> str:
        """Display form used in messages and the status line, e.g. ``x2``."""
        return f"x{self.value}"

    @property
    def is_paused(self) -> bool:
        return self is Speed.X0

    @classmethod
    def from_argument(cls, argument: str) -> Optional["Speed"]:
        """
        Parse user input such as ``2``, ``x2`` or `` X2 ``.

        Args:
            argument: Raw command argument

        Returns:
            The matching speed, or None if the input is not a valid level
        """
        text = argument.strip().lower()
        if text.startswith("x"):
            text = text[1:]
        if not text.isdigit():
            return None
        try:
            return cls(int(text))
        except ValueError:
            return None

    @classmethod
    def valid_options(cls) -> str:
        """Comma separated list of accepted levels for help messages."""
        return ", ".join(speed.label for speed in cls)


SPEED_PROFILE: Mapping[Speed, float] = MappingProxyType(
    {
        Speed.X0: 0.0,
        Speed.X1: 3_600.0,  # 24 real seconds per simulated day
        Speed.X2: 7_200.0,  # 12 real seconds per simulated day
        Speed.X3: 21_600.0,  # 4 real seconds per simulated day
        Speed.X4: 86_400.0,  # 1 real second per simulated day
        Speed.X5: 432_000.0,  # 0.2 real seconds per simulated day
    }
)
