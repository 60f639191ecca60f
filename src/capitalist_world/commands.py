"""
Command parsing for the interactive prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

SPEED_SHORTCUT_PREFIX = ":"


class CommandIdentifier(Enum):
    """Commands understood by the prompt."""

    HELP = "help"
    SPEED = "speed"
    EXIT = "exit"


COMMAND_ALIASES: Dict[CommandIdentifier, Tuple[str, ...]] = {
    CommandIdentifier.HELP: ("help", "ayuda", "?"),
    CommandIdentifier.SPEED: ("speed", "velocidad"),
    CommandIdentifier.EXIT: ("exit", "quit", "salir", "q"),
}

COMMAND_DESCRIPTIONS: Dict[CommandIdentifier, str] = {
    CommandIdentifier.HELP: "Show this list of commands",
    CommandIdentifier.SPEED: "Set the simulation speed (0-5 or x0-x5, also :<level>)",
    CommandIdentifier.EXIT: "Leave the game",
}


@dataclass(frozen=True)
class ParsedCommand:
    """A line of input split into command and argument."""

    identifier: Optional[CommandIdentifier]
    keyword: str
    argument: Optional[str] = None


def identify(keyword: str) -> Optional[CommandIdentifier]:
    """Return the command whose aliases contain the keyword, ignoring case."""
    normalized = keyword.lower()
    for identifier, aliases in COMMAND_ALIASES.items():
        if normalized in aliases:
            return identifier
    return None


def parse_command(line: str) -> Optional[ParsedCommand]:
    """
    Parse a raw input line.

    ``:<level>`` is shorthand for ``speed <level>``.

    Args:
        line: Raw line read from the prompt

    Returns:
        The parsed command, or None for a blank line
    """
    text = line.strip()
    if not text:
        return None

    if text.startswith(SPEED_SHORTCUT_PREFIX):
        argument = text[len(SPEED_SHORTCUT_PREFIX):].strip()
        return ParsedCommand(
            identifier=CommandIdentifier.SPEED,
            keyword=SPEED_SHORTCUT_PREFIX,
            argument=argument or None,
        )

    parts = text.split(maxsplit=1)
    keyword = parts[0]
    argument = parts[1].strip() if len(parts) > 1 else None
    return ParsedCommand(
        identifier=identify(keyword),
        keyword=keyword,
        argument=argument or None,
    )
