"""
Interactive application loop.

Wires one clock, one renderer and one status line together and runs the
prompt: paint the frame, read a line, tear the frame down while the command
prints its output, repeat.
"""

from __future__ import annotations

import atexit
import logging
import sys
from typing import Optional, TextIO

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .commands import (
    COMMAND_ALIASES,
    COMMAND_DESCRIPTIONS,
    SPEED_SHORTCUT_PREFIX,
    CommandIdentifier,
    ParsedCommand,
    parse_command,
)
from .config import AppConfig
from .simulation.clock import SimulationClock
from .simulation.speed import Speed
from .utils.threading.callback_queue import SerialCallbackQueue
from .utils.ui.core import FrameRenderer
from .utils.ui.formatters import format_balance
from .utils.ui.status_line import PromptSnapshot, StatusLine
from .utils.ui.theme import ICONS, THEME

logger = logging.getLogger(__name__)


class CLIApplication:
    """Prompt loop with a live status line."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        stdin: Optional[TextIO] = None,
        renderer: Optional[FrameRenderer] = None,
        clock: Optional[SimulationClock] = None,
        callback_queue: Optional[SerialCallbackQueue] = None,
    ) -> None:
        self.config = config or AppConfig()
        self._stdin = stdin if stdin is not None else sys.stdin

        self.callback_queue = callback_queue or SerialCallbackQueue("prompt-render")
        self.renderer = renderer or FrameRenderer(
            force_ansi=self.config.terminal.force_ansi,
            disable_ansi=self.config.terminal.disable_ansi,
        )
        self.clock = clock or SimulationClock(
            reference_time=self.config.clock.reference_date,
            tick_interval=self.config.clock.tick_interval_s,
            callback_queue=self.callback_queue,
            initial_speed=self.config.clock.initial_speed,
        )

        game = self.config.game
        self.status_line = StatusLine(
            self.clock,
            self.renderer,
            self.callback_queue,
            PromptSnapshot(
                prompt_text=self.config.prompt_text,
                balance_value=format_balance(
                    game.starting_balance, game.currency_symbol
                ),
                profits_value=format_balance(
                    game.starting_profits, game.currency_symbol
                ),
            ),
        )
        self.clock.set_observer(self.status_line)
        self._shut_down = False

    def run(self) -> int:
        """
        Run the prompt until exit or end of input.

        Returns:
            Process exit code, 130 after an interrupt
        """
        if not self.renderer.configure():
            logger.warning("Continuing without control character suppression")
        atexit.register(self.renderer.restore)

        exit_code = 0
        try:
            self.renderer.append_text(
                f"[{THEME['header']}]Capitalist World CLI ready.[/] "
                f"[{THEME['muted']}]Type 'help' to see the available commands.[/]"
            )
            while True:
                self.status_line.render_prompt(synchronous=True)
                self.renderer.write_input_prompt(self.status_line.snapshot.prompt_text)
                line = self._read_line()
                if line is None:
                    self.renderer.append_text(
                        f"\n[{THEME['muted']}]Input ended. Exiting...[/]"
                    )
                    break

                self.renderer.suspend()
                self._echo(line)
                keep_running = self.handle_command(line)
                self.renderer.resume()
                if not keep_running:
                    break
        except KeyboardInterrupt:
            self.renderer.append_text(f"\n[{THEME['muted']}]Interrupted[/]")
            exit_code = 130
        finally:
            self.shutdown()
        return exit_code

    def shutdown(self) -> None:
        """Stop the clock, drain pending renders and restore the terminal."""
        if self._shut_down:
            return
        self._shut_down = True
        self.clock.stop()
        self.callback_queue.shutdown(wait=True)
        self.renderer.restore()

    def handle_command(self, line: str) -> bool:
        """
        Dispatch one line of input.

        Args:
            line: Raw input line

        Returns:
            False when the application should exit
        """
        command = parse_command(line)
        if command is None:
            return True

        if command.identifier is None:
            self._print_error(f"Unknown command: {escape(line.strip())}")
            return True

        if command.identifier is CommandIdentifier.HELP:
            self._print_help()
            return True
        if command.identifier is CommandIdentifier.SPEED:
            self._handle_speed(command)
            return True

        self.renderer.append_text(f"[{THEME['muted']}]Exiting...[/]")
        return False

    def _handle_speed(self, command: ParsedCommand) -> None:
        if command.argument is None:
            example = (
                f"{SPEED_SHORTCUT_PREFIX}{Speed.X2.label}"
                if command.keyword == SPEED_SHORTCUT_PREFIX
                else f"{escape(command.keyword)} {Speed.X2.label}"
            )
            self._print_error(f"Missing speed value. Example: {example}")
            return

        speed = Speed.from_argument(command.argument)
        if speed is None:
            self._print_error(
                f"Invalid speed '{escape(command.argument)}'. "
                f"Valid options: {Speed.valid_options()}"
            )
            return

        self.clock.set_speed(speed)
        self.renderer.append_text(
            f"[{THEME['success']}]{ICONS['success']}[/] Speed set to "
            f"[{THEME['speed']}]{speed.label}[/]"
        )

    def _print_help(self) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style=THEME["command"])
        table.add_column(style=THEME["text"])
        for identifier, aliases in COMMAND_ALIASES.items():
            table.add_row(", ".join(aliases), COMMAND_DESCRIPTIONS[identifier])

        self.renderer.append_text(f"[{THEME['header']}]Available commands:[/]")
        self.renderer.append(table)

    def _print_error(self, message: str) -> None:
        self.renderer.append_text(f"[{THEME['error']}]{ICONS['error']}[/] {message}")

    def _echo(self, line: str) -> None:
        # The frame (and the typed line with it) was just erased.
        if not self.renderer.ansi_capable:
            return
        self.renderer.append(
            Text(self.status_line.snapshot.prompt_text + line.rstrip("\r\n"))
        )

    def _read_line(self) -> Optional[str]:
        line = self._stdin.readline()
        if line == "":
            return None
        return line
