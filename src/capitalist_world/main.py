"""
Main entry point for the Capitalist World CLI.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .application import CLIApplication
from .config import AppConfig
from .config.app_config import ENV_PREFIX
from .simulation.speed import Speed
from .utils.logging_config import setup_logging
from .utils.ui.theme import THEME


def _speed_argument(value: str) -> Speed:
    import argparse

    speed = Speed.from_argument(value)
    if speed is None:
        raise argparse.ArgumentTypeError(
            f"invalid speed '{value}' (valid: {Speed.valid_options()})"
        )
    return speed


def load_config(config_path: Optional[Path]) -> AppConfig:
    """
    Build the configuration from the environment and an optional YAML file.

    Args:
        config_path: Explicit ``--config`` path, taking precedence over
            ``CAPITALIST_CONFIG``

    Returns:
        Validated configuration
    """
    if config_path is None:
        return AppConfig.from_env()

    load_dotenv()
    environ = dict(os.environ)
    environ[f"{ENV_PREFIX}CONFIG"] = str(config_path)
    return AppConfig.from_env(environ)


def cli(argv: Optional[List[str]] = None) -> int:
    """CLI entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Capitalist World - business simulation in your terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details (requires --log-file to be visible)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to this file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file",
    )
    parser.add_argument(
        "--force-ansi",
        action="store_true",
        help="Pin the status line even if stdout does not look like a terminal",
    )
    parser.add_argument(
        "--no-ansi",
        action="store_true",
        help="Use plain sequential output without cursor positioning",
    )
    parser.add_argument(
        "--speed",
        type=_speed_argument,
        default=None,
        help=f"Initial simulation speed ({Speed.valid_options()})",
    )

    args = parser.parse_args(argv)

    if args.force_ansi and args.no_ansi:
        parser.error("Cannot use both --force-ansi and --no-ansi")

    console = Console(stderr=True)
    try:
        config = load_config(args.config)
    except (ValidationError, OSError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[{THEME['error']}]Invalid configuration:[/] {escape(str(exc))}")
        return 2

    updates = {}
    if args.verbose:
        updates["verbose"] = True
    if args.log_file is not None:
        updates["log_file"] = args.log_file
    if updates:
        config = config.model_copy(update=updates)
    if args.force_ansi:
        config.terminal.force_ansi = True
    if args.no_ansi:
        config.terminal.disable_ansi = True
    if args.speed is not None:
        config.clock.initial_speed = args.speed

    setup_logging(verbose=config.verbose, log_file=config.log_file)

    app = CLIApplication(config)
    try:
        return app.run()
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(cli())
