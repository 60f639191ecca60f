"""
Application configuration.

Defaults live on the pydantic models. ``AppConfig.from_env`` layers a YAML
file (``CAPITALIST_CONFIG``) and ``CAPITALIST_*`` environment variables,
loaded through python-dotenv, on top of them.

Environment Variables:
- CAPITALIST_FORCE_ANSI: Non-empty forces cursor positioning on
- CAPITALIST_DISABLE_ANSI: Non-empty forces plain output (wins over force)
- CAPITALIST_TICK_INTERVAL: Seconds between clock ticks
- CAPITALIST_LOG_FILE: Write logs to this file
- CAPITALIST_CONFIG: Path to a YAML config file
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..simulation.speed import Speed

ENV_PREFIX = "CAPITALIST_"


class TerminalConfig(BaseModel):
    """Terminal capability overrides."""

    force_ansi: bool = False
    disable_ansi: bool = False


class ClockConfig(BaseModel):
    """Simulation clock parameters."""

    tick_interval_s: float = Field(default=0.1, gt=0)
    reference_date: datetime = datetime(2000, 1, 1)
    initial_speed: Speed = Speed.X0


class GameConfig(BaseModel):
    """Values shown on the status line until a game supplies its own."""

    starting_balance: float = 10_000_000.0
    starting_profits: float = 0.0
    currency_symbol: str = "$"


class AppConfig(BaseModel):
    """Complete application configuration."""

    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    game: GameConfig = Field(default_factory=GameConfig)
    prompt_text: str = "capitalist> "
    log_file: Optional[Path] = None
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AppConfig":
        """Load config from a YAML file; a missing file yields defaults."""
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Load config from a ``.env`` file and the process environment.

        Args:
            environ: Mapping to read instead of ``os.environ`` (skips .env)

        Returns:
            Validated configuration
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        config_path = environ.get(f"{ENV_PREFIX}CONFIG")
        base = cls.from_yaml(config_path) if config_path else cls()
        data = base.model_dump()
        _apply_env_overrides(data, environ)
        return cls.model_validate(data)


def _flag(environ: Mapping[str, str], name: str) -> bool:
    """Presence flag: set when the variable exists and is non-empty."""
    return bool(environ.get(f"{ENV_PREFIX}{name}", ""))


def _apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> None:
    if _flag(environ, "FORCE_ANSI"):
        data["terminal"]["force_ansi"] = True
    if _flag(environ, "DISABLE_ANSI"):
        data["terminal"]["disable_ansi"] = True

    tick_interval = environ.get(f"{ENV_PREFIX}TICK_INTERVAL")
    if tick_interval:
        data["clock"]["tick_interval_s"] = tick_interval

    log_file = environ.get(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        data["log_file"] = log_file
