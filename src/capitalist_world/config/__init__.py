"""
Configuration models for the Capitalist World CLI.
"""

from .app_config import AppConfig, ClockConfig, GameConfig, TerminalConfig

__all__ = ["AppConfig", "ClockConfig", "GameConfig", "TerminalConfig"]
