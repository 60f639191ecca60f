"""
UI Theme configuration: colors and icons for scrolling output.
"""

from typing import Dict

THEME: Dict[str, str] = {
    # Text Types
    "text": "#e6edf3",  # Main text
    "muted": "#7d8590",  # Muted text
    "error": "#f85149",  # Error red
    "success": "#3fb950",  # Green
    # Commands
    "command": "#58a6ff",  # Command names in help
    "speed": "#ffaa00",  # Speed values
    # UI Elements
    "header": "#ffffff",
}

ICONS: Dict[str, str] = {
    "success": "✓",
    "error": "✗",
}
