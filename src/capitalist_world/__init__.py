"""
Capitalist World CLI: a business simulation played at a terminal prompt,
with a live status line pinned below the input.
"""

__version__ = "0.1.0"
