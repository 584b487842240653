"""Core shared infrastructure for changedir.

This package contains:
    - config: Application configuration management
    - console: Rich console output and logging
    - result: Result type and error hierarchy
    - store: Bookmark and history persistence
    - selector: Single-character addressing over the unified list
    - sink: Hand-off of the chosen directory to the shell
    - nav: The Navigator tying them together
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
