"""changedir - directory bookmarks and recent-directory history for the shell.

This package provides the core functionality for the `changedir` command-line
tool: a persisted bookmark list, a bounded visit history, and single-keystroke
selection across both.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
