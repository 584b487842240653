"""CLI command handlers for changedir.

    - nav: bookmark, history and movement handlers behind each flag
"""

from __future__ import annotations

from . import nav

__all__ = ["nav"]
