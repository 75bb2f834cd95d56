"""Screen modules for the TUI."""
from __future__ import annotations

# Import all screen modules to register them with the router
from . import (
    help,
    main,
    review,
    settings,
)

__all__ = [
    "help",
    "main",
    "review",
    "settings",
]
