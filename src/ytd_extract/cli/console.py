"""Shared Rich consoles for the CLI layer.

Diagnostics and errors go to stderr; command results (track tables) go
to stdout so they can be piped.
"""

from __future__ import annotations

from rich.console import Console

console = Console(stderr=True)
"""Console for messages, warnings and errors."""

output = Console()
"""Console for command results."""
