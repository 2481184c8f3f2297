"""Logging setup for the CLI.

Library modules only call `logging.getLogger(__name__)`; handlers are
attached here, once, when a CLI command starts.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "keyops-rich"


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> None:
    """Attach a `RichHandler` to the root logger (idempotent)."""

    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    root.addHandler(handler)
