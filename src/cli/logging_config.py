"""Logging setup (Rich handler on stderr)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if isinstance(handler, RichHandler):
            return

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    root.addHandler(handler)

    for lib in ("httpx", "httpcore"):
        logging.getLogger(lib).setLevel(logging.WARNING)
