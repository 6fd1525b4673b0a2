"""Logging setup for entry points (CLI, scripts)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | None = None, *, console: Console | None = None) -> None:
    """Configure a single Rich console handler via ``logging.basicConfig``.

    Unknown level names fall back to WARNING.
    """

    level_name = (level or "WARNING").upper()
    level_value = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level_value, int):
        level_value = logging.WARNING

    logging.basicConfig(
        level=level_value,
        format="%(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(level_value, logging.WARNING))
