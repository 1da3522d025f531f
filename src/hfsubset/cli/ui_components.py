"""CLI UI components (Rich).

- Log records of the `hfsubset` logger are rendered through a Rich console as
  `HH:MM:SS hfsubset ==> message`.
- `NO_COLOR` (any non-empty value) disables ANSI styling.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import IO

from rich.console import Console
from rich.table import Table
from rich.text import Text

LOG_PREFIX = "hfsubset ==>"

_LEVEL_STYLES: dict[int, str] = {
    logging.DEBUG: "dim cyan",
    logging.INFO: "bold cyan",
    logging.WARNING: "bold yellow",
    logging.ERROR: "bold red",
    logging.CRITICAL: "bold red",
}


def color_disabled() -> bool:
    return bool(os.environ.get("NO_COLOR"))


def build_console(
    *, stderr: bool = False, file: IO[str] | None = None, force_terminal: bool | None = None
) -> Console:
    """Console honoring `NO_COLOR`: no color and no other ANSI styling."""

    disabled = color_disabled()
    return Console(
        stderr=stderr,
        file=file,
        force_terminal=force_terminal,
        color_system=None if disabled else "auto",
        no_color=disabled,
        highlight=False,
    )


class ConsoleLogHandler(logging.Handler):
    """Logging handler printing records through a Rich console."""

    def __init__(self, console: Console, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._console = console

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
            style = _LEVEL_STYLES.get(record.levelno, "bold cyan")
            line = Text.assemble((stamp, "dim"), " ", (LOG_PREFIX, style), " ", message)
            self._console.print(line, soft_wrap=True)
        except Exception:
            self.handleError(record)


def configure_logging(console: Console, *, quiet: bool = False, debug: bool = False) -> logging.Logger:
    """Route the `hfsubset` logger to `console`.

    `quiet` keeps errors only; otherwise `debug` lowers the level to DEBUG.
    """

    logger = logging.getLogger("hfsubset")
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleLogHandler):
            logger.removeHandler(handler)
    logger.addHandler(ConsoleLogHandler(console))
    logger.propagate = False

    if quiet:
        logger.setLevel(logging.ERROR)
    elif debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)
    return logger


def build_doctor_table() -> Table:
    """Rich table for the doctor command."""

    table = Table(title="hfsubset doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
