from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%H:%M:%S"

# pyserial's own loggers are chatty at INFO while ports are probed
NOISY_LOGGERS = ("serial",)


def resolve_level(level: LogLevel | None = None) -> str:
    """Explicit level, then ``LOGLEVEL``, then ``DEBUG``; warnings only otherwise."""
    if level:
        return level.upper()
    if os.environ.get("LOGLEVEL"):
        return os.environ["LOGLEVEL"].upper()
    return "DEBUG" if os.environ.get("DEBUG") else "WARNING"


def setup_logging(level: LogLevel | None = None) -> None:
    resolved = resolve_level(level)

    # only our own loggers; command output goes through typer/rich on stdout
    coloredlogs.install(
        level=resolved,
        logger=logging.getLogger("raspimcu"),
        fmt=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
