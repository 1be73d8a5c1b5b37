"""
Task tracker logging setup.

Console logging for the API process:
- one handler on the root logger, one format for app and server logs
- app loggers (api.*, verticals.*, patterns.*, core.*) at the configured level
- uvicorn's own loggers pass through; other third-party noise only at WARNING+
"""
from __future__ import annotations

import logging
import sys

APP_LOGGER_PREFIXES = ("api", "verticals", "patterns", "core", "uvicorn")


class _ThirdPartyNoiseFilter(logging.Filter):
    """Let our loggers through, keep other libraries quiet unless WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        root_name = record.name.split(".", 1)[0]
        if root_name in APP_LOGGER_PREFIXES:
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure root logging for the API process.

    Call this once, before the server starts. Safe to call again: existing
    root handlers are replaced, not duplicated.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ThirdPartyNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)


def ensure_logging(level: str | int = logging.INFO) -> bool:
    """
    Configure logging only if nobody has yet (root logger has no handlers).

    Covers servers started as ``uvicorn api.main:app``, which never go
    through ``main()``. Returns True when it configured logging.
    """
    if logging.getLogger().handlers:
        return False
    setup_logging(level)
    return True
