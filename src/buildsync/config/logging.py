"""Shared logging helpers for buildsync."""

from __future__ import annotations

import logging
import os

# per-request INFO lines from the HTTP client drown out reconcile outcomes
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(value: str | int | None, *, default: int = logging.INFO) -> int:
    """Turn a level name such as ``"debug"`` or a number into a ``logging`` level."""

    if value is None:
        return default
    if isinstance(value, int):
        return value
    stripped = value.strip()
    if stripped.isdigit():
        return int(stripped)
    level = logging.getLevelNamesMapping().get(stripped.upper())
    return default if level is None else level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``BUILDSYNC_LOG_LEVEL`` (INFO when unset) and a terse format suited
    to a long-running watcher. Pass ``force=True`` to reconfigure during tests or
    specialised entry points.
    """

    effective = level if level is not None else resolve_log_level(os.getenv("BUILDSYNC_LOG_LEVEL"))
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
