"""Shared logging helpers for assetroster."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_LEVEL_ENV_VAR = "ASSETROSTER_LOG_LEVEL"


def get_log_level(default: int = logging.INFO) -> int:
    """Return the log level named by ``ASSETROSTER_LOG_LEVEL`` (or ``default``)."""

    name = os.getenv(LOG_LEVEL_ENV_VAR)
    if name is None or not name.strip():
        return default
    level = logging.getLevelNamesMapping().get(name.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level in {LOG_LEVEL_ENV_VAR}: {name}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``ASSETROSTER_LOG_LEVEL`` (INFO when unset) and the format is terse
    enough for CLI output. Pass ``force=True`` to reconfigure during tests or
    specialised entry points.
    """

    logging.basicConfig(
        level=get_log_level() if level is None else level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
