"""Logging helpers shared by the core, the parser and the CLI.

Loggers live under the ``tyinfer`` namespace.  The first call to
:func:`get_logger` applies ``configs/logging.yaml`` through
:func:`logging.config.dictConfig`, merged over a quiet built-in default
(WARNING and above to stderr).  The engine and unifier log constraint
generation and bindings at DEBUG; ``tyinfer --log-level DEBUG`` shows them.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

import yaml

ROOT_LOGGER = "tyinfer"
CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "logging.yaml"

_CONFIG_LOCK = RLock()
_CONFIGURED = False

_MERGED_KEYS = ("version", "disable_existing_loggers", "formatters", "handlers", "root", "loggers")

_DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "standard",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
    "loggers": {
        ROOT_LOGGER: {"level": "WARNING", "handlers": ["console"], "propagate": False},
    },
}


def _load_config(path: Path) -> dict[str, Any]:
    merged = dict(_DEFAULT_CONFIG)
    if not path.exists():
        return merged
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - guard rails for broken configs
        logging.getLogger(f"{ROOT_LOGGER}.telemetry").warning(
            "failed to parse %s: %s", path.name, exc
        )
        return merged
    if isinstance(data, Mapping):
        merged.update({key: value for key, value in data.items() if key in _MERGED_KEYS})
    return merged


def configure(path: Path | None = None, *, force: bool = False) -> None:
    """Configure logging once; ``force`` re-applies (e.g. with another ``path``)."""

    global _CONFIGURED
    with _CONFIG_LOCK:
        if _CONFIGURED and not force:
            return
        logging.config.dictConfig(_load_config(path or CONFIG_PATH))
        _CONFIGURED = True


def set_level(level: str | int) -> None:
    """Adjust the level of the ``tyinfer`` logger tree (``--log-level``)."""

    configure()
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        level = resolved
    logging.getLogger(ROOT_LOGGER).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured via ``configs/logging.yaml``."""

    if not isinstance(name, str) or not name:
        raise ValueError("logger name must be a non-empty string")
    configure()
    return logging.getLogger(name)


__all__ = ["CONFIG_PATH", "ROOT_LOGGER", "configure", "get_logger", "set_level"]
