"""YAML configuration loading for the tyinfer front end."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

__all__ = ["CONFIG_ENV_VAR", "load_config", "resolve_config_path"]

CONFIG_ENV_VAR = "TYINFER_CONFIG"


def resolve_config_path(explicit: str | Path | None, default: Path) -> Path | None:
    """Pick the configuration file to read.

    An explicit path wins, then ``$TYINFER_CONFIG``, then ``default`` if it
    exists.  ``None`` means "run with built-in defaults".
    """

    if explicit is not None:
        return Path(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return default if default.exists() else None


def load_config(path: str | Path) -> dict[str, Any]:
    """Return the YAML mapping at ``path``.

    An empty document loads as ``{}``.  A root that is not a mapping raises
    :class:`ValueError`, as does unparsable YAML.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration file not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse configuration {config_path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError(f"configuration root must be a mapping: {config_path}")
    return dict(data)
