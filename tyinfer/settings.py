"""Configuration bundle for the command-line front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from tyinfer.core.types import Type, format_type, parse_type
from tyinfer.utils import config as config_loader

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def _deep_update(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``updates`` recursively merged."""

    result: dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})


def _coerce_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"display.{key} must be a boolean, got {value!r}")


@dataclass(slots=True)
class DisplayOptions:
    normalise: bool = True
    show_constraints: bool = False


@dataclass(slots=True)
class Settings:
    """Prelude environment plus display preferences."""

    prelude: dict[str, Type] = field(default_factory=dict)
    display: DisplayOptions = field(default_factory=DisplayOptions)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "Settings":
        payload = dict(data or {})
        raw_prelude = payload.get("prelude") or {}
        if not isinstance(raw_prelude, Mapping):
            raise ValueError("prelude must be a mapping of name -> type")
        prelude: dict[str, Type] = {}
        for name, text in raw_prelude.items():
            if not isinstance(name, str):
                raise ValueError(f"prelude name must be a string, got {name!r}")
            prelude[name] = parse_type(str(text))
        raw_display = payload.get("display") or {}
        if not isinstance(raw_display, Mapping):
            raise ValueError("display must be a mapping")
        display = DisplayOptions(
            normalise=_coerce_bool(raw_display.get("normalise", True), key="normalise"),
            show_constraints=_coerce_bool(
                raw_display.get("show_constraints", False), key="show_constraints"
            ),
        )
        return cls(prelude=prelude, display=display)

    def merge(self, overrides: Mapping[str, Any] | None) -> "Settings":
        if not overrides:
            return self
        return Settings.from_mapping(_deep_update(self.to_dict(), overrides))

    def to_dict(self) -> dict[str, Any]:
        return {
            "prelude": {name: format_type(typ) for name, typ in self.prelude.items()},
            "display": {
                "normalise": self.display.normalise,
                "show_constraints": self.display.show_constraints,
            },
        }


def load_settings(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Return :class:`Settings` from ``config_path`` and ``--set`` overrides."""

    data: Mapping[str, Any] | None = None
    if config_path is not None:
        data = config_loader.load_config(config_path)
    return Settings.from_mapping(data).merge(overrides)


__all__ = ["DEFAULT_CONFIG_PATH", "DisplayOptions", "Settings", "load_settings"]
