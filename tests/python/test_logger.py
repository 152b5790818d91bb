"""Tests for the logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tyinfer.telemetry import logger


def test_get_logger_requires_a_name() -> None:
    with pytest.raises(ValueError):
        logger.get_logger("")


def test_loggers_live_under_the_package_namespace() -> None:
    assert logger.get_logger("tyinfer.core.engine").name == "tyinfer.core.engine"


def test_set_level_accepts_names_and_rejects_unknown() -> None:
    package_logger = logging.getLogger("tyinfer")
    previous = package_logger.level
    try:
        logger.set_level("debug")
        assert package_logger.level == logging.DEBUG
        with pytest.raises(ValueError):
            logger.set_level("chatty")
    finally:
        package_logger.setLevel(previous)


def test_configure_applies_yaml_file(tmp_path: Path) -> None:
    config = tmp_path / "logging.yaml"
    config.write_text(
        "loggers:\n  tyinfer:\n    level: ERROR\n    handlers: [console]\n    propagate: false\n",
        encoding="utf-8",
    )
    try:
        logger.configure(config, force=True)
        assert logging.getLogger("tyinfer").level == logging.ERROR
    finally:
        logger.configure(force=True)
    assert logging.getLogger("tyinfer").level == logging.WARNING
