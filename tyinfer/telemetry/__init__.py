"""Convenience exports for tyinfer telemetry utilities."""

from . import logger

__all__ = ["logger"]
