"""Failure values raised by the inference core.

Every inference failure is an ordinary exception deriving from
:class:`InferenceError` so interactive callers can catch it and keep going.
Once an :class:`~tyinfer.core.engine.Engine` has raised one of these its
constraint and substitution state is no longer meaningful and the engine should
be dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .types import Con, Type

__all__ = [
    "InferenceError",
    "InfiniteType",
    "TypeMismatch",
    "TypeSyntaxError",
    "UnboundVariable",
]


class InferenceError(RuntimeError):
    """Base class for failures while inferring or solving types."""


class UnboundVariable(InferenceError):
    """A variable expression names something absent from every scope."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unbound variable '{name}'")
        self.name = name


class TypeMismatch(InferenceError):
    """Two constructors disagree on name or argument count."""

    def __init__(self, expected: "Con", actual: "Con") -> None:
        if expected.name != actual.name:
            self.reason = "constructor"
            detail = f"constructor {expected.name} does not match {actual.name}"
        else:
            self.reason = "arity"
            detail = (
                f"{expected.name} applied to {len(expected.args)} argument(s) "
                f"does not match {len(actual.args)}"
            )
        super().__init__(f"Type mismatch: expected {expected} but found {actual} ({detail})")
        self.expected = expected
        self.actual = actual


class InfiniteType(InferenceError):
    """Binding a variable would make it contain itself (occurs check)."""

    def __init__(self, var_id: int, typ: "Type") -> None:
        super().__init__(f"Infinite type: t{var_id} occurs in {typ}")
        self.var_id = var_id
        self.type = typ


class TypeSyntaxError(InferenceError):
    """Malformed type text in a prelude/configuration entry."""
