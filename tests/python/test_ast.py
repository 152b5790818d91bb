"""Tests for expression nodes and their renderings."""

from __future__ import annotations

import pytest

from tyinfer.syntax import ast
from tyinfer.syntax.ast import Abs, App, Span, Var


def test_equality_ignores_span_and_metadata() -> None:
    located = Var("x", span=Span(1, 1, 1, 2), metadata={"note": 1})
    assert located == Var("x")


def test_walk_is_depth_first() -> None:
    expr = App(Abs("x", Var("x")), Var("y"))
    assert [node.node_type for node in expr.walk()] == ["App", "Abs", "Var", "Var"]


def test_format_expr_renders_indented_tree() -> None:
    compose = Abs("f", Abs("g", Abs("x", App(Var("g"), App(Var("f"), Var("x"))))))
    assert ast.format_expr(compose) == "\n".join(
        [
            "(fun",
            "|   f",
            "|   (fun",
            "|   |   g",
            "|   |   (fun",
            "|   |   |   x",
            "|   |   |   (app",
            "|   |   |   |   g",
            "|   |   |   |   (app",
            "|   |   |   |   |   f",
            "|   |   |   |   |   x)))))",
        ]
    )


def test_format_expr_rejects_foreign_values() -> None:
    with pytest.raises(TypeError):
        ast.format_expr("x")  # type: ignore[arg-type]
