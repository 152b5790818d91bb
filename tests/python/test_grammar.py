"""Tests for the lambda-calculus tokenizer and parser."""

from __future__ import annotations

import pytest

from tyinfer.syntax import grammar
from tyinfer.syntax.ast import Abs, App, Var


@pytest.mark.parametrize(
    "source, expected",
    [
        ("x", Var("x")),
        ("f x y", App(App(Var("f"), Var("x")), Var("y"))),
        ("f (g x)", App(Var("f"), App(Var("g"), Var("x")))),
        ("fun x => x", Abs("x", Var("x"))),
        ("fun x y => x", Abs("x", Abs("y", Var("x")))),
        ("fun x => x y", Abs("x", App(Var("x"), Var("y")))),
        ("(fun x => x) one", App(Abs("x", Var("x")), Var("one"))),
        ("f fun x => x", App(Var("f"), Abs("x", Var("x")))),
        ("((x))", Var("x")),
        ("funky fun_ _9", App(App(Var("funky"), Var("fun_")), Var("_9"))),
    ],
)
def test_parse_shapes(source: str, expected: object) -> None:
    assert grammar.parse_expression(source) == expected


def test_comments_and_newlines_are_skipped() -> None:
    source = """
    # compose
    fun f g x =>
        g (f x)   # apply f first
    """
    expr = grammar.parse_expression(source)
    assert str(expr) == "fun f g x => g (f x)"


def test_spans_track_source_positions() -> None:
    expr = grammar.parse_expression("f\n  xs")
    assert isinstance(expr, App)
    assert expr.argument.span is not None
    assert expr.argument.span.to_tuple() == (2, 3, 2, 5)
    assert expr.span is not None
    assert expr.span.to_tuple() == (1, 1, 2, 5)


@pytest.mark.parametrize(
    "source, message",
    [
        ("", "Unexpected EOF"),
        ("fun x =>", "Unexpected EOF"),
        ("(f x", "Unexpected EOF"),
        ("fun => x", "Expected identifier, got '=>'"),
        ("fun x x", "Unexpected EOF"),
        ("f )", "Expected EOF, got ')'"),
        ("=> x", "Expected expression, got '=>'"),
        ("f = x", "Unexpected character '='"),
        ("f + x", "Unexpected character '+'"),
    ],
)
def test_syntax_errors(source: str, message: str) -> None:
    with pytest.raises(grammar.ParseError) as exc:
        grammar.parse_expression(source)
    assert exc.value.message == message


def test_error_location_is_reported() -> None:
    with pytest.raises(grammar.ParseError) as exc:
        grammar.parse_expression("fun x\n  ) => x", filename="demo.lc")
    assert (exc.value.line, exc.value.column) == (2, 3)
    assert str(exc.value).startswith("demo.lc:2:3: SyntaxError:")


@pytest.mark.parametrize(
    "source",
    ["f x y", "f (g x)", "(fun x => x) (fun y => y)", "fun f g x => g (f x) x", "f (fun x => x) y"],
)
def test_surface_rendering_reparses(source: str) -> None:
    expr = grammar.parse_expression(source)
    assert str(expr) == source
    assert grammar.parse_expression(str(expr)) == expr


@pytest.mark.parametrize("source, character", [("λ", "λ"), ("x²", "²"), ("fun é => é", "é")])
def test_identifiers_are_ascii_only(source: str, character: str) -> None:
    with pytest.raises(grammar.ParseError) as exc:
        grammar.parse_expression(source)
    assert exc.value.message == f"Unexpected character '{character}'"
