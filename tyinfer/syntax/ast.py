"""Expression tree for the untyped lambda calculus.

Three node shapes only: a variable reference, a function application and a
single-parameter abstraction.  Multi-parameter surface syntax
(``fun x y => e``) is desugared by the parser into nested :class:`Abs` nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Iterator, Optional, Union

__all__ = [
    "Abs",
    "App",
    "Expr",
    "Node",
    "Span",
    "Var",
    "format_expr",
]

# ---------------------------------------------------------------------------
# Shared utilities


@dataclass(slots=True)
class Span:
    """Start/end position of a token or node in the source text."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.start_line, self.start_column, self.end_line, self.end_column)

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_column}..{self.end_line}:{self.end_column}"


@dataclass(slots=True, kw_only=True)
class Node:
    """Base class for expression nodes.

    ``span`` is optional because tests and callers build trees by hand.  Neither
    ``span`` nor ``metadata`` takes part in equality, so a parsed tree compares
    equal to the same tree written out in code.
    """

    span: Optional[Span] = field(default=None, compare=False)
    metadata: dict[str, object] = field(default_factory=dict, compare=False, repr=False)

    @property
    def node_type(self) -> str:
        return self.__class__.__name__

    def children(self) -> Iterator["Node"]:
        for field_def in fields(self):
            if field_def.name in {"span", "metadata"}:
                continue
            value = getattr(self, field_def.name)
            if isinstance(value, Node):
                yield value

    def walk(self) -> Iterator["Node"]:
        """Depth-first traversal starting at this node."""

        yield self
        for child in self.children():
            yield from child.walk()


# ---------------------------------------------------------------------------
# Expression nodes


@dataclass(slots=True)
class Var(Node):
    """Reference to a variable by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class App(Node):
    """Application of ``function`` to ``argument``."""

    function: "Expr"
    argument: "Expr"

    def __str__(self) -> str:
        function = str(self.function)
        if isinstance(self.function, Abs):
            function = f"({function})"
        argument = str(self.argument)
        if isinstance(self.argument, (App, Abs)):
            argument = f"({argument})"
        return f"{function} {argument}"


@dataclass(slots=True)
class Abs(Node):
    """Anonymous function of one parameter."""

    parameter: str
    body: "Expr"

    def __str__(self) -> str:
        parameters = [self.parameter]
        body = self.body
        while isinstance(body, Abs):
            parameters.append(body.parameter)
            body = body.body
        return f"fun {' '.join(parameters)} => {body}"


Expr = Union[Var, App, Abs]


# ---------------------------------------------------------------------------
# S-expression rendering

TAB = "|   "


def format_expr(expr: Expr) -> str:
    """Render ``expr`` as an indented S-expression tree.

    ``fun f => f x`` becomes::

        (fun
        |   f
        |   (app
        |   |   f
        |   |   x))
    """

    lines: list[str] = []
    _render(expr, 0, lines)
    return "\n".join(lines)


def _render(expr: Expr, depth: int, lines: list[str]) -> None:
    indent = TAB * depth
    if isinstance(expr, Var):
        lines.append(indent + expr.name)
    elif isinstance(expr, App):
        lines.append(indent + "(app")
        _render(expr.function, depth + 1, lines)
        _render(expr.argument, depth + 1, lines)
        lines[-1] += ")"
    elif isinstance(expr, Abs):
        lines.append(indent + "(fun")
        lines.append(TAB * (depth + 1) + expr.parameter)
        _render(expr.body, depth + 1, lines)
        lines[-1] += ")"
    else:
        raise TypeError(f"not an expression node: {expr!r}")
