"""Type terms and equality constraints for the inference core.

Types are plain immutable values: a :class:`Con` is a named constructor applied
to zero or more argument types (``Int`` or ``Fun[Int, Int]``), and a
:class:`Var` is a placeholder identified by its index in the owning
:class:`~tyinfer.core.substitution.SubstitutionStore`.  Neither knows anything
about bindings; resolving a variable is always a question asked of a store.

The module also hosts the small prelude type parser used to read base
environment types out of configuration files (``Fun[Int, Bool]``).
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Dict, Iterator, Sequence, Union

from .errors import TypeSyntaxError

__all__ = [
    "Con",
    "Eq",
    "FUN",
    "INT",
    "BOOL",
    "Type",
    "Var",
    "format_type",
    "fun_type",
    "iter_type_variables",
    "parse_type",
]


# ---------------------------------------------------------------------------
# Type representation


@dataclass(frozen=True, slots=True)
class Con:
    """Type constructor applied to an ordered sequence of argument types."""

    name: str
    args: tuple["Type", ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence at construction time but store a tuple so the
        # value stays hashable and structurally comparable.
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    @property
    def arity(self) -> int:
        return len(self.args)

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True, slots=True)
class Var:
    """Type variable identified by a dense, store-allocated index."""

    id: int

    def __str__(self) -> str:
        return f"t{self.id}"


Type = Union[Con, Var]


@dataclass(frozen=True, slots=True)
class Eq:
    """Equality constraint: ``left`` and ``right`` must unify."""

    left: Type
    right: Type

    def __str__(self) -> str:
        return f"{format_type(self.left)} == {format_type(self.right)}"


# ---------------------------------------------------------------------------
# Helper constructors for frequently used types


FUN = "Fun"

INT = Con("Int")
BOOL = Con("Bool")


def fun_type(parameter: Type, result: Type) -> Con:
    return Con(FUN, (parameter, result))


def iter_type_variables(typ: Type) -> Iterator[Var]:
    """Yield every variable occurrence in ``typ`` from left to right."""

    if isinstance(typ, Var):
        yield typ
        return
    for arg in typ.args:
        yield from iter_type_variables(arg)


# ---------------------------------------------------------------------------
# Pretty-printing


def format_type(typ: Type, *, normalise: bool = False) -> str:
    """Return the textual form of ``typ``.

    By default variables print as ``t<id>``.  With ``normalise`` they are
    renamed ``'a``, ``'b``, ... in order of first appearance, which is how the
    command line shows principal types to users.
    """

    mapping: Dict[int, str] = {}

    def variable_name(var: Var) -> str:
        if not normalise:
            return str(var)
        if var.id not in mapping:
            counter = len(mapping)
            if counter < len(string.ascii_lowercase):
                mapping[var.id] = f"'{string.ascii_lowercase[counter]}"
            else:
                mapping[var.id] = f"t{counter}"
        return mapping[var.id]

    def pretty(t: Type) -> str:
        if isinstance(t, Var):
            return variable_name(t)
        if isinstance(t, Con):
            if not t.args:
                return t.name
            inside = ", ".join(pretty(arg) for arg in t.args)
            return f"{t.name}[{inside}]"
        raise AssertionError(f"Unknown type node: {t!r}")

    return pretty(typ)


# ---------------------------------------------------------------------------
# Prelude type syntax:  Name | Name[T, T, ...]


class _TypeTokenizer:
    def __init__(self, source: str) -> None:
        self.source = source

    def tokenize(self) -> list[tuple[str, str, int]]:
        tokens: list[tuple[str, str, int]] = []
        index = 0
        while index < len(self.source):
            ch = self.source[index]
            if ch.isspace():
                index += 1
                continue
            if ch.isalpha() or ch == "_":
                start = index
                while index < len(self.source) and (
                    self.source[index].isalnum() or self.source[index] == "_"
                ):
                    index += 1
                tokens.append(("IDENT", self.source[start:index], start))
                continue
            if ch in "[],":
                tokens.append((ch, ch, index))
                index += 1
                continue
            raise TypeSyntaxError(f"Unexpected character {ch!r} in type {self.source!r}")
        tokens.append(("EOF", "", len(self.source)))
        return tokens


class _TypeParser:
    def __init__(self, source: str, tokens: Sequence[tuple[str, str, int]]) -> None:
        self.source = source
        self.tokens = tokens
        self.index = 0

    def parse(self) -> Type:
        typ = self._parse_type()
        self._expect("EOF")
        return typ

    def _peek(self) -> tuple[str, str, int]:
        return self.tokens[self.index]

    def _advance(self) -> tuple[str, str, int]:
        token = self.tokens[self.index]
        if token[0] != "EOF":
            self.index += 1
        return token

    def _match(self, kind: str) -> bool:
        if self._peek()[0] == kind:
            self._advance()
            return True
        return False

    def _expect(self, kind: str) -> tuple[str, str, int]:
        token = self._peek()
        if token[0] != kind:
            found = token[1] or "end of input"
            raise TypeSyntaxError(
                f"Expected {kind} at offset {token[2]} in type {self.source!r}, found {found!r}"
            )
        return self._advance()

    def _parse_type(self) -> Type:
        name = self._expect("IDENT")[1]
        args: list[Type] = []
        if self._match("["):
            args.append(self._parse_type())
            while self._match(","):
                args.append(self._parse_type())
            self._expect("]")
        return Con(name, tuple(args))


def parse_type(text: str) -> Type:
    """Parse ``Name`` / ``Name[T, ...]`` into a ground :class:`Con`."""

    if not isinstance(text, str) or not text.strip():
        raise TypeSyntaxError("type text must be a non-empty string")
    tokens = _TypeTokenizer(text).tokenize()
    return _TypeParser(text, tokens).parse()
