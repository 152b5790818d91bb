"""Tokenizer and parser for the lambda-calculus surface syntax.

The language is tiny::

    expr := atom atom*                  application, left associative
    atom := IDENT | "(" expr ")" | abs
    abs  := "fun" IDENT+ "=>" expr      body extends as far right as possible

``fun x y => e`` is sugar for ``fun x => fun y => e``.  ``#`` starts a comment
running to the end of the line.  There is no error recovery: the first problem
raises :class:`ParseError` with the position of the offending token.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Optional, Sequence

from tyinfer.telemetry.logger import get_logger

from . import ast

LOGGER = get_logger("tyinfer.syntax.grammar")


class ParseError(RuntimeError):
    """Structured parse error that includes source location information."""

    def __init__(self, message: str, line: int, column: int, filename: str = "<expr>"):
        super().__init__(f"{filename}:{line}:{column}: SyntaxError: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename


@dataclass(slots=True)
class Token:
    """Single lexical token."""

    kind: str
    value: str
    line: int
    column: int
    end_line: int
    end_column: int


KEYWORDS = {"fun"}

_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | frozenset(string.digits)
_PUNCTUATION = {"(": "LPAREN", ")": "RPAREN"}

# Human readable token names used in error messages.
DESCRIPTIONS = {
    "IDENT": "identifier",
    "fun": "'fun'",
    "FATARROW": "'=>'",
    "LPAREN": "'('",
    "RPAREN": "')'",
    "EOF": "EOF",
}


def describe(kind: str) -> str:
    return DESCRIPTIONS.get(kind, kind)


class Tokenizer:
    """Hand-written tokenizer tracking line and column positions.

    Identifiers are ASCII only: ``[A-Za-z_][A-Za-z_0-9]*``.
    """

    def __init__(self, source: str, filename: str = "<expr>") -> None:
        self.source = source
        self.filename = filename
        self.index = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while (ch := self._skip_trivia()) is not None:
            if ch in _IDENT_START:
                tokens.append(self._read_identifier())
            else:
                tokens.append(self._read_symbol(ch))
        tokens.append(self._token("EOF", "", self.line, self.column))
        return tokens

    def _skip_trivia(self) -> Optional[str]:
        """Step over blanks and comments; return the next significant character."""

        in_comment = False
        while self.index < len(self.source):
            ch = self.source[self.index]
            if ch == "\n":
                in_comment = False
            elif not in_comment and ch == "#":
                in_comment = True
            elif not in_comment and not ch.isspace():
                return ch
            self._step()
        return None

    def _step(self) -> None:
        if self.source[self.index] == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.index += 1

    def _token(self, kind: str, value: str, line: int, column: int) -> Token:
        return Token(kind, value, line, column, self.line, self.column)

    def _read_identifier(self) -> Token:
        line, column = self.line, self.column
        start = self.index
        while self.index < len(self.source) and self.source[self.index] in _IDENT_CHARS:
            self._step()
        value = self.source[start : self.index]
        return self._token(value if value in KEYWORDS else "IDENT", value, line, column)

    def _read_symbol(self, ch: str) -> Token:
        line, column = self.line, self.column
        if self.source.startswith("=>", self.index):
            self._step()
            self._step()
            return self._token("FATARROW", "=>", line, column)
        if ch not in _PUNCTUATION:
            raise ParseError(f"Unexpected character '{ch}'", line, column, self.filename)
        self._step()
        return self._token(_PUNCTUATION[ch], ch, line, column)


# ---------------------------------------------------------------------------
# Parser

_ATOM_START = ("IDENT", "fun", "LPAREN")


class Parser:
    """Recursive-descent parser producing :mod:`tyinfer.syntax.ast` nodes."""

    def __init__(self, tokens: Sequence[Token], filename: str = "<expr>") -> None:
        self.tokens = tokens
        self.index = 0
        self.filename = filename

    # ------------------------------------------------------------------
    # Token helpers

    def _peek(self) -> Token:
        return self.tokens[min(self.index, len(self.tokens) - 1)]

    def _previous(self) -> Token:
        return self.tokens[max(self.index - 1, 0)]

    def _advance(self) -> Token:
        token = self._peek()
        if token.kind != "EOF":
            self.index += 1
        return token

    def _match(self, *kinds: str) -> Optional[Token]:
        token = self._peek()
        if token.kind in kinds:
            self._advance()
            return token
        return None

    def _check(self, *kinds: str) -> bool:
        return self._peek().kind in kinds

    def _expect(self, kind: str) -> Token:
        token = self._peek()
        if token.kind == kind:
            return self._advance()
        if token.kind == "EOF":
            raise ParseError("Unexpected EOF", token.line, token.column, self.filename)
        raise ParseError(
            f"Expected {describe(kind)}, got {describe(token.kind)}",
            token.line,
            token.column,
            self.filename,
        )

    def _span_from(self, start: Token) -> ast.Span:
        end = self._previous()
        return ast.Span(start.line, start.column, end.end_line, end.end_column)

    # ------------------------------------------------------------------
    # Entry points

    def parse(self) -> ast.Expr:
        """Parse a complete expression and require end of input."""

        expr = self.parse_expression()
        token = self._peek()
        if token.kind != "EOF":
            raise ParseError(
                f"Expected EOF, got {describe(token.kind)}",
                token.line,
                token.column,
                self.filename,
            )
        return expr

    def parse_expression(self) -> ast.Expr:
        start = self._peek()
        expr = self._parse_atom()
        while self._check(*_ATOM_START):
            argument = self._parse_atom()
            expr = ast.App(expr, argument, span=self._span_from(start))
        return expr

    def _parse_atom(self) -> ast.Expr:
        token = self._peek()
        if token.kind == "IDENT":
            self._advance()
            return ast.Var(token.value, span=self._span_from(token))
        if token.kind == "fun":
            return self._parse_abs()
        if token.kind == "LPAREN":
            return self._parse_grouping()
        if token.kind == "EOF":
            raise ParseError("Unexpected EOF", token.line, token.column, self.filename)
        raise ParseError(
            f"Expected expression, got {describe(token.kind)}",
            token.line,
            token.column,
            self.filename,
        )

    def _parse_abs(self) -> ast.Expr:
        start = self._expect("fun")
        parameters = [self._expect("IDENT")]
        while token := self._match("IDENT"):
            parameters.append(token)
        self._expect("FATARROW")
        body = self.parse_expression()
        span = self._span_from(start)
        for parameter in reversed(parameters):
            body = ast.Abs(parameter.value, body, span=span)
        return body

    def _parse_grouping(self) -> ast.Expr:
        self._expect("LPAREN")
        expr = self.parse_expression()
        self._expect("RPAREN")
        return expr


def parse_expression(source: str, *, filename: str = "<expr>") -> ast.Expr:
    """Parse ``source`` text into an expression tree."""

    tokens = Tokenizer(source, filename=filename).tokenize()
    expr = Parser(tokens, filename=filename).parse()
    LOGGER.debug("parsed %s", expr)
    return expr


__all__ = ["ParseError", "Parser", "Token", "Tokenizer", "parse_expression"]
