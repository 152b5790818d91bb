"""Lexically scoped name -> type environment."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional

from .types import Type

__all__ = ["Environment"]


class Environment:
    """Stack of scopes; lookups scan from the innermost scope outward.

    The bottom scope is a copy of the mapping handed to the constructor and
    lives as long as the environment.  Abstraction bodies get a scope of their
    own through :meth:`scope`, which pops it again even if inference of the
    body raises.
    """

    def __init__(self, base: Optional[Mapping[str, Type]] = None) -> None:
        self.scopes: list[Dict[str, Type]] = [dict(base or {})]

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Environment(depth={self.depth}, scopes={self.scopes!r})"

    @property
    def depth(self) -> int:
        return len(self.scopes)

    @property
    def base(self) -> Mapping[str, Type]:
        return self.scopes[0]

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        if len(self.scopes) == 1:
            raise RuntimeError("cannot pop the base scope of an environment")
        self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator["Environment"]:
        self.push_scope()
        try:
            yield self
        finally:
            self.pop_scope()

    def extend(self, name: str, typ: Type) -> None:
        """Bind ``name`` in the innermost scope, shadowing outer bindings."""

        self.scopes[-1][name] = typ

    def lookup(self, name: str) -> Optional[Type]:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None
