"""Robinson-style unification against a :class:`SubstitutionStore`."""

from __future__ import annotations

from tyinfer.telemetry.logger import get_logger

from .errors import InfiniteType, TypeMismatch
from .substitution import SubstitutionStore
from .types import Con, Eq, Type, Var

__all__ = ["Unifier"]

LOGGER = get_logger("tyinfer.core.unify")


class Unifier:
    """Resolves equality constraints into variable bindings.

    Each call to :meth:`unify` works on the live binding chains in the store,
    so a constraint solved early still sees refinements made by later ones
    when the caller eventually substitutes.
    """

    def __init__(self, store: SubstitutionStore) -> None:
        self.store = store
        self.steps = 0

    def solve(self, constraint: Eq) -> None:
        self.unify(constraint.left, constraint.right)

    def unify(self, left: Type, right: Type) -> None:
        self.steps += 1
        if isinstance(left, Var):
            if isinstance(right, Var) and left.id == right.id:
                return
            self._unify_variable(left, right)
            return
        if isinstance(right, Var):
            self._unify_variable(right, left)
            return
        self._unify_constructors(left, right)

    def _unify_variable(self, var: Var, other: Type) -> None:
        mapped = self.store.resolve_binding(var.id)
        if mapped != var:
            self.unify(mapped, other)
            return
        if self.store.shallow_resolve(other) == var:
            # ``other`` is a chain that already ends at ``var``.
            return
        if self.store.occurs_in(var.id, other):
            LOGGER.debug("occurs check failed: %s in %s", var, other)
            raise InfiniteType(var.id, self.store.substitute(other))
        LOGGER.debug("bind %s := %s", var, other)
        self.store.bind(var.id, other)

    def _unify_constructors(self, left: Con, right: Con) -> None:
        if left.name != right.name or len(left.args) != len(right.args):
            raise TypeMismatch(
                Con(left.name, tuple(self.store.substitute(arg) for arg in left.args)),
                Con(right.name, tuple(self.store.substitute(arg) for arg in right.args)),
            )
        for sub_left, sub_right in zip(left.args, right.args):
            self.unify(sub_left, sub_right)
