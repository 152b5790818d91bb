"""Constraint-generating inference engine for the lambda calculus.

Inference runs in two phases.  :meth:`Engine.infer` walks the expression once,
allocating fresh variables and recording :class:`~tyinfer.core.types.Eq`
constraints without solving anything.  :meth:`Engine.solve_constraints` then
unifies those constraints in the order they were generated.  The resolved type
is obtained by substituting the store into the type ``infer`` returned::

    engine = Engine({"one": INT})
    unsolved = engine.infer(expr)
    engine.solve_constraints()
    resolved = engine.substitute(unsolved)

An engine serves exactly one top-level expression.  Calling :meth:`infer` a
second time before solving mixes two constraint generations and is not
supported; build a new engine per input instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from tyinfer.syntax import ast
from tyinfer.telemetry.logger import get_logger

from .environment import Environment
from .errors import UnboundVariable
from .substitution import SubstitutionStore
from .types import Eq, Type, fun_type
from .unify import Unifier

__all__ = ["Engine", "InferenceResult", "infer_type"]

LOGGER = get_logger("tyinfer.core.engine")


@dataclass(slots=True)
class InferenceResult:
    """Outcome of a full infer/solve/substitute cycle."""

    expression: ast.Expr
    unsolved: Type
    resolved: Type
    constraints: tuple[Eq, ...]
    substitutions: tuple[Type, ...]


class Engine:
    """Owns the store, environment and pending constraints for one inference."""

    def __init__(self, initial_env: Optional[Mapping[str, Type]] = None) -> None:
        self.store = SubstitutionStore()
        self.environment = Environment(initial_env)
        self._constraints: list[Eq] = []
        self.solved = False

    # ------------------------------------------------------------------
    # Diagnostics

    @property
    def constraints(self) -> tuple[Eq, ...]:
        return tuple(self._constraints)

    @property
    def substitutions(self) -> tuple[Type, ...]:
        return self.store.bindings()

    # ------------------------------------------------------------------
    # Constraint generation

    def new_tyvar(self) -> Type:
        var = self.store.new_tyvar()
        LOGGER.debug("fresh %s", var)
        return var

    def add_constraint(self, left: Type, right: Type) -> None:
        constraint = Eq(left, right)
        LOGGER.debug("constraint %s", constraint)
        self._constraints.append(constraint)

    def infer(self, expr: ast.Expr) -> Type:
        """Return the unsolved type of ``expr``, recording constraints."""

        if isinstance(expr, ast.Var):
            return self._infer_var(expr)
        if isinstance(expr, ast.App):
            return self._infer_app(expr)
        if isinstance(expr, ast.Abs):
            return self._infer_abs(expr)
        raise TypeError(f"cannot infer a type for {type(expr).__name__}")

    def _infer_var(self, expr: ast.Var) -> Type:
        typ = self.environment.lookup(expr.name)
        if typ is None:
            LOGGER.debug("unbound variable %r", expr.name)
            raise UnboundVariable(expr.name)
        return typ

    def _infer_app(self, expr: ast.App) -> Type:
        # ``f a b c`` is walked along its left spine: recursion only enters
        # the head and the arguments.
        arguments: list[ast.Expr] = []
        head: ast.Expr = expr
        while isinstance(head, ast.App):
            arguments.append(head.argument)
            head = head.function
        fun_ty = self.infer(head)
        for argument in reversed(arguments):
            arg_ty = self.infer(argument)
            out_ty = self.new_tyvar()
            self.add_constraint(fun_ty, fun_type(arg_ty, out_ty))
            fun_ty = out_ty
        return fun_ty

    def _infer_abs(self, expr: ast.Abs) -> Type:
        param_ty = self.new_tyvar()
        with self.environment.scope() as scope:
            scope.extend(expr.parameter, param_ty)
            body_ty = self.infer(expr.body)
        return fun_type(param_ty, body_ty)

    # ------------------------------------------------------------------
    # Solving

    def solve_constraints(self) -> None:
        """Unify every pending constraint in generation order.

        Raises :class:`~tyinfer.core.errors.TypeMismatch` or
        :class:`~tyinfer.core.errors.InfiniteType` on the first failure; the
        engine must be discarded afterwards.
        """

        pending = list(self._constraints)
        LOGGER.debug("solving %d constraint(s)", len(pending))
        unifier = Unifier(self.store)
        for constraint in pending:
            unifier.solve(constraint)
        self._constraints.clear()
        self.solved = True
        LOGGER.debug("solved in %d unification step(s)", unifier.steps)

    def substitute(self, typ: Type) -> Type:
        return self.store.substitute(typ)


def infer_type(
    expr: ast.Expr, initial_env: Optional[Mapping[str, Type]] = None
) -> InferenceResult:
    """Run inference, solving and substitution for ``expr`` in a fresh engine."""

    engine = Engine(initial_env)
    unsolved = engine.infer(expr)
    constraints = engine.constraints
    engine.solve_constraints()
    return InferenceResult(
        expression=expr,
        unsolved=unsolved,
        resolved=engine.substitute(unsolved),
        constraints=constraints,
        substitutions=engine.substitutions,
    )
