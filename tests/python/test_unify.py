"""Tests for unification with the occurs check."""

from __future__ import annotations

import pytest

from tyinfer.core.errors import InfiniteType, TypeMismatch
from tyinfer.core.substitution import SubstitutionStore
from tyinfer.core.types import BOOL, INT, Con, Eq, Var, fun_type
from tyinfer.core.unify import Unifier


def _unifier(size: int) -> tuple[Unifier, list[Var]]:
    store = SubstitutionStore()
    variables = [store.new_tyvar() for _ in range(size)]
    return Unifier(store), variables


def test_identical_variables_are_a_no_op() -> None:
    """Unifying a variable with itself should leave the store untouched."""
    unifier, (a,) = _unifier(1)
    unifier.unify(a, a)
    assert unifier.store.bindings() == (a,)


def test_variable_binds_in_either_position() -> None:
    """A variable should bind whether it appears on the left or the right."""
    unifier, (a, b) = _unifier(2)
    unifier.unify(a, INT)
    unifier.unify(BOOL, b)
    assert unifier.store.bindings() == (INT, BOOL)


def test_occurs_check_reports_infinite_type() -> None:
    """Binding a variable into a term containing it should raise InfiniteType."""
    unifier, (k,) = _unifier(1)
    with pytest.raises(InfiniteType) as exc:
        unifier.unify(k, Con("List", (k,)))
    assert exc.value.var_id == k.id


def test_occurs_check_sees_through_bindings() -> None:
    """The occurs check should follow existing bindings inside the term."""
    unifier, (a, b) = _unifier(2)
    unifier.unify(b, fun_type(a, INT))
    with pytest.raises(InfiniteType) as exc:
        unifier.unify(a, b)
    assert exc.value.var_id == a.id


def test_constructor_name_conflict() -> None:
    """Constructors with different names should raise TypeMismatch."""
    unifier, (a, b) = _unifier(2)
    with pytest.raises(TypeMismatch) as exc:
        unifier.unify(Con("Fun", (a, b)), Con("Pair", (a, b)))
    assert exc.value.reason == "constructor"
    assert exc.value.expected.name == "Fun"
    assert exc.value.actual.name == "Pair"


def test_constructor_arity_conflict() -> None:
    """Constructors with different arities should raise TypeMismatch."""
    unifier, (a, b) = _unifier(2)
    with pytest.raises(TypeMismatch) as exc:
        unifier.unify(Con("Fun", (a,)), Con("Fun", (a, b)))
    assert exc.value.reason == "arity"


def test_bound_variable_must_stay_consistent() -> None:
    """A second requirement on a bound variable should unify with its binding."""
    unifier, (a,) = _unifier(1)
    unifier.unify(a, INT)
    unifier.unify(a, INT)
    with pytest.raises(TypeMismatch):
        unifier.unify(a, BOOL)


def test_arguments_unify_left_to_right() -> None:
    """Constructor arguments should be unified positionally from the left."""
    unifier, (a, b) = _unifier(2)
    unifier.solve(Eq(fun_type(a, b), fun_type(INT, a)))
    assert unifier.store.substitute(b) == INT


def test_variable_chain_back_to_itself_is_consistent() -> None:
    """Closing a chain back onto its own variable should not count as a cycle."""
    unifier, (a, b) = _unifier(2)
    unifier.unify(a, b)
    unifier.unify(b, a)
    assert unifier.store.substitute(a) == b
    assert unifier.store.substitute(b) == b
