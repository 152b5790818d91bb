"""Tests for the array-backed substitution store."""

from __future__ import annotations

import pytest

from tyinfer.core.substitution import SubstitutionStore
from tyinfer.core.types import INT, Con, Var, fun_type


def test_fresh_variables_are_dense_and_self_mapped() -> None:
    """New variables should get consecutive ids and start unbound."""
    store = SubstitutionStore()
    first, second = store.new_tyvar(), store.new_tyvar()

    assert (first, second) == (Var(0), Var(1))
    assert len(store) == 2
    assert store.resolve_binding(1) == Var(1)
    assert not store.is_bound(0)


def test_substitute_chases_chains_into_arguments() -> None:
    """Substitution should follow chains and recurse into constructor arguments."""
    store = SubstitutionStore()
    a, b, c = store.new_tyvar(), store.new_tyvar(), store.new_tyvar()
    store.bind(a.id, b)
    store.bind(b.id, fun_type(c, INT))
    store.bind(c.id, INT)

    assert store.substitute(a) == fun_type(INT, INT)
    assert store.substitute(Con("List", (a,))) == Con("List", (fun_type(INT, INT),))
    # Bindings are resolved lazily, never compressed in place.
    assert store.resolve_binding(a.id) == b


def test_substitute_leaves_unbound_variables() -> None:
    """Unbound variables should survive substitution unchanged."""
    store = SubstitutionStore()
    a, b = store.new_tyvar(), store.new_tyvar()
    store.bind(a.id, b)
    assert store.substitute(fun_type(a, b)) == fun_type(b, b)


def test_occurs_in_follows_bindings() -> None:
    """The occurs check should look through bound variables."""
    store = SubstitutionStore()
    a, b = store.new_tyvar(), store.new_tyvar()
    store.bind(b.id, Con("List", (a,)))

    assert store.occurs_in(a.id, b)
    assert store.occurs_in(a.id, fun_type(INT, b))
    assert not store.occurs_in(b.id, a)
    assert not store.occurs_in(a.id, INT)


def test_unallocated_variable_is_a_programming_error() -> None:
    """Asking for a variable that was never allocated should raise IndexError."""
    store = SubstitutionStore()
    store.new_tyvar()
    with pytest.raises(IndexError):
        store.resolve_binding(3)
    with pytest.raises(IndexError):
        store.substitute(Var(1))


def test_bindings_snapshot_is_detached() -> None:
    """Later bindings should not leak into an earlier snapshot."""
    store = SubstitutionStore()
    a = store.new_tyvar()
    snapshot = store.bindings()
    store.bind(a.id, INT)
    assert snapshot == (Var(0),)
    assert store.bindings() == (INT,)
