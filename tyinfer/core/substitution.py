"""Array-backed substitution store.

Slot ``i`` holds the current binding of ``Var(i)``.  A fresh slot is
self-mapped (``store[i] == Var(i)``), meaning the variable is still unbound.
Bindings are resolved lazily: :meth:`SubstitutionStore.substitute` and
:meth:`SubstitutionStore.occurs_in` chase variable chains on demand and never
compress them, so the table always reflects exactly what the unifier bound.

The store also owns fresh-variable allocation; the next id is simply the
current number of slots.
"""

from __future__ import annotations

from typing import Iterator

from .types import Con, Type, Var

__all__ = ["SubstitutionStore"]


class SubstitutionStore:
    """Union-find style table mapping type-variable ids to type terms."""

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: list[Type] = []

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Type]:
        return iter(self._slots)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        body = ", ".join(f"t{index}={slot}" for index, slot in enumerate(self._slots))
        return f"SubstitutionStore([{body}])"

    # ------------------------------------------------------------------
    # Allocation and raw access

    def new_tyvar(self) -> Var:
        var = Var(len(self._slots))
        self._slots.append(var)
        return var

    def resolve_binding(self, var_id: int) -> Type:
        """Return the current slot for ``var_id`` (``Var(var_id)`` when unbound)."""

        return self._slots[self._check_id(var_id)]

    def is_bound(self, var_id: int) -> bool:
        return self.resolve_binding(var_id) != Var(var_id)

    def bind(self, var_id: int, typ: Type) -> None:
        """Overwrite slot ``var_id``.

        The caller is responsible for the occurs check; binding a variable to
        a term that reaches it again would make :meth:`substitute` diverge.
        """

        self._slots[self._check_id(var_id)] = typ

    def bindings(self) -> tuple[Type, ...]:
        """Snapshot of every slot in id order."""

        return tuple(self._slots)

    def _check_id(self, var_id: int) -> int:
        if not 0 <= var_id < len(self._slots):
            raise IndexError(f"type variable t{var_id} was never allocated")
        return var_id

    # ------------------------------------------------------------------
    # Chain chasing

    def shallow_resolve(self, typ: Type) -> Type:
        """Follow variable bindings until an unbound variable or a constructor."""

        while isinstance(typ, Var):
            bound = self.resolve_binding(typ.id)
            if bound == typ:
                return typ
            typ = bound
        return typ

    def occurs_in(self, var_id: int, typ: Type) -> bool:
        """Return True when ``Var(var_id)`` is reachable from ``typ``."""

        typ = self.shallow_resolve(typ)
        if isinstance(typ, Var):
            return typ.id == var_id
        return any(self.occurs_in(var_id, arg) for arg in typ.args)

    def substitute(self, typ: Type) -> Type:
        """Fully resolve ``typ`` against the current bindings ("zonk")."""

        typ = self.shallow_resolve(typ)
        if isinstance(typ, Var):
            return typ
        if not typ.args:
            return typ
        return Con(typ.name, tuple(self.substitute(arg) for arg in typ.args))
