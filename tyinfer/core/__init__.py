"""Public entry points for the tyinfer inference core."""

from tyinfer.core.engine import Engine, InferenceResult, infer_type
from tyinfer.core.environment import Environment
from tyinfer.core.errors import (
    InferenceError,
    InfiniteType,
    TypeMismatch,
    TypeSyntaxError,
    UnboundVariable,
)
from tyinfer.core.substitution import SubstitutionStore
from tyinfer.core.types import Con, Eq, Type, Var, format_type, fun_type, parse_type
from tyinfer.core.unify import Unifier

__all__ = [
    "Con",
    "Engine",
    "Environment",
    "Eq",
    "InferenceError",
    "InferenceResult",
    "InfiniteType",
    "SubstitutionStore",
    "Type",
    "TypeMismatch",
    "TypeSyntaxError",
    "UnboundVariable",
    "Unifier",
    "Var",
    "format_type",
    "fun_type",
    "infer_type",
    "parse_type",
]
