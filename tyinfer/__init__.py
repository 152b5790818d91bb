"""Constraint-based Hindley-Milner type inference for a minimal lambda calculus."""

__version__ = "0.1.0"
