"""Normalization by evaluation: evaluate, delta-unfold, quote."""

from .delta import delta, instantiate
from .evaluate import apply_value, evaluate
from .normalize import convertible, normalize
from .policy import DEFAULT_POLICY, ImplicitResolver, ReductionPolicy
from .quote import quote

__all__ = [
    "DEFAULT_POLICY",
    "ImplicitResolver",
    "ReductionPolicy",
    "apply_value",
    "convertible",
    "delta",
    "evaluate",
    "instantiate",
    "normalize",
    "quote",
]
