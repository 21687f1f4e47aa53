"""Unfolding policy and the implicit-resolution capability."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from nbe.env.context import Context
from nbe.env.environment import Implicit
from nbe.syntax.ast import Term

# Resolves an implicit reference (name, entry, args, context) to a term.
# Returning None reports failure; a resolver may also raise
# ImplicitResolutionFailure itself, which propagates unchanged.
type ImplicitResolver = Callable[
    [str, Implicit, tuple[Term, ...], Context], Term | None
]


@dataclass(frozen=True)
class ReductionPolicy:
    """Controls which global references delta-reduction unfolds.

    Args:
        unfold_theorems: Unfold theorems that carry a proof. Off by default
            because proof terms tend to be large.
        require_bodies: Treat a transparent definition without a body as an
            error instead of leaving the reference stuck.
    """

    unfold_theorems: bool = False
    require_bodies: bool = False


DEFAULT_POLICY = ReductionPolicy()


__all__ = ["DEFAULT_POLICY", "ImplicitResolver", "ReductionPolicy"]
