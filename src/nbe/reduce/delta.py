"""Delta reduction: unfolding references to global declarations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from nbe.env.context import Context
from nbe.env.environment import (
    Axiom,
    Definition,
    Environment,
    Implicit,
    Param,
    Theorem,
)
from nbe.errors import (
    ArityMismatch,
    ImplicitResolutionFailure,
    MissingBody,
    MissingProof,
    UnknownDefinition,
    UnsupportedTermShape,
)
from nbe.reduce.policy import DEFAULT_POLICY, ImplicitResolver, ReductionPolicy
from nbe.syntax.ast import Ref, Term
from nbe.syntax.names import free_vars
from nbe.syntax.util import apply_term, nested_lam

logger = logging.getLogger(__name__)


def instantiate(params: Sequence[Param], body: Term, args: Sequence[Term]) -> Term:
    """Abstract ``body`` over ``params`` and apply the result to ``args``.

    With fewer arguments than parameters the result reduces to a lambda over
    the remaining parameters.
    """
    return apply_term(nested_lam([(p.name, p.ty) for p in params], body), *args)


def delta(
    defs: Environment,
    context: Context,
    name: str,
    args: Sequence[Term],
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> tuple[Term, bool]:
    """Resolve ``name`` applied to ``args``.

    Returns:
        ``(replacement, True)`` when the reference unfolds, or the reference
        itself paired with ``False`` when it stays opaque.

    Raises:
        UnknownDefinition: ``name`` is not declared in ``defs``.
        ArityMismatch: more arguments than the declaration has parameters.
        MissingBody: a transparent definition has no body and the policy
            requires one.
        MissingProof: a theorem has no proof attached.
        ImplicitResolutionFailure: an implicit could not be resolved, or the
            resolved term mentions a name bound neither in ``context`` nor in
            ``args``.
    """

    entry = defs.fetch(name)
    if entry is None:
        raise UnknownDefinition(name)
    if len(args) > entry.arity:
        raise ArityMismatch(name, entry.arity, len(args))
    ref = Ref(name, tuple(args))

    match entry:
        case Implicit():
            if resolver is None:
                raise ImplicitResolutionFailure(name, "no implicit resolver installed")
            resolved = resolver(name, entry, ref.args, context)
            if resolved is None:
                raise ImplicitResolutionFailure(name)
            scope = context.names().union(*(free_vars(arg) for arg in args))
            if loose := free_vars(resolved) - scope:
                unbound = ", ".join(sorted(loose))
                raise ImplicitResolutionFailure(
                    name, f"resolved term mentions unbound name(s) {unbound}"
                )
            logger.debug("delta %s/%d: resolved implicit", name, len(args))
            return resolved, True

        case Definition(opaque=True):
            logger.debug("delta %s/%d: opaque definition", name, len(args))
            return ref, False

        case Definition(body=None):
            if policy.require_bodies:
                raise MissingBody(name)
            logger.debug("delta %s/%d: definition without body", name, len(args))
            return ref, False

        case Definition(params=params, body=body):
            logger.debug("delta %s/%d: unfold definition", name, len(args))
            return instantiate(params, body, args), True

        case Theorem(proof=None):
            raise MissingProof(name)

        case Theorem(params=params, proof=proof) if policy.unfold_theorems:
            logger.debug("delta %s/%d: unfold theorem", name, len(args))
            return instantiate(params, proof, args), True

        case Theorem() | Axiom():
            logger.debug(
                "delta %s/%d: %s stays opaque", name, len(args), type(entry).__name__
            )
            return ref, False

    raise UnsupportedTermShape(entry)


__all__ = ["delta", "instantiate"]
