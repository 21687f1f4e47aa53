"""Full normalization by evaluation followed by quotation."""

from __future__ import annotations

import logging

from nbe.env.context import Context
from nbe.env.environment import Environment
from nbe.reduce.evaluate import evaluate
from nbe.reduce.policy import DEFAULT_POLICY, ImplicitResolver, ReductionPolicy
from nbe.reduce.quote import quote
from nbe.reduce.values import EMPTY_BINDINGS
from nbe.syntax.ast import Term
from nbe.syntax.names import alpha_equiv, free_vars
from nbe.syntax.pretty import pretty

logger = logging.getLogger(__name__)


def normalize(
    defs: Environment,
    context: Context,
    term: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> Term:
    """Return the beta/delta normal form of ``term``.

    Bound names in the result are minted afresh; compare results with
    :func:`~nbe.syntax.names.alpha_equiv` rather than ``==``.
    """

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("normalize %s", pretty(term))
    value = evaluate(
        defs, context, EMPTY_BINDINGS, term, policy=policy, resolver=resolver
    )
    return quote(value, avoid=free_vars(term) | context.names())


def convertible(
    defs: Environment,
    context: Context,
    left: Term,
    right: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> bool:
    """Decide definitional equality by comparing normal forms up to alpha."""

    return alpha_equiv(
        normalize(defs, context, left, policy=policy, resolver=resolver),
        normalize(defs, context, right, policy=policy, resolver=resolver),
    )


__all__ = ["convertible", "normalize"]
