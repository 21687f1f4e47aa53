"""Small-step beta/delta reduction by explicit substitution.

This reducer rewrites syntax directly and is independent of the evaluator
and quoter. It is slow but simple, which makes it a useful reference for
checking normal forms.
"""

from __future__ import annotations

from nbe.env.context import Context
from nbe.env.environment import Environment
from nbe.errors import UnsupportedTermShape
from nbe.reduce.delta import delta
from nbe.reduce.policy import DEFAULT_POLICY, ImplicitResolver, ReductionPolicy
from nbe.syntax.ast import App, Ascription, Binder, BinderKind, Ref, Sort, Term, Var
from nbe.syntax.names import subst


def beta_head_step(t: Term) -> Term:
    match t:
        case App(Binder(BinderKind.LAMBDA, x, _, body), arg):
            return subst(body, x, arg)
        case App(f, a):
            f1 = beta_head_step(f)
            if f1 != f:
                return App(f1, a)
            return t
        # don't go under binders, don't touch arguments further
        case _:
            return t


def delta_head_step(
    defs: Environment,
    context: Context,
    t: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> Term:
    match t:
        case Ref(name, args):
            replacement, unfold = delta(
                defs, context, name, args, policy=policy, resolver=resolver
            )
            return replacement if unfold else t
        case App(f, a):
            f1 = delta_head_step(defs, context, f, policy=policy, resolver=resolver)
            if f1 != f:
                return App(f1, a)
            return t
        case _:
            return t


def head_step(
    defs: Environment,
    context: Context,
    t: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> Term:
    """One small-step using beta or delta at the head."""
    t1 = beta_head_step(t)
    if t1 != t:
        return t1
    return delta_head_step(defs, context, t, policy=policy, resolver=resolver)


def normalize_step(
    defs: Environment,
    context: Context,
    term: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> Term:
    """One reduction step anywhere in the term.

    Prefer a head step; if none, recurse into subterms left to right.
    """

    def step(t: Term, ctx: Context = context) -> Term:
        return normalize_step(defs, ctx, t, policy=policy, resolver=resolver)

    # 1. Try a head step first
    t1 = head_step(defs, context, term, policy=policy, resolver=resolver)
    if t1 != term:
        return t1

    # 2. No head redex; search inside
    match term:
        case App(f, a):
            f1 = step(f)
            if f1 != f:
                return App(f1, a)
            a1 = step(a)
            if a1 != a:
                return App(f, a1)
            return term

        case Binder(kind, x, ty, body):
            ty1 = step(ty)
            if ty1 != ty:
                return Binder(kind, x, ty1, body)
            body1 = step(body, context.push(x, ty))
            if body1 != body:
                return Binder(kind, x, ty, body1)
            return term

        case Ref(name, args):
            for i, arg in enumerate(args):
                arg1 = step(arg)
                if arg1 != arg:
                    return Ref(name, (*args[:i], arg1, *args[i + 1 :]))
            return term

        case Ascription(t, ty):
            t1 = step(t)
            if t1 != t:
                return Ascription(t1, ty)
            ty1 = step(ty)
            if ty1 != ty:
                return Ascription(t, ty1)
            return term

        case Var() | Sort():
            return term

    raise UnsupportedTermShape(term)


def normalize(
    defs: Environment,
    context: Context,
    term: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> Term:
    """Normalize ``term`` by repeatedly reducing until no rules apply."""
    while True:
        t1 = normalize_step(defs, context, term, policy=policy, resolver=resolver)
        if t1 == term:
            return term
        term = t1


__all__ = [
    "beta_head_step",
    "delta_head_step",
    "head_step",
    "normalize",
    "normalize_step",
]
