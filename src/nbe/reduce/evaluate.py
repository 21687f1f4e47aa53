"""Evaluation of terms into semantic values."""

from __future__ import annotations

from nbe.env.context import Context
from nbe.env.environment import Environment
from nbe.errors import UnsupportedTermShape
from nbe.reduce.delta import delta
from nbe.reduce.policy import DEFAULT_POLICY, ImplicitResolver, ReductionPolicy
from nbe.reduce.values import (
    Bindings,
    VApp,
    VAscription,
    VClosure,
    VRef,
    VSort,
    VVar,
    Value,
)
from nbe.syntax.ast import App, Ascription, Binder, BinderKind, Ref, Sort, Term, Var


def apply_value(func: Value, arg: Value) -> Value:
    """Beta-reduce when ``func`` is a lambda closure, otherwise get stuck."""

    match func:
        case VClosure(kind=BinderKind.LAMBDA):
            return func.force(arg)
        case _:
            return VApp(func, arg)


def evaluate(
    defs: Environment,
    context: Context,
    bindings: Bindings,
    term: Term,
    *,
    policy: ReductionPolicy = DEFAULT_POLICY,
    resolver: ImplicitResolver | None = None,
) -> Value:
    """Evaluate ``term`` with the bound names in ``bindings`` substituted.

    Applications of lambdas are reduced eagerly and references are unfolded
    according to ``policy``. Binder bodies are not evaluated; they are
    captured in a :class:`VClosure` and evaluated when forced.
    """

    def ev(t: Term) -> Value:
        return evaluate(defs, context, bindings, t, policy=policy, resolver=resolver)

    match term:
        case Var(name):
            value = bindings.get(name)
            return VVar(name) if value is None else value

        case Sort():
            return VSort(term)

        case Binder(kind, name, ty, body):
            return VClosure(
                kind,
                name,
                ev(ty),
                ty,
                body,
                context,
                bindings,
                defs,
                policy,
                resolver,
            )

        case App(f, a):
            return apply_value(ev(f), ev(a))

        case Ref(name, args):
            replacement, unfold = delta(
                defs, context, name, args, policy=policy, resolver=resolver
            )
            if unfold:
                return ev(replacement)
            return VRef(name, tuple(ev(arg) for arg in args))

        case Ascription(t, ty):
            return VAscription(ev(t), ev(ty))

    raise UnsupportedTermShape(term)


__all__ = ["apply_value", "evaluate"]
