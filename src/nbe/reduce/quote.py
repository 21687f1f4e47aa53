"""Reification of semantic values back into normal-form terms."""

from __future__ import annotations

from collections.abc import Collection

from nbe.errors import UnsupportedTermShape
from nbe.reduce.values import VApp, VAscription, VClosure, VRef, VSort, VVar, Value
from nbe.syntax.ast import App, Ascription, Binder, Ref, Term, Var
from nbe.syntax.names import fresh_name


def quote(value: Value, level: int = 0, avoid: Collection[str] = frozenset()) -> Term:
    """Read ``value`` back as a term, forcing every closure on the way.

    Args:
        value: Value to reify.
        level: Number of binders already reified above ``value``. Each closure
            mints its bound name from ``level`` and quotes its body at
            ``level + 1``, so nested binders never share a name.
        avoid: Names the minted binders must not take, typically the free
            variables of the term being normalized.
    """

    match value:
        case VVar(name):
            return Var(name)

        case VSort(sort):
            return sort

        case VClosure(kind=kind, name=name, domain=domain):
            fresh = fresh_name(name, level, avoid)
            ty = quote(domain, level, avoid)
            body = quote(value.force(VVar(fresh)), level + 1, avoid)
            return Binder(kind, fresh, ty, body)

        case VApp(f, a):
            return App(quote(f, level, avoid), quote(a, level, avoid))

        case VRef(name, args):
            return Ref(name, tuple(quote(arg, level, avoid) for arg in args))

        case VAscription(t, ty):
            return Ascription(quote(t, level, avoid), quote(ty, level, avoid))

    raise UnsupportedTermShape(value)


__all__ = ["quote"]
