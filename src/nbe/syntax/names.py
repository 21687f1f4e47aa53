"""Name handling for named terms: free variables, freshness, substitution, alpha."""

from __future__ import annotations

from collections.abc import Collection, Mapping

from nbe.errors import UnsupportedTermShape
from nbe.syntax.ast import App, Ascription, Binder, Ref, Sort, Term, Var


def free_vars(term: Term) -> frozenset[str]:
    """Return the names occurring free in ``term``."""

    match term:
        case Var(name):
            return frozenset((name,))
        case Sort():
            return frozenset()
        case Binder(_, name, ty, body):
            return free_vars(ty) | (free_vars(body) - {name})
        case App(f, a):
            return free_vars(f) | free_vars(a)
        case Ref(_, args):
            return frozenset().union(*(free_vars(arg) for arg in args))
        case Ascription(t, ty):
            return free_vars(t) | free_vars(ty)
    raise UnsupportedTermShape(term)


def _stem(name: str) -> str:
    stem = name.rstrip("'").rstrip("0123456789")
    return stem or "x"


def fresh_name(base: str, level: int, avoid: Collection[str] = ()) -> str:
    """Mint the bound name used for a binder reified at ``level``.

    The result is ``base`` with any trailing digits and primes replaced by
    ``level``, so names minted at distinct levels never coincide. Primes are
    appended while the candidate is in ``avoid``.
    """

    candidate = f"{_stem(base)}{level}"
    while candidate in avoid:
        candidate += "'"
    return candidate


def fresh_variant(base: str, avoid: Collection[str]) -> str:
    """Return ``base`` primed until it no longer appears in ``avoid``."""

    candidate = base
    while candidate in avoid:
        candidate += "'"
    return candidate


def subst(term: Term, name: str, replacement: Term) -> Term:
    """Capture-avoiding substitution of ``replacement`` for free ``name``."""

    match term:
        case Var(v):
            return replacement if v == name else term
        case Sort():
            return term
        case Binder(kind, x, ty, body):
            ty1 = subst(ty, name, replacement)
            if x == name:
                return Binder(kind, x, ty1, body)
            body_fvs = free_vars(body)
            if name not in body_fvs:
                return Binder(kind, x, ty1, body)
            repl_fvs = free_vars(replacement)
            if x in repl_fvs:
                x1 = fresh_variant(x, repl_fvs | body_fvs | {name})
                body = subst(body, x, Var(x1))
                x = x1
            return Binder(kind, x, ty1, subst(body, name, replacement))
        case App(f, a):
            return App(subst(f, name, replacement), subst(a, name, replacement))
        case Ref(ref_name, args):
            return Ref(ref_name, tuple(subst(arg, name, replacement) for arg in args))
        case Ascription(t, ty):
            return Ascription(subst(t, name, replacement), subst(ty, name, replacement))
    raise UnsupportedTermShape(term)


def _alpha(
    left: Term,
    right: Term,
    lenv: Mapping[str, int],
    renv: Mapping[str, int],
    depth: int,
) -> bool:
    match left, right:
        case Var(a), Var(b):
            la, rb = lenv.get(a), renv.get(b)
            if la is None and rb is None:
                return a == b
            return la == rb
        case Sort(k1), Sort(k2):
            return k1 == k2
        case Binder(k1, x, ty1, body1), Binder(k2, y, ty2, body2):
            return (
                k1 is k2
                and _alpha(ty1, ty2, lenv, renv, depth)
                and _alpha(
                    body1, body2, {**lenv, x: depth}, {**renv, y: depth}, depth + 1
                )
            )
        case App(f1, a1), App(f2, a2):
            return _alpha(f1, f2, lenv, renv, depth) and _alpha(
                a1, a2, lenv, renv, depth
            )
        case Ref(n1, args1), Ref(n2, args2):
            return (
                n1 == n2
                and len(args1) == len(args2)
                and all(
                    _alpha(a, b, lenv, renv, depth)
                    for a, b in zip(args1, args2, strict=True)
                )
            )
        case Ascription(t1, ty1), Ascription(t2, ty2):
            return _alpha(t1, t2, lenv, renv, depth) and _alpha(
                ty1, ty2, lenv, renv, depth
            )
        case _:
            return False


def alpha_equiv(left: Term, right: Term) -> bool:
    """Return ``True`` if the terms differ at most in their bound names."""

    return _alpha(left, right, {}, {}, 0)


def bound_names(term: Term) -> frozenset[str]:
    """Return every name introduced by a binder anywhere in ``term``."""

    match term:
        case Binder(_, name, ty, body):
            return frozenset((name,)) | bound_names(ty) | bound_names(body)
        case App(f, a):
            return bound_names(f) | bound_names(a)
        case Ref(_, args):
            return frozenset().union(*(bound_names(arg) for arg in args))
        case Ascription(t, ty):
            return bound_names(t) | bound_names(ty)
        case _:
            return frozenset()


__all__ = [
    "alpha_equiv",
    "bound_names",
    "free_vars",
    "fresh_name",
    "fresh_variant",
    "subst",
]
