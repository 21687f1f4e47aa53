from __future__ import annotations

from collections.abc import Sequence

from nbe.syntax.ast import App, Term, lam


def apply_term(term: Term, *args: Term) -> Term:
    """Apply ``args`` to ``term`` left-associatively.

    Args:
        term: Function being applied.
        *args: Arguments to apply, ordered left-to-right.

    Returns:
        The left-associated application ``(((term arg0) arg1) ...)``.
    """
    result: Term = term
    for arg in args:
        result = App(result, arg)
    return result


def nested_lam(params: Sequence[tuple[str, Term]], body: Term) -> Term:
    """Build a right-nested lambda chain over ``params`` ending in ``body``.

    The first element of ``params`` becomes the outermost binder, so applying
    the result to arguments in parameter order instantiates them in order.
    """
    result: Term = body
    for name, ty in reversed(params):
        result = lam(name, ty, result)
    return result


__all__ = [
    "apply_term",
    "nested_lam",
]
