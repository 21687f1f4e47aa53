"""Pretty-printing utilities for kernel terms."""

from __future__ import annotations

from nbe.errors import UnsupportedTermShape
from nbe.syntax.ast import KIND, TYPE, App, Ascription, Binder, Ref, Sort, Term, Var

ATOM_PREC = 2
APP_PREC = 1
BINDER_PREC = 0

SORT_SYMBOLS = {TYPE: "✳", KIND: "□"}


def _maybe_paren(
    text: str, child_prec: int, parent_prec: int, *, allow_equal: bool
) -> str:
    if child_prec < parent_prec or (child_prec == parent_prec and not allow_equal):
        return f"({text})"
    return text


def pretty(term: Term) -> str:
    """Render ``term`` in the notation read by :func:`nbe.syntax.parse.parse_term`."""

    def fmt(t: Term) -> tuple[str, int]:
        match t:
            case Var(name):
                return name, ATOM_PREC

            case Sort(kind):
                return SORT_SYMBOLS[kind], ATOM_PREC

            case Binder(kind, name, ty, body):
                ty_text, _ = fmt(ty)
                body_text, _ = fmt(body)
                return f"{kind.value}[{name}:{ty_text}].{body_text}", BINDER_PREC

            case App(f, a):
                func_text, func_prec = fmt(f)
                arg_text, arg_prec = fmt(a)
                func_disp = _maybe_paren(
                    func_text, func_prec, APP_PREC, allow_equal=True
                )
                arg_disp = _maybe_paren(arg_text, arg_prec, APP_PREC, allow_equal=False)
                return f"{func_disp} {arg_disp}", APP_PREC

            case Ref(name, ()):
                return f"@{name}", ATOM_PREC

            case Ref(name, args):
                args_text = ", ".join(fmt(arg)[0] for arg in args)
                return f"@{name}({args_text})", ATOM_PREC

            case Ascription(inner, ty):
                return f"({fmt(inner)[0]} : {fmt(ty)[0]})", ATOM_PREC

        raise UnsupportedTermShape(t)

    return fmt(term)[0]


__all__ = ["pretty"]
