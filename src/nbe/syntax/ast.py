"""Abstract syntax tree nodes for the λ/Π kernel calculus."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

TYPE = "Type"
KIND = "Kind"


class BinderKind(Enum):
    LAMBDA = "λ"
    PI = "Π"


@dataclass(frozen=True)
class Var:
    """A named variable, free or bound by an enclosing :class:`Binder`."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable names must be non-empty")


@dataclass(frozen=True)
class Sort:
    """A universe marker (``✳`` for Type, ``□`` for Kind)."""

    kind: str = TYPE

    def __post_init__(self) -> None:
        if self.kind not in (TYPE, KIND):
            raise ValueError(f"Unknown sort {self.kind!r}")


@dataclass(frozen=True)
class Binder:
    """A lambda abstraction or dependent function type.

    Args:
        kind: ``LAMBDA`` for value-level functions, ``PI`` for function types.
        name: Name bound inside ``body``.
        ty: Domain type of the bound variable.
        body: Term in which ``name`` is in scope.
    """

    kind: BinderKind
    name: str
    ty: Term
    body: Term


@dataclass(frozen=True)
class App:
    """Function application."""

    func: Term
    arg: Term


@dataclass(frozen=True)
class Ref:
    """Reference to a global definition, theorem, axiom or implicit.

    Args:
        name: Name looked up in the definitional environment.
        args: Arguments supplied so far, in parameter order. May be fewer
            than the declared arity but never more.
    """

    name: str
    args: tuple[Term, ...] = ()


@dataclass(frozen=True)
class Ascription:
    """A term paired with its declared type."""

    term: Term
    ty: Term


type Term = Var | Sort | Binder | App | Ref | Ascription


def lam(name: str, ty: Term, body: Term) -> Binder:
    return Binder(BinderKind.LAMBDA, name, ty, body)


def pi(name: str, ty: Term, body: Term) -> Binder:
    return Binder(BinderKind.PI, name, ty, body)


__all__ = [
    "KIND",
    "TYPE",
    "App",
    "Ascription",
    "Binder",
    "BinderKind",
    "Ref",
    "Sort",
    "Term",
    "Var",
    "lam",
    "pi",
]
