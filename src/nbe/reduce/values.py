"""Semantic values produced by evaluation and consumed by quotation.

Values live only for the duration of one ``normalize`` call. Every binder
becomes a :class:`VClosure` that owns the scope it was evaluated in; its body
is evaluated only when the closure is forced.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from nbe.env.context import Context
from nbe.env.environment import Environment
from nbe.reduce.policy import ImplicitResolver, ReductionPolicy
from nbe.syntax.ast import BinderKind, Sort, Term


@dataclass(frozen=True)
class VVar:
    """A neutral variable: free, or a binder's fresh placeholder."""

    name: str


@dataclass(frozen=True)
class VSort:
    sort: Sort


@dataclass(frozen=True, eq=False)
class VClosure:
    """A binder whose body evaluation is deferred until :meth:`force`.

    Args:
        kind: ``LAMBDA`` or ``PI``.
        name: Source name of the bound variable.
        domain: Evaluated domain type.
        ty: Domain type as written, recorded in the typing context on force.
        body: Unevaluated body.
        context: Typing context at the binder.
        bindings: Evaluation environment captured at the binder.
    """

    kind: BinderKind
    name: str
    domain: Value
    ty: Term = field(repr=False)
    body: Term = field(repr=False)
    context: Context = field(repr=False)
    bindings: Bindings = field(repr=False)
    defs: Environment = field(repr=False)
    policy: ReductionPolicy = field(repr=False)
    resolver: ImplicitResolver | None = field(repr=False)

    def force(self, arg: Value) -> Value:
        """Bind ``arg`` to the bound name and evaluate the body."""
        from nbe.reduce.evaluate import evaluate

        return evaluate(
            self.defs,
            self.context.push(self.name, self.ty),
            extend(self.bindings, self.name, arg),
            self.body,
            policy=self.policy,
            resolver=self.resolver,
        )


@dataclass(frozen=True)
class VApp:
    """A stuck application whose head cannot reduce."""

    func: Value
    arg: Value


@dataclass(frozen=True)
class VRef:
    """A global reference that delta-reduction left opaque."""

    name: str
    args: tuple[Value, ...] = ()


@dataclass(frozen=True)
class VAscription:
    term: Value
    ty: Value


type Value = VVar | VSort | VClosure | VApp | VRef | VAscription

type Bindings = Mapping[str, Value]

EMPTY_BINDINGS: Bindings = MappingProxyType({})


def extend(bindings: Bindings, name: str, value: Value) -> Bindings:
    """Return a copy of ``bindings`` with ``name`` bound to ``value``."""
    return MappingProxyType({**bindings, name: value})


__all__ = [
    "EMPTY_BINDINGS",
    "Bindings",
    "VApp",
    "VAscription",
    "VClosure",
    "VRef",
    "VSort",
    "VVar",
    "Value",
    "extend",
]
