"""Global definitional environment: definitions, theorems, axioms and implicits."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, TypeIs

from nbe.syntax.ast import Term
from nbe.syntax.names import free_vars


@dataclass(frozen=True)
class Param:
    """A named parameter of a global declaration."""

    name: str
    ty: Term


@dataclass(frozen=True)
class GlobalEntry:
    """
    A top-level declaration.

    - params: parameter telescope, outermost first; its length is the arity
    - ty: type of the declaration under ``params``
    """

    params: tuple[Param, ...]
    ty: Term

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class Definition(GlobalEntry):
    body: Term | None = None
    opaque: bool = False


@dataclass(frozen=True)
class Theorem(GlobalEntry):
    proof: Term | None = None


@dataclass(frozen=True)
class Axiom(GlobalEntry):
    pass


@dataclass(frozen=True)
class Implicit(GlobalEntry):
    """A placeholder resolved by an elaboration-time resolver.

    ``payload`` is opaque to the kernel and handed back to the resolver.
    """

    payload: Any = None


type DefinitionEntry = Definition | Theorem | Axiom | Implicit


def is_definition(entry: GlobalEntry) -> TypeIs[Definition]:
    return isinstance(entry, Definition)


def is_theorem(entry: GlobalEntry) -> TypeIs[Theorem]:
    return isinstance(entry, Theorem)


def is_axiom(entry: GlobalEntry) -> TypeIs[Axiom]:
    return isinstance(entry, Axiom)


def is_implicit(entry: GlobalEntry) -> TypeIs[Implicit]:
    return isinstance(entry, Implicit)


def _params(params: Iterable[Param | tuple[str, Term]]) -> tuple[Param, ...]:
    return tuple(p if isinstance(p, Param) else Param(*p) for p in params)


def _check_closed(name: str, params: tuple[Param, ...], body: Term | None) -> None:
    """Bodies are unfolded in the caller's scope and must be closed over ``params``."""
    scope: set[str] = set()
    for param in params:
        loose = free_vars(param.ty) - scope
        if loose:
            raise ValueError(
                f"Parameter {param.name!r} of {name!r} mentions unbound "
                f"name(s) {', '.join(sorted(loose))}"
            )
        scope.add(param.name)
    if body is not None and (loose := free_vars(body) - scope):
        raise ValueError(
            f"Body of {name!r} mentions unbound name(s) "
            f"{', '.join(sorted(loose))}"
        )


@dataclass(frozen=True)
class Environment:
    """
    Read-only store of global declarations keyed by name.

    Builders such as :meth:`define` never mutate ``self``; they return a new
    environment sharing the existing entries.
    """

    entries: MappingProxyType[str, DefinitionEntry] = MappingProxyType({})

    def fetch(self, name: str) -> DefinitionEntry | None:
        return self.entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def names(self) -> tuple[str, ...]:
        return tuple(self.entries)

    # ---- extending the environment ----
    def extend(self, name: str, entry: DefinitionEntry) -> Environment:
        if name in self.entries:
            raise ValueError(f"Duplicate declaration {name!r}")
        match entry:
            case Definition(params=params, body=body):
                _check_closed(name, params, body)
            case Theorem(params=params, proof=proof):
                _check_closed(name, params, proof)
        return replace(self, entries=MappingProxyType({**self.entries, name: entry}))

    def define(
        self,
        name: str,
        ty: Term,
        body: Term | None,
        params: Iterable[Param | tuple[str, Term]] = (),
        *,
        opaque: bool = False,
    ) -> Environment:
        return self.extend(name, Definition(_params(params), ty, body, opaque))

    def theorem(
        self,
        name: str,
        ty: Term,
        proof: Term | None,
        params: Iterable[Param | tuple[str, Term]] = (),
    ) -> Environment:
        return self.extend(name, Theorem(_params(params), ty, proof))

    def axiom(
        self,
        name: str,
        ty: Term,
        params: Iterable[Param | tuple[str, Term]] = (),
    ) -> Environment:
        return self.extend(name, Axiom(_params(params), ty))

    def implicit(
        self,
        name: str,
        ty: Term,
        params: Iterable[Param | tuple[str, Term]] = (),
        payload: Any = None,
    ) -> Environment:
        return self.extend(name, Implicit(_params(params), ty, payload))

    def __str__(self) -> str:
        if not self.entries:
            return "Environment()"
        lines = "".join(
            f"  {name}: {type(entry).__name__}/{entry.arity}\n"
            for name, entry in self.entries.items()
        )
        return f"Environment(\n{lines})"


__all__ = [
    "Axiom",
    "Definition",
    "DefinitionEntry",
    "Environment",
    "GlobalEntry",
    "Implicit",
    "Param",
    "Theorem",
    "is_axiom",
    "is_definition",
    "is_implicit",
    "is_theorem",
]
