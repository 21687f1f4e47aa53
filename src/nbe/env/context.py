from __future__ import annotations

from dataclasses import dataclass

from nbe.syntax.ast import Term


@dataclass(frozen=True)
class Entry:
    """Single context entry: a bound name and its declared type."""

    name: str
    ty: Term


@dataclass(frozen=True)
class Context:
    """
    Typing context for named terms.

    Entries are stored innermost first, so ``lookup`` finds the nearest
    binder when names are shadowed. Extension never rewrites existing
    entries.
    """

    entries: tuple[Entry, ...] = ()

    def push(self, name: str, ty: Term) -> Context:
        return Context((Entry(name, ty), *self.entries))

    def push_all(self, *binders: tuple[str, Term]) -> Context:
        """Push binders ordered outermost -> innermost."""
        ctx = self
        for name, ty in binders:
            ctx = ctx.push(name, ty)
        return ctx

    def lookup(self, name: str) -> Term | None:
        for entry in self.entries:
            if entry.name == name:
                return entry.ty
        return None

    def names(self) -> frozenset[str]:
        return frozenset(entry.name for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        if len(self.entries) < 2:
            return f"Context{self.entries}"
        return f"Context(\n{"".join([f"  {e.name}: {e.ty}\n" for e in self.entries])})"


__all__ = ["Context", "Entry"]
