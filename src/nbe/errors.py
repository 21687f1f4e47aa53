"""Errors raised while normalizing terms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class NormalizationError(Exception):
    """Base class for every failure surfaced by a ``normalize`` call."""


@dataclass
class UnknownDefinition(NormalizationError):
    name: str

    def __str__(self) -> str:
        return f"Unknown definition {self.name!r}"


@dataclass
class ArityMismatch(NormalizationError):
    name: str
    expected: int
    actual: int

    def __str__(self) -> str:
        return (
            f"Reference {self.name!r} takes at most {self.expected} "
            f"argument(s), got {self.actual}"
        )


@dataclass
class MissingBody(NormalizationError):
    name: str

    def __str__(self) -> str:
        return f"Definition {self.name!r} has no body to unfold"


@dataclass
class MissingProof(NormalizationError):
    name: str

    def __str__(self) -> str:
        return f"Theorem {self.name!r} has no proof attached"


@dataclass
class ImplicitResolutionFailure(NormalizationError):
    name: str
    reason: str = "resolver produced no term"

    def __str__(self) -> str:
        return f"Cannot resolve implicit {self.name!r}: {self.reason}"


@dataclass
class UnsupportedTermShape(NormalizationError):
    """A term or value matched none of the known node types."""

    node: Any

    def __str__(self) -> str:
        return f"Unsupported term shape: {self.node!r}"


__all__ = [
    "ArityMismatch",
    "ImplicitResolutionFailure",
    "MissingBody",
    "MissingProof",
    "NormalizationError",
    "UnknownDefinition",
    "UnsupportedTermShape",
]
